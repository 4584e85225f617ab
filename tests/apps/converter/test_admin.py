import pytest
from datetime import timedelta
from unittest.mock import MagicMock

from django.contrib import admin
from django.utils import timezone

from apps.converter.admin import CachedResponseAdmin
from apps.converter.infrastructure.persistence.models import CachedResponse
from apps.converter.infrastructure.persistence.repositories import CachedResponseRepository


@pytest.fixture
def model_admin():
    return CachedResponseAdmin(CachedResponse, admin.site)


@pytest.mark.django_db(transaction=True)
class TestCachedResponseAdmin:

    def setup_method(self):
        """Clean up before each test."""
        CachedResponse.objects.all().delete()

    def test_registered(self):
        assert isinstance(admin.site._registry[CachedResponse], CachedResponseAdmin)

    def test_status_column(self, model_admin, settings):
        settings.RESPONSE_CACHE_TTL_SECONDS = 3600
        fresh = CachedResponseRepository.save("fresh", {}, saved_at=timezone.now())
        stale = CachedResponseRepository.save("stale", {}, saved_at=timezone.now() - timedelta(hours=2))

        assert "Fresh" in model_admin.get_status(fresh)
        assert "Expired" in model_admin.get_status(stale)

    def test_purge_expired_action(self, model_admin, settings):
        settings.RESPONSE_CACHE_TTL_SECONDS = 3600
        CachedResponseRepository.save("stale", {}, saved_at=timezone.now() - timedelta(hours=2))
        CachedResponseRepository.save("fresh", {}, saved_at=timezone.now())
        model_admin.message_user = MagicMock()

        model_admin.purge_expired(MagicMock(), CachedResponse.objects.none())

        assert list(CachedResponse.objects.values_list("identity", flat=True)) == ["fresh"]
        model_admin.message_user.assert_called_once()

    def test_add_disabled(self, model_admin):
        assert model_admin.has_add_permission(MagicMock()) is False
