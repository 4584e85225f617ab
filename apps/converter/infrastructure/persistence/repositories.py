"""
Repository pattern implementation.
Abstracts database access to decouple caching logic from persistence.
"""

import hashlib
from datetime import datetime
from typing import Any, List, Optional

from apps.converter.infrastructure.persistence.models import CachedResponse


def hash_identity(identity: str) -> str:
    return hashlib.sha256(identity.encode("utf-8")).hexdigest()


class CachedResponseRepository:
    """Repository for CachedResponse entries."""

    @staticmethod
    def get(identity: str) -> Optional[CachedResponse]:
        """Get the entry stored for an identity."""
        return CachedResponse.objects.filter(identity_hash=hash_identity(identity)).first()

    @staticmethod
    def save(
        identity: str,
        response_payload: Any,
        saved_at: datetime,
        url: str = "",
        request_body: Any = None,
    ) -> CachedResponse:
        """Create or overwrite the entry for an identity."""
        entry, _ = CachedResponse.objects.update_or_create(
            identity_hash=hash_identity(identity),
            defaults={
                "identity": identity,
                "url": url,
                "request_body": request_body,
                "response_payload": response_payload,
                "saved_at": saved_at,
            },
        )
        return entry

    @staticmethod
    def delete_if_saved_at(identity: str, saved_at: datetime) -> int:
        """Delete the entry for an identity only if it has not been rewritten since saved_at."""
        deleted, _ = CachedResponse.objects.filter(
            identity_hash=hash_identity(identity),
            saved_at=saved_at,
        ).delete()
        return deleted

    @staticmethod
    def delete_saved_before(cutoff: datetime) -> int:
        """Delete entries saved before the cutoff."""
        deleted, _ = CachedResponse.objects.filter(saved_at__lt=cutoff).delete()
        return deleted

    @staticmethod
    def delete_all() -> int:
        deleted, _ = CachedResponse.objects.all().delete()
        return deleted

    @staticmethod
    def count() -> int:
        return CachedResponse.objects.count()

    @staticmethod
    def get_all() -> List[CachedResponse]:
        return list(CachedResponse.objects.all())
