"""
Django Admin configuration for the converter app.
"""

from django.contrib import admin
from django.utils.html import format_html

from apps.converter.client.response_cache import ResponseCache
from apps.converter.infrastructure.persistence.models import CachedResponse


@admin.register(CachedResponse)
class CachedResponseAdmin(admin.ModelAdmin):
    """Admin interface for memoized API responses."""

    list_display = ('identity', 'url', 'saved_at', 'get_status')
    search_fields = ('identity', 'url')
    readonly_fields = ('identity_hash', 'identity', 'url', 'request_body', 'response_payload', 'saved_at')
    ordering = ('-saved_at',)
    actions = ['purge_expired']

    fieldsets = (
        ('Request', {
            'fields': ('identity', 'url', 'request_body')
        }),
        ('Response', {
            'fields': ('response_payload', 'saved_at')
        }),
        ('Metadata', {
            'fields': ('identity_hash',),
            'classes': ('collapse',)
        }),
    )

    def has_add_permission(self, request):
        return False

    def get_status(self, obj):
        """Display expiry status with colored indicator."""
        if ResponseCache.from_settings().is_expired(obj):
            return format_html('<span style="color: red;">○ Expired</span>')
        return format_html('<span style="color: green; font-weight: bold;">● Fresh</span>')
    get_status.short_description = 'Status'

    @admin.action(description='Purge all expired responses')
    def purge_expired(self, request, queryset):
        """Bulk action to drop every expired entry, regardless of selection."""
        deleted = ResponseCache.from_settings().purge_expired()
        self.message_user(
            request,
            f'{deleted} expired response(s) purged.'
        )
