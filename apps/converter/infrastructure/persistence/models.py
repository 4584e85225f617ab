"""
Django ORM models for persistence.
Infrastructure layer - technical storage detail.
"""

from django.db import models


class CachedResponse(models.Model):
    """
    One memoized API response, keyed by request identity.

    The identity can be long (URL plus serialized request body), so its
    sha256 digest is the primary key.
    """

    identity_hash = models.CharField(max_length=64, primary_key=True)
    identity = models.TextField()
    url = models.TextField(blank=True, default="")
    request_body = models.JSONField(null=True, blank=True)
    response_payload = models.JSONField()
    saved_at = models.DateTimeField(db_index=True)

    class Meta:
        ordering = ["-saved_at"]
        verbose_name = "cached response"

    def __str__(self):
        return f"{self.identity} | {self.saved_at:%Y-%m-%d %H:%M:%S}"
