"""
Django discovers app models through this module; the definitions live in the
persistence layer.
"""

from apps.converter.infrastructure.persistence.models import CachedResponse

__all__ = ["CachedResponse"]
