"""
Persistence for arbsync.

Only the translation source cache lives here; bundles themselves are read
and written by arbsync.core.bundle.
"""

from arbsync.storage.cache import ArbCache, CACHE_FILE

__all__ = [
    "ArbCache",
    "CACHE_FILE",
]
