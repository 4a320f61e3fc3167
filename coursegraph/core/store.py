import threading
from dataclasses import dataclass, field
from functools import lru_cache

from coursegraph.core.config import get_settings
from coursegraph.services.catalog import CourseCatalog


@dataclass
class CatalogStore:
    """Process-wide catalog plus the lock every request holds while using it."""

    catalog: CourseCatalog
    lock: threading.RLock = field(default_factory=threading.RLock)


@lru_cache
def get_store() -> CatalogStore:
    settings = get_settings()
    return CatalogStore(
        catalog=CourseCatalog(
            duplicate_policy=settings.duplicate_policy,
            max_id_length=settings.max_id_length,
        )
    )
