from __future__ import annotations

from django.core.exceptions import ImproperlyConfigured

from .base import (
    DrawData,
    DrawRecord,
    DrawStorage,
    ModelData,
    ModelNotFoundError,
    ModelRecord,
    PredictionData,
    PredictionRecord,
    StorageError,
    logger,
    recomputed_accuracy,
)
from .memory import MemoryStorage

__all__ = [
    'BACKENDS',
    'DrawData',
    'DrawRecord',
    'DrawStorage',
    'MemoryStorage',
    'ModelData',
    'ModelNotFoundError',
    'ModelRecord',
    'PredictionData',
    'PredictionRecord',
    'StorageError',
    'build_storage',
    'recomputed_accuracy',
]


def _database_storage() -> DrawStorage:
    # Imported lazily: the ORM models need the app registry to be ready.
    from .database import DatabaseStorage

    return DatabaseStorage()


BACKENDS = {
    'memory': MemoryStorage,
    'database': _database_storage,
}


def build_storage(backend: str) -> DrawStorage:
    factory = BACKENDS.get(backend)
    if factory is None:
        raise ImproperlyConfigured(
            f"Unknown EUROMILLIONS_STORAGE backend {backend!r}; expected one of {sorted(BACKENDS)}"
        )
    storage = factory()
    logger.info('Using %s storage backend', storage.name)
    return storage
