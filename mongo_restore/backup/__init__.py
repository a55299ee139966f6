"""Backup restore pipeline: value normalization and collection restore."""

from .normalizer import normalize, is_date_string
from .restorer import Restorer, restore_backup
from .models import CollectionResult, RestoreReport

__all__ = [
    "normalize",
    "is_date_string",
    "Restorer",
    "restore_backup",
    "CollectionResult",
    "RestoreReport",
]
