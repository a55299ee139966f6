from .backup.normalizer import normalize, is_date_string
from .backup.restorer import Restorer, restore_backup
from .backup.models import CollectionResult, RestoreReport
from .config import RestoreConfig, ConnectionConfig

__version__ = "0.2.0"
__author__ = "mongo-backup-restore contributors"
__url__ = "https://github.com/mongo-backup-restore/mongo-backup-restore"

__all__ = [
    "normalize",
    "is_date_string",
    "Restorer",
    "restore_backup",
    "CollectionResult",
    "RestoreReport",
    "RestoreConfig",
    "ConnectionConfig",
]
