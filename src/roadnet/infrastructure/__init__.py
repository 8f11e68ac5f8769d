"""Infrastructure components: file persistence."""

from .storage import NetworkStorage, backup_file

__all__ = ["NetworkStorage", "backup_file"]
