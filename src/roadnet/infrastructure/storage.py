"""
File persistence for road networks.

This module provides an asynchronous storage facade over the text codec. It
handles:
- Reading and writing network files with aiofiles
- Optional backup of the previous file before each save
- Reporting I/O failures as StorageError, distinct from an empty network
"""

import logging
import os
import shutil
from typing import Collection, Optional, Tuple

import aiofiles

from ..core.exceptions import StorageError
from ..core.exclusions import ExclusionSet, Pair
from ..core.graph import Graph
from ..core.serialization import TextGraphCodec

logger = logging.getLogger(__name__)


def backup_file(file_path: str) -> Optional[str]:
    """
    Create a backup copy of a file next to it.

    Args:
        file_path (str): Path to the file to backup.

    Returns:
        Optional[str]: Path of the backup, None if there was nothing to copy.

    Raises:
        StorageError: If backup creation fails.
    """
    if not os.path.exists(file_path):
        return None

    backup_path = f"{file_path}.bak"
    try:
        shutil.copy2(file_path, backup_path)
    except OSError as e:
        raise StorageError(f"Failed to create backup file: {e}")
    return backup_path


class NetworkStorage:
    """
    Asynchronous load/save of one network file.

    Attributes:
        path (str): Location of the network file
        codec (TextGraphCodec): Encoder/decoder for the file contents
        create_backup (bool): Whether to copy the old file to ``<path>.bak`` before saving
    """

    def __init__(
        self,
        path: str,
        codec: Optional[TextGraphCodec] = None,
        create_backup: bool = True,
    ):
        self.path = path
        self.codec = codec if codec is not None else TextGraphCodec()
        self.create_backup = create_backup

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    async def load(self) -> Tuple[Graph, ExclusionSet]:
        """
        Load the network and its blocked pairs.

        Raises:
            StorageError: If the file is missing or cannot be read
        """
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to load network from {self.path}: {str(e)}")
            raise StorageError(f"Network loading failed: {str(e)}")

        graph, blocked = self.codec.decode(content)
        logger.info(f"Loaded {len(graph)} nodes from {self.path}")
        return graph, blocked

    async def save(self, graph: Graph, excluded: Optional[Collection[Pair]] = None) -> None:
        """
        Save the network and its blocked pairs.

        Raises:
            StorageError: If the backup or the write fails
            ValueError: If the network holds keys or labels the format cannot carry
        """
        content = self.codec.encode(graph, excluded)

        if self.create_backup:
            backup_file(self.path)

        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            async with aiofiles.open(self.path, "w", encoding="utf-8", newline="\n") as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"Failed to persist network to {self.path}: {str(e)}")
            raise StorageError(f"Network persistence failed: {str(e)}")

        logger.debug(f"Persisted {len(graph)} nodes to {self.path}")
