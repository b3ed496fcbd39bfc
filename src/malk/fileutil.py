"""File helpers for the command-line tools."""

import os
import shutil

from .codec import OversizedFileError
from .constants import SAVE_MAX_SIZE


def read_save_file(path: str) -> bytes:
    """Read a save file, refusing anything larger than the format allows."""
    size = os.path.getsize(path)
    if size > SAVE_MAX_SIZE:
        raise OversizedFileError(size)
    with open(path, 'rb') as f:
        return f.read(SAVE_MAX_SIZE + 1)


def write_save_file(path: str, data: bytes) -> None:
    with open(path, 'wb') as f:
        f.write(data)


def backup_file(path: str) -> str:
    """Copy path to path.bak and return the backup path."""
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    bak_path = path + '.bak'
    shutil.copy2(path, bak_path)
    return bak_path
