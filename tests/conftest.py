"""Shared fixtures: synthesized save files."""

import os

import pytest

from malk.constants import SAVE_MAGIC, SAVE_MAX_SIZE


def make_save_bytes(size: int = SAVE_MAX_SIZE) -> bytearray:
    """Build a save buffer with known field values and patterned filler."""
    data = bytearray((i * 7 + 3) & 0xFF for i in range(size))
    data[0] = SAVE_MAGIC
    data[1:3] = (2003).to_bytes(2, 'big')
    data[4] = 9        # month
    data[5] = 16       # day
    data[6] = 13       # hour
    data[7] = 37       # minute
    data[8] = 5        # second
    data[601] = 42     # gags
    data[4373] = 3     # last level played -> 4
    data[4377] = 0     # last mission -> 1
    data[4381] = 5     # last level unlocked -> 6
    data[4393:4396] = (123456).to_bytes(3, 'little')
    for lvl in range(7):
        data[7187 + lvl] = lvl * 16 + 1
    return data


@pytest.fixture
def sample_save_bytes():
    return bytes(make_save_bytes())


@pytest.fixture
def tmp_dir(tmp_path):
    return str(tmp_path)


@pytest.fixture
def sample_save_file(tmp_dir, sample_save_bytes):
    path = os.path.join(tmp_dir, 'slot1.sav')
    with open(path, 'wb') as f:
        f.write(sample_save_bytes)
    return path
