"""Shared fixtures: build small .unitypackage archives in tmp_path."""

from __future__ import annotations

import copy
import io
import tarfile

import pytest

from core.config import config
from core.utils.logger import set_verbosity

GUID_A = "0a1b2c3d4e5f60718293a4b5c6d7e8f9"
GUID_B = "1b2c3d4e5f60718293a4b5c6d7e8f90a"
GUID_C = "2c3d4e5f60718293a4b5c6d7e8f90a1b"


def pathname(path: str) -> bytes:
    """Encode a pathname record the way the Unity editor writes it."""
    return path.encode("utf-8") + b"\n00"


def write_package(path, entries) -> str:
    """Write entries as a gzip tar in the given order.

    Each entry is (name, data). data=None makes a directory entry and
    ("symlink", target) makes a symbolic link.
    """
    with tarfile.open(path, "w:gz") as tar:
        for name, data in entries:
            info = tarfile.TarInfo(name)
            if data is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            elif isinstance(data, tuple):
                info.type = tarfile.SYMTYPE
                info.linkname = data[1]
                tar.addfile(info)
            else:
                info.size = len(data)
                tar.addfile(info, io.BytesIO(data))
    return str(path)


@pytest.fixture
def make_package(tmp_path):
    def _make(entries, name="Sample.unitypackage"):
        return write_package(tmp_path / name, entries)

    return _make


@pytest.fixture(autouse=True)
def _restore_config():
    saved = copy.deepcopy(config._config)
    saved_path = config.config_path
    yield
    config._config = saved
    config.config_path = saved_path
    set_verbosity()
