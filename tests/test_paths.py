from __future__ import annotations

import os

import pytest

from core.errors import PackageFormatError, PathEscapeError
from core.unpacker.paths import DirectoryCache, as_root, safe_join


def test_as_root_appends_separator(tmp_path):
    root = as_root(str(tmp_path))
    assert root.endswith(os.sep)
    assert as_root(root) == root


def test_safe_join_nested_path(tmp_path):
    root = as_root(str(tmp_path))
    result = safe_join(root, "Assets/Sounds/foo.wav")
    assert result == os.path.join(str(tmp_path), "Assets", "Sounds", "foo.wav")
    assert result.startswith(root)


def test_safe_join_normalises_inner_dot_segments(tmp_path):
    root = as_root(str(tmp_path))
    assert safe_join(root, "Assets/x/../y.txt") == os.path.join(str(tmp_path), "Assets", "y.txt")


@pytest.mark.parametrize("relative", ["../evil.txt", "../../evil.txt", "Assets/../../evil.txt", ".", ""])
def test_safe_join_rejects_escape(tmp_path, relative):
    with pytest.raises(PathEscapeError):
        safe_join(str(tmp_path / "out"), relative)


def test_safe_join_rejects_absolute_override(tmp_path):
    with pytest.raises(PathEscapeError):
        safe_join(str(tmp_path / "out"), str(tmp_path / "elsewhere.txt"))


def test_safe_join_rejects_sibling_with_common_prefix(tmp_path):
    # "out-evil" starts with "out" but is not inside it
    with pytest.raises(PathEscapeError):
        safe_join(str(tmp_path / "out"), "../out-evil/file.txt")


def test_path_escape_is_a_format_violation():
    assert issubclass(PathEscapeError, PackageFormatError)


def test_directory_cache_creates_nested_parents(tmp_path):
    cache = DirectoryCache()
    target = tmp_path / "a" / "b" / "c" / "file.bin"

    cache.ensure_parent(str(target))

    assert (tmp_path / "a" / "b" / "c").is_dir()
    assert str(tmp_path / "a" / "b" / "c") in cache
    assert len(cache) == 1


def test_directory_cache_is_idempotent(tmp_path):
    cache = DirectoryCache()
    (tmp_path / "existing" / "deep").mkdir(parents=True)

    cache.ensure_parent(str(tmp_path / "existing" / "deep" / "one.txt"))
    cache.ensure_parent(str(tmp_path / "existing" / "deep" / "two.txt"))
    cache.ensure_parent(str(tmp_path / "existing" / "deep" / "one.txt"))

    assert len(cache) == 1


def test_directory_cache_ignores_bare_filename():
    cache = DirectoryCache()
    cache.ensure_parent("file.txt")
    assert len(cache) == 0
