"""
Tests for Filesystem Helpers.

Verifies:
1. Recursive, idempotent directory creation.
2. Failures other than "exists"/"missing parent" propagate.
3. The missing-mtime sentinel sorts before real timestamps.
"""

import os
import pytest

from transload.core.fs import MISSING_MTIME, ensure_directory, mtime_or_missing, read_text, write_text


def test_ensure_directory_creates_every_ancestor(tmp_path):
  target = tmp_path / "a" / "b" / "c" / "d"

  ensure_directory(target)

  assert target.is_dir()
  assert (tmp_path / "a" / "b").is_dir()


def test_ensure_directory_is_idempotent(tmp_path):
  target = tmp_path / "x" / "y"
  ensure_directory(target)
  (target / "keep.txt").write_text("kept", encoding="utf-8")

  ensure_directory(target)

  assert (target / "keep.txt").read_text(encoding="utf-8") == "kept"


def test_ensure_directory_accepts_relative_paths(tmp_path, monkeypatch):
  monkeypatch.chdir(tmp_path)

  ensure_directory(os.path.join("rel", "nested"))

  assert (tmp_path / "rel" / "nested").is_dir()


def test_ensure_directory_rejects_existing_file(tmp_path):
  blocker = tmp_path / "blocker"
  blocker.write_text("", encoding="utf-8")

  with pytest.raises(NotADirectoryError):
    ensure_directory(blocker)


def test_ensure_directory_rejects_file_in_ancestry(tmp_path):
  """A regular file where a parent directory should be is fatal."""
  blocker = tmp_path / "blocker"
  blocker.write_text("", encoding="utf-8")

  with pytest.raises(OSError):
    ensure_directory(blocker / "child" / "grandchild")


def test_mtime_of_missing_path_is_sentinel(tmp_path):
  assert mtime_or_missing(tmp_path / "nope") == MISSING_MTIME


def test_sentinel_orders_before_real_times(tmp_path):
  f = tmp_path / "f.txt"
  f.write_text("x", encoding="utf-8")
  os.utime(f, ns=(0, 0))

  assert mtime_or_missing(f) == 0
  assert MISSING_MTIME < mtime_or_missing(f)
  assert MISSING_MTIME < -(10**18)


def test_mtime_tracks_utime(tmp_path):
  f = tmp_path / "f.txt"
  f.write_text("x", encoding="utf-8")
  os.utime(f, ns=(1_000_000_000, 5_000_000_000))

  assert mtime_or_missing(f) == 5_000_000_000


def test_text_roundtrip_is_utf8(tmp_path):
  f = tmp_path / "unicode.py"
  write_text(f, "name = 'café ☕'\n")

  assert f.read_bytes() == "name = 'café ☕'\n".encode("utf-8")
  assert read_text(f) == "name = 'café ☕'\n"


def test_write_replaces_previous_content(tmp_path):
  f = tmp_path / "f.txt"
  write_text(f, "a much longer first version")
  write_text(f, "short")

  assert read_text(f) == "short"


def test_read_missing_file_propagates(tmp_path):
  with pytest.raises(FileNotFoundError):
    read_text(tmp_path / "missing.coffee")
