"""
Cache Path Resolution.

Maps a source file to the location of its compiled copy:

    <cache_root>/rel/<path relative to cwd>     for sources inside the cwd
    <cache_root>/abs/<full absolute path>       for everything else

Keeping the two partitions apart stops a relative entry from colliding with an
absolute one that happens to share its suffix, and keeps the in-project tree
short and relocatable. The cached file keeps the source's base name and
extension; only its content differs.

The cache root embeds the versions of both transform engines, so upgrading
either engine switches to a fresh tree instead of serving stale output.
"""

import os
from pathlib import Path
from typing import List

from transload.core.fs import PathLike

DEFAULT_CACHE_DIR = ".cache"
REL_PARTITION = "rel"
ABS_PARTITION = "abs"
VERSION_SEPARATOR = "-"


def cache_root_for(base_dir: PathLike, coffee_version: str, streamline_version: str) -> Path:
  """
  Builds the version-qualified cache root.

  Args:
      base_dir: Directory holding all cache roots (e.g. ``<cwd>/.cache``).
      coffee_version: Version reported by the coffee engine.
      streamline_version: Version reported by the streamline engine.

  Returns:
      Path: ``<base_dir>/<coffee_version>-<streamline_version>``.
  """
  return Path(base_dir) / f"{coffee_version}{VERSION_SEPARATOR}{streamline_version}"


def _is_under(source: str, cwd: str) -> bool:
  # Component-wise prefix: '/proj2/x' is not under '/proj'.
  if not source.startswith(cwd):
    return False
  if len(source) == len(cwd):
    return True
  return cwd.endswith(os.sep) or source[len(cwd)] in (os.sep, os.altsep or os.sep)


def _segments(path: str) -> List[str]:
  """Splits a path into non-empty segments, keeping a drive letter as the first one."""
  drive, tail = os.path.splitdrive(path)
  parts = [p for p in tail.replace(os.altsep or os.sep, os.sep).split(os.sep) if p]
  if drive:
    parts.insert(0, drive.rstrip(":").strip("\\/").replace(":", ""))
  return parts


def resolve_cache_path(source: PathLike, cwd: PathLike, cache_root: PathLike) -> Path:
  """
  Derives the cache location for an absolute source path.

  No ``..`` normalisation is attempted: callers pass paths the import system
  already resolved.

  Args:
      source: Absolute path of the source file.
      cwd: Working directory captured when the loader was activated.
      cache_root: Version-qualified cache root.

  Returns:
      Path: Where the compiled copy of `source` lives.
  """
  source_str = os.fspath(source)
  cwd_str = os.fspath(cwd)

  if _is_under(source_str, cwd_str):
    return Path(cache_root, REL_PARTITION, *_segments(source_str[len(cwd_str) :]))

  return Path(cache_root, ABS_PARTITION, *_segments(source_str))
