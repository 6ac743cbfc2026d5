"""
Tests for Cache Path Resolution and the version-qualified cache root.
"""

import os
import pytest
from pathlib import Path

from transload.core.cache_paths import cache_root_for, resolve_cache_path

pytestmark = pytest.mark.skipif(os.name == "nt", reason="POSIX path literals")

ROOT = Path("/proj/.cache/1.0.0-2.0.0")


def test_source_under_cwd_goes_to_rel_partition():
  result = resolve_cache_path("/proj/foo.coffee", "/proj", ROOT)
  assert result == ROOT / "rel" / "foo.coffee"


def test_nested_source_mirrors_tree():
  result = resolve_cache_path("/proj/lib/util/helpers._coffee", "/proj", ROOT)
  assert result == ROOT / "rel" / "lib" / "util" / "helpers._coffee"


def test_source_outside_cwd_goes_to_abs_partition():
  result = resolve_cache_path("/usr/lib/shared/mod._py", "/proj", ROOT)
  assert result == ROOT / "abs" / "usr" / "lib" / "shared" / "mod._py"


def test_cwd_with_trailing_separator():
  result = resolve_cache_path("/proj/foo.coffee", "/proj/", ROOT)
  assert result == ROOT / "rel" / "foo.coffee"


def test_sibling_directory_sharing_prefix_is_not_relative():
  """'/proj2' starts with '/proj' as a string but is not inside it."""
  result = resolve_cache_path("/proj2/foo.coffee", "/proj", ROOT)
  assert result == ROOT / "abs" / "proj2" / "foo.coffee"


def test_distinct_sources_never_collide():
  sources = [
    "/proj/2/foo.coffee",
    "/proj2/foo.coffee",
    "/proj/abs/proj/foo.coffee",
    "/proj/foo.coffee",
    "/foo.coffee",
    "/rel/foo.coffee",
  ]
  mapped = {resolve_cache_path(s, "/proj", ROOT) for s in sources}
  assert len(mapped) == len(sources)


def test_base_name_and_extension_are_kept():
  for name in ("a.coffee", "a._coffee", "a._py", "a_.py", "a.py"):
    assert resolve_cache_path(f"/proj/{name}", "/proj", ROOT).name == name


def test_cache_root_embeds_both_versions():
  assert cache_root_for("/proj/.cache", "1.12.7", "0.10.4") == Path("/proj/.cache/1.12.7-0.10.4")


def test_changing_either_version_changes_root():
  base = cache_root_for("/c", "1", "2")
  assert cache_root_for("/c", "1", "3") != base
  assert cache_root_for("/c", "9", "2") != base
  assert cache_root_for("/c", "1", "2") == base
