"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Recording fake engines for both transform stages.
- Isolation of the interpreter's finder lists and the global runtime, so a
  test that installs the loader never leaks it into the rest of the session.
"""

import sys
import types
import pytest
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# Add src to path so we can import 'transload' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from transload.core.hooks import HOOKS, HookTable
from transload.core.host import PythonHost
from transload.core.pipeline import TransformPipeline
from transload.engines import clear_engines
from transload.runtime import deactivate


class FakeCoffee:
  """Coffee engine stand-in: prefixes a marker line and records every call."""

  def __init__(self, version: str = "1.0.0", calls: Optional[List[Tuple[str, str, Dict[str, Any]]]] = None):
    self.version = version
    self.calls = calls if calls is not None else []

  def compile(self, text: str, options: Dict[str, Any]) -> str:
    self.calls.append(("coffee", text, dict(options)))
    if "!!" in text:
      raise SyntaxError("unexpected '!!'")
    return f"# coffee\n{text}"


class FakeStreamline:
  """Streamline engine stand-in: appends a marker line and records every call."""

  def __init__(self, version: str = "2.0.0", calls: Optional[List[Tuple[str, str, Dict[str, Any]]]] = None):
    self.version = version
    self.calls = calls if calls is not None else []
    self.registrations = 0

  def transform(self, text: str, options: Dict[str, Any]) -> str:
    self.calls.append(("streamline", text, dict(options)))
    if "??" in text:
      raise SyntaxError("unexpected '??'")
    return f"{text}\n# streamlined\n"

  def register(self, **options: Any) -> None:
    self.registrations += 1


@pytest.fixture
def calls() -> List[Tuple[str, str, Dict[str, Any]]]:
  """Shared call log, so stage ordering across both engines is observable."""
  return []


@pytest.fixture
def coffee(calls) -> FakeCoffee:
  return FakeCoffee(calls=calls)


@pytest.fixture
def streamline(calls) -> FakeStreamline:
  return FakeStreamline(calls=calls)


@pytest.fixture
def pipeline(coffee, streamline) -> TransformPipeline:
  return TransformPipeline(coffee, streamline)


@pytest.fixture
def isolated_import_system(monkeypatch):
  """
  Swaps the finder lists for copies; monkeypatch restores the originals.
  """
  monkeypatch.setattr(sys, "meta_path", list(sys.meta_path))
  monkeypatch.setattr(sys, "path_hooks", list(sys.path_hooks))
  yield


@pytest.fixture
def host(isolated_import_system) -> PythonHost:
  """A host bound to a private hook table."""
  return PythonHost(HookTable())


@pytest.fixture
def project(tmp_path, monkeypatch) -> Path:
  """An empty project directory used as the cwd."""
  root = tmp_path / "proj"
  root.mkdir()
  monkeypatch.chdir(root)
  return root


@pytest.fixture
def fake_main(monkeypatch):
  """
  A stand-in ``__main__`` module left behind by a previous program.

  ``sys.path`` and ``sys.argv`` are swapped for copies, since running a file as
  main rewrites their first entries.
  """
  main = types.ModuleType("__main__")
  main.leftover = "from the previous program"
  monkeypatch.setitem(sys.modules, "__main__", main)
  monkeypatch.setattr(sys, "path", ["/original/entry", *sys.path])
  monkeypatch.setattr(sys, "argv", ["launcher", "--flag"])
  return main


@pytest.fixture
def clean_runtime(isolated_import_system):
  """
  Ensures the process-wide runtime, engine registry and hook table are reset
  after the test.
  """
  clear_engines()
  yield
  deactivate()
  clear_engines()
  HOOKS.reset()


@pytest.fixture
def engine_classes() -> Tuple[type, type]:
  """The fake engine classes, for tests that need their own instances."""
  return FakeCoffee, FakeStreamline
