"""
Transform Engine Protocols.

transload does not implement either dialect. It drives two pluggable engines:

* a **coffee** engine that transpiles coffee source to Python, and
* a **streamline** engine that rewrites synchronous-looking Python into
  callback-based Python.

Engines are plain objects (or modules) satisfying the protocols below.
"""

from typing import Any, Dict, Protocol, runtime_checkable

from pydantic import BaseModel, Field


class EngineNotFoundError(ImportError):
  """Raised when no engine can be located for a role."""


@runtime_checkable
class CoffeeEngine(Protocol):
  """
  Protocol for the coffee-to-Python transpiler.

  Attributes:
      version (str): Engine version. Part of the cache root name.
  """

  version: str

  def compile(self, text: str, options: Dict[str, Any]) -> str:
    """Transpiles coffee source. Raises on syntax errors."""
    ...


@runtime_checkable
class StreamlineEngine(Protocol):
  """
  Protocol for the streamline transform.

  `register` may hook the engine into the import system; it must be safe to
  call repeatedly.
  """

  version: str

  def transform(self, text: str, options: Dict[str, Any]) -> str:
    """Rewrites Python source. Raises on syntax errors."""
    ...

  def register(self, **options: Any) -> None: ...


class CoffeeOptions(BaseModel):
  """Options passed to `CoffeeEngine.compile`."""

  filename: str = Field(description="Source path, recorded for diagnostics.")
  bare: bool = Field(True, description="Suppress the top-level wrapper so streamline sees bare statements.")


class StreamlineOptions(BaseModel):
  """Options passed to `StreamlineEngine.transform`."""

  lines: str = Field("preserve", description="Line-number policy; 'preserve' keeps tracebacks aligned with source.")
