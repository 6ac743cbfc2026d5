"""
Transform Engines Package.

Protocols for the two pluggable engines, plus discovery and isolation helpers.
"""

from transload.engines.base import (
  CoffeeEngine,
  CoffeeOptions,
  EngineNotFoundError,
  StreamlineEngine,
  StreamlineOptions,
)
from transload.engines.isolation import IsolatedStreamliner
from transload.engines.registry import (
  COFFEE,
  ENTRY_POINT_GROUP,
  STREAMLINE,
  clear_engines,
  load_engine,
  register_engine,
)

__all__ = [
  "COFFEE",
  "CoffeeEngine",
  "CoffeeOptions",
  "ENTRY_POINT_GROUP",
  "EngineNotFoundError",
  "IsolatedStreamliner",
  "STREAMLINE",
  "StreamlineEngine",
  "StreamlineOptions",
  "clear_engines",
  "load_engine",
  "register_engine",
]
