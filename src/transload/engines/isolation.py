"""
Streamline Engine Isolation.

Streamline engines typically hook themselves into the import system when
registered, which would bypass the cache for every file they claim. This
adapter lets the engine register (so a later registration is a no-op) and then
puts the hook table and the interpreter's finder lists back exactly as they were.
"""

import sys
from typing import Any, Dict

from transload.core.hooks import HookTable


class IsolatedStreamliner:
  """
  Wraps a streamline engine so only its pure `transform` is visible.

  Attributes:
      engine: The wrapped streamline engine.
  """

  def __init__(self, engine: Any, hooks: HookTable, mode: str = "callbacks"):
    """
    Registers `engine` with side effects undone.

    Args:
        engine: Object exposing ``transform``, ``version`` and ``register``.
        hooks: Table to protect from the engine's registration.
        mode: Execution mode forwarded to ``engine.register``.
    """
    self.engine = engine

    saved_hooks = hooks.snapshot()
    saved_meta_path = list(sys.meta_path)
    saved_path_hooks = list(sys.path_hooks)
    try:
      register = getattr(engine, "register", None)
      if register is not None:
        register(mode=mode)
    finally:
      hooks.restore(saved_hooks)
      sys.meta_path[:] = saved_meta_path
      sys.path_hooks[:] = saved_path_hooks
      sys.path_importer_cache.clear()

  @property
  def version(self) -> str:
    return str(self.engine.version)

  def transform(self, text: str, options: Dict[str, Any]) -> str:
    return self.engine.transform(text, options)

  def register(self, **options: Any) -> None:
    """Registration already happened in isolation; further calls do nothing."""
