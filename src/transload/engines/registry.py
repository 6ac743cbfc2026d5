"""
Engine Registry and Discovery.

Engines are looked up by role (``"coffee"`` or ``"streamline"``) in this order:

1. An explicit ``"package.module:attribute"`` spec (from configuration).
2. The in-process registry populated by `@register_engine`.
3. The ``transload.engines`` entry-point group, matching the entry name to the role.

Resolved classes are instantiated; modules and instances are used as-is.
"""

import importlib
import logging
from importlib.metadata import entry_points
from typing import Any, Callable, Dict, List, Optional

from transload.engines.base import EngineNotFoundError

ENTRY_POINT_GROUP = "transload.engines"

COFFEE = "coffee"
STREAMLINE = "streamline"
ROLES = (COFFEE, STREAMLINE)

_ENGINE_REGISTRY: Dict[str, Any] = {}

logger = logging.getLogger(__name__)


def register_engine(role: str) -> Callable[[Any], Any]:
  """
  Decorator registering a class or factory object as the engine for `role`.

  Args:
      role: ``"coffee"`` or ``"streamline"``.
  """
  if role not in ROLES:
    raise ValueError(f"Unknown engine role: '{role}'. Expected one of {ROLES}")

  def wrapper(obj):
    _ENGINE_REGISTRY[role] = obj
    return obj

  return wrapper


def registered_roles() -> List[str]:
  return list(_ENGINE_REGISTRY.keys())


def clear_engines() -> None:
  """Resets the in-process registry. Primarily for testing."""
  _ENGINE_REGISTRY.clear()


def import_spec(spec: str) -> Any:
  """
  Imports ``"module"`` or ``"module:attr.sub"``.

  Raises:
      EngineNotFoundError: If the module or attribute is missing.
  """
  module_name, _, attr_path = spec.partition(":")
  try:
    obj = importlib.import_module(module_name)
  except ImportError as e:
    raise EngineNotFoundError(f"Cannot import engine module '{module_name}': {e}") from e

  for attr in filter(None, attr_path.split(".")):
    try:
      obj = getattr(obj, attr)
    except AttributeError as e:
      raise EngineNotFoundError(f"Engine spec '{spec}' has no attribute '{attr}'") from e
  return obj


def _from_entry_points(role: str) -> Optional[Any]:
  for ep in entry_points(group=ENTRY_POINT_GROUP):
    if ep.name == role:
      logger.debug("engine %s from entry point %s", role, ep.value)
      return ep.load()
  return None


def _instantiate(obj: Any) -> Any:
  return obj() if isinstance(obj, type) else obj


def load_engine(role: str, spec: Optional[str] = None) -> Any:
  """
  Locates and returns the engine for `role`.

  Args:
      role: ``"coffee"`` or ``"streamline"``.
      spec: Optional explicit import spec that takes precedence.

  Returns:
      Any: An object satisfying the role's engine protocol.

  Raises:
      EngineNotFoundError: If no source provides an engine.
  """
  if spec:
    return _instantiate(import_spec(spec))

  if role in _ENGINE_REGISTRY:
    return _instantiate(_ENGINE_REGISTRY[role])

  found = _from_entry_points(role)
  if found is not None:
    return _instantiate(found)

  raise EngineNotFoundError(
    f"No {role} engine available. Configure '{role}_engine' under [tool.transload] "
    f"or install a package exposing a '{role}' entry point in '{ENTRY_POINT_GROUP}'."
  )
