"""
Runtime Configuration Store.

Settings come from the ``[tool.transload]`` table of the nearest
``pyproject.toml`` and can be overridden programmatically or from the CLI.

.. code-block:: toml

    [tool.transload]
    cache_dir = ".cache"
    coffee_engine = "my_coffee:engine"
    streamline_engine = "my_streamline.transform:Engine"
    streamline_mode = "callbacks"
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

from transload.core.cache_paths import DEFAULT_CACHE_DIR

logger = logging.getLogger(__name__)

STREAMLINE_MODES = ("callbacks", "fibers", "generators")


class LoaderConfig(BaseModel):
  """
  Configuration for one activation of the loader.
  """

  working_dir: Path = Field(default_factory=Path.cwd, description="Directory deciding the rel/abs cache partition.")
  cache_dir: Path = Field(Path(DEFAULT_CACHE_DIR), description="Parent of the version-qualified cache roots.")
  coffee_engine: Optional[str] = Field(None, description="Import spec 'module:attr' for the coffee engine.")
  streamline_engine: Optional[str] = Field(None, description="Import spec 'module:attr' for the streamline engine.")
  streamline_mode: str = Field("callbacks", description="Mode passed to the streamline engine's register().")

  @field_validator("streamline_mode")
  @classmethod
  def validate_mode(cls, v: str) -> str:
    """
    Normalises and checks the streamline mode.

    Raises:
        ValueError: If the mode is unknown.
    """
    v_clean = v.lower().strip()
    if v_clean not in STREAMLINE_MODES:
      raise ValueError(f"Unknown streamline mode: '{v_clean}'. Supported modes: {STREAMLINE_MODES}")
    return v_clean

  @property
  def cache_base(self) -> Path:
    """`cache_dir` made absolute against `working_dir`."""
    if self.cache_dir.is_absolute():
      return self.cache_dir
    return self.working_dir / self.cache_dir

  @classmethod
  def load(
    cls,
    search_path: Optional[Path] = None,
    cache_dir: Optional[Path] = None,
    coffee_engine: Optional[str] = None,
    streamline_engine: Optional[str] = None,
    streamline_mode: Optional[str] = None,
  ) -> "LoaderConfig":
    """
    Loads configuration from pyproject.toml and applies overrides.

    Args:
        search_path (Optional[Path]): Directory to start searching for TOML config.
            Also becomes the working directory. Defaults to the cwd.
        cache_dir (Optional[Path]): Override for the cache directory.
        coffee_engine (Optional[str]): Override for the coffee engine spec.
        streamline_engine (Optional[str]): Override for the streamline engine spec.
        streamline_mode (Optional[str]): Override for the streamline mode.

    Returns:
        LoaderConfig: The fully resolved configuration.
    """
    start_dir = Path(os.path.abspath(search_path or Path.cwd()))
    toml_config, toml_dir = _load_toml_settings(start_dir)

    final_cache = cache_dir
    if final_cache is None and "cache_dir" in toml_config:
      final_cache = Path(toml_config["cache_dir"])
      if toml_dir and not final_cache.is_absolute():
        final_cache = toml_dir / final_cache

    values: Dict[str, Any] = {"working_dir": start_dir}
    if final_cache is not None:
      values["cache_dir"] = final_cache

    final_coffee = coffee_engine or toml_config.get("coffee_engine")
    if final_coffee:
      values["coffee_engine"] = final_coffee

    final_streamline = streamline_engine or toml_config.get("streamline_engine")
    if final_streamline:
      values["streamline_engine"] = final_streamline

    final_mode = streamline_mode or toml_config.get("streamline_mode")
    if final_mode:
      values["streamline_mode"] = final_mode

    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The ``[tool.transload]`` table and the directory it was found in.
  """
  for parent in [start_path, *start_path.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable %s: %s", toml_path, e)
        return {}, None

      return data.get("tool", {}).get("transload", {}), parent

  return {}, None
