"""
transload Package.

A caching import loader for transpiled Python dialects. Once activated, files
ending in ``.py``, ``.coffee``, ``._py`` and ``._coffee`` are imported through
an on-disk cache: coffee sources are transpiled to Python, streamline-annotated
sources are rewritten to callback style, and the result is stored under
``.cache/<coffee version>-<streamline version>/`` so unchanged files are never
compiled twice.

Usage
-----

Activate for the current process
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import transload
    transload.activate()

    import my_module  # my_module._coffee is compiled once, then served from cache

Run a file as the main program
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import transload
    transload.run("app._coffee")  # resolved relative to this file

The engines are located through ``[tool.transload]`` in ``pyproject.toml`` or
the ``transload.engines`` entry-point group.
"""

from transload.config import LoaderConfig
from transload.core.fs import PathLike
from transload.core.orchestrator import LoadOutcome
from transload.runtime import Runtime, activate, deactivate, get_runtime, run

__version__ = "0.1.0"


def compile_file(path: PathLike) -> str:
  """
  Returns the executable Python text for `path`, compiling through the cache.

  Activates the loader if needed.
  """
  return activate().compile_file(path).text


__all__ = [
  "LoadOutcome",
  "LoaderConfig",
  "Runtime",
  "__version__",
  "activate",
  "compile_file",
  "deactivate",
  "get_runtime",
  "run",
]
