"""
Main Entry Point for the transload CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `transload.cli.handlers`.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from transload import __version__
from transload.cli import handlers
from transload.config import LoaderConfig
from transload.utils.console import configure_logging


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="transload: caching loader for transpiled Python dialects")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Show cache hits, misses and writes")
  parser.add_argument("--cache-dir", type=Path, default=None, help="Cache directory (default: from toml, else .cache)")
  parser.add_argument("--coffee-engine", default=None, help="Coffee engine import spec 'module:attr'")
  parser.add_argument("--streamline-engine", default=None, help="Streamline engine import spec 'module:attr'")
  parser.add_argument("--mode", default=None, help="Streamline mode (callbacks, fibers, generators)")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: RUN ---
  cmd_run = subparsers.add_parser("run", help="Run a file as the main program")
  cmd_run.add_argument("path", type=Path, help="File to run")
  cmd_run.add_argument("args", nargs=argparse.REMAINDER, help="Arguments passed to the program")

  # --- Command: COMPILE ---
  cmd_comp = subparsers.add_parser("compile", help="Compile a file through the cache and print the result")
  cmd_comp.add_argument("path", type=Path, help="Source file")
  cmd_comp.add_argument("--out", type=Path, default=None, help="Write output to this file instead of stdout")

  # --- Command: WHERE ---
  cmd_where = subparsers.add_parser("where", help="Show the cache location of a file")
  cmd_where.add_argument("path", type=Path, help="Source file")

  # --- Command: INFO ---
  subparsers.add_parser("info", help="Show engines, versions and the cache root")

  args = parser.parse_args(argv)

  configure_logging(verbose=args.verbose)

  config = LoaderConfig.load(
    cache_dir=args.cache_dir,
    coffee_engine=args.coffee_engine,
    streamline_engine=args.streamline_engine,
    streamline_mode=args.mode,
  )

  if args.command == "run":
    return handlers.handle_run(args.path, args.args, config)

  elif args.command == "compile":
    return handlers.handle_compile(args.path, args.out, config)

  elif args.command == "where":
    return handlers.handle_where(args.path, config)

  elif args.command == "info":
    return handlers.handle_info(config)

  parser.print_help()
  return 1


if __name__ == "__main__":
  import sys

  sys.exit(main())
