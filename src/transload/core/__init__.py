"""
Core Package.

Contains the caching load pipeline:
- Filesystem helpers and cache path resolution
- Source classification and the transform pipeline
- The cached load orchestrator
- The hook table and its bridge into importlib
- Entry-point redirection
"""
