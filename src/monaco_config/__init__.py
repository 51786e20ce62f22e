"""
monaco-config — configuration resolution engine.

File: src/monaco_config/__init__.py

Purpose
- Package root. Resolves monitoring-as-code configuration objects into
  environment-specific payloads: scope merging, reference substitution,
  template rendering, dependency edges and deployment directives.

Functional requirements
- Must not have side effects at import time (no settings loading, no logging init).
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
