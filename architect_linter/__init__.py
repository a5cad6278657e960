"""Architect Linter - architectural layering enforcement for TypeScript projects.

Flags forbidden cross-layer imports and overlong functions according to
the rules declared in a project's ``architect.json``.
"""

__version__ = "0.1.0"
