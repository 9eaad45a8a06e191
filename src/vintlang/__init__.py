"""VintLang language tooling: a heuristic language server and linter."""

__version__ = "0.1.0"
