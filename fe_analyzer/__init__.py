"""Types, scopes, events, ABI names and analysis context for the Fe language."""

__version__ = "0.1.0"
__all__ = ["abi", "builtins", "context", "errors", "events", "operations", "scopes", "types"]