"""AI-assisted Jest test generation for TypeScript/JavaScript projects."""

__version__ = "1.0.0"

__all__ = ["__version__"]
