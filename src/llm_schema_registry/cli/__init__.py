"""LLM Schema Registry CLI package."""

# Import guard for CLI dependencies
try:
    from .app import app
except ImportError as e:
    raise ImportError("CLI dependencies not available. Install with: pip install llm-schema-registry[cli]") from e

__all__ = ["app"]
