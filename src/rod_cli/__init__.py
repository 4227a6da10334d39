"""rod-cli - scaffold Rule-Oriented Development projects for AI assistants."""

__version__ = "0.4.0"

__all__ = ["__version__"]
