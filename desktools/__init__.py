"""Status-line components, a status printer, a file-test filter and menu matching logic."""

__version__ = "0.1.0"
__all__ = ["__version__"]