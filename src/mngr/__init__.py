"""mngr - a minimal file-backed content editor served over HTTP."""

__version__ = "0.1.0"
