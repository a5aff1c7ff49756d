"""Server-driven UI: screen composer service and document interpreter."""

__version__ = "0.5.0"
