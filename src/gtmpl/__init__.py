"""gtmpl - project templates for Gauge test projects."""

__version__ = "1.6.2"
