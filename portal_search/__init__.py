"""Multi-source search aggregation API for the search portal."""

__version__ = "0.1.0"
