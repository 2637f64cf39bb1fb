"""Multi-source industrial parts search."""

__version__ = "0.1.0"
