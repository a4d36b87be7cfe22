"""HTTP service and library functions for converting and transforming images."""

__version__ = "0.1.0"