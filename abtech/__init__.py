"""AB TECH site backend."""

__version__ = "0.1.0"
