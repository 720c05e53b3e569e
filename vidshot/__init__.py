"""Frame sampling and export engine for video screenshots."""

__version__ = "0.1.0"
