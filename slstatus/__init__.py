"""Status monitor that reports system information for a window manager bar."""

__version__ = "1.0"