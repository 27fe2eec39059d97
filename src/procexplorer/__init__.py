"""procexplorer - browse Linux processes read straight from /proc."""

__version__ = "0.1.0"
