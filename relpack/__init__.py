"""relpack: release packaging for compiled audio plugins."""

__version__ = "0.1.0"
