"""Job application tracker built on generic record operations."""

__version__ = "0.1.0"
