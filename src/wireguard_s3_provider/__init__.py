"""Custom resource provider managing the WireGuard backup bucket."""

__version__ = "0.1.0"
