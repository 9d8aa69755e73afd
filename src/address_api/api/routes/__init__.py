"""Route group exports."""

from . import addresses, health

__all__ = ["addresses", "health"]
