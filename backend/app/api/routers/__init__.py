"""Router exports for FastAPI composition."""

from . import diary, health

__all__ = ["diary", "health"]
