"""API route modules."""
from __future__ import annotations

from profesor.api.routes import ask, health

__all__ = ["ask", "health"]
