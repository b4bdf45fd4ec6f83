"""Public auth exports for mosaia."""

from __future__ import annotations

from .auth import MosaiaAuth

__all__ = ["MosaiaAuth"]
