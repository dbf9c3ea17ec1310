"""API routers for the HTTP dialect converter."""

from __future__ import annotations

from . import dialect_converter

__all__ = ["dialect_converter"]
