"""Validated request DTOs (Pydantic)."""

from .normalize_request import MessageDTO, NormalizeRequestDTO

__all__ = ["MessageDTO", "NormalizeRequestDTO"]
