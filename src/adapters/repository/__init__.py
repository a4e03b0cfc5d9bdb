"""Repository adapters - Durable user storage implementations."""

from .json_file import JsonUserRepository

__all__ = ["JsonUserRepository"]
