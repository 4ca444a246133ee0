"""Project-data client"""
from .client import ProjectClient

__all__ = ["ProjectClient"]
