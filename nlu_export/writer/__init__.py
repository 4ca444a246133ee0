"""Output writer - export directory layout, templates and packaging"""
from .output import OutputWriter

__all__ = ["OutputWriter"]
