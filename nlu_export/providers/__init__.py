"""Platform Providers - render board messages into integration response objects"""
from .base import Platform
from .provider import Provider, PLATFORMS, normalize_platform, resolve_method

__all__ = [
    "Platform",
    "Provider",
    "PLATFORMS",
    "normalize_platform",
    "resolve_method",
]
