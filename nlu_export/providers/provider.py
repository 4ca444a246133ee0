"""
Provider - renders board messages into platform response objects.

Dispatch is total: a message type resolves to a renderer name through a
few fixed rules and then a substring match against the platform's renderer
table; anything the platform cannot render becomes a raw custom payload.
"""

import json
import logging
from typing import Optional, Dict, Any, Type

from nlu_export.errors import RenderError
from nlu_export.providers.base import Platform, CUSTOM_PAYLOAD
from nlu_export.providers.platforms.facebook import FacebookPlatform
from nlu_export.providers.platforms.generic import GenericPlatform
from nlu_export.providers.platforms.google import GooglePlatform
from nlu_export.providers.platforms.skype import SkypePlatform
from nlu_export.providers.platforms.slack import SlackPlatform

logger = logging.getLogger(__name__)

LANG = "en"

PLATFORMS: Dict[str, Type[Platform]] = {
    "slack": SlackPlatform,
    "facebook": FacebookPlatform,
    "google": GooglePlatform,
    "skype": SkypePlatform,
    "generic": GenericPlatform,
}

# Board platform ids that differ from the integration name
PLATFORM_ALIASES = {
    "google-actions": "google",
}


def normalize_platform(platform: Optional[str]) -> str:
    key = (platform or "").strip().lower()
    return PLATFORM_ALIASES.get(key, key)


def resolve_method(message_type: str, renderers: Dict[str, Any]) -> Optional[str]:
    """Name of the renderer a message type dispatches to, before availability checks."""
    if message_type == "carousel":
        return "list"
    if message_type.endswith("button") or message_type.endswith("generic"):
        return "card"
    for name in renderers:
        if name in message_type:
            return name
    return None


class Provider:
    """Renders (message type, payload) pairs for one target platform."""

    def __init__(self, platform: Optional[str] = None):
        key = normalize_platform(platform)
        platform_cls = PLATFORMS.get(key)
        if platform_cls is None:
            logger.debug(f"[PROVIDER] Unknown platform '{platform}', using generic")
            platform_cls = GenericPlatform
        self.platform = platform_cls()
        self._renderers = self.platform.renderers()

    @property
    def name(self) -> str:
        return self.platform.name

    def fallback(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "type": CUSTOM_PAYLOAD,
            "payload": {self.name: json.dumps(data, separators=(",", ":"))},
            "lang": LANG,
        }

    def create(self, message_type: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        data = data or {}
        method = resolve_method(message_type or "", self._renderers)
        renderer = self._renderers.get(method) if method else None
        if renderer is None:
            return self.fallback(data)

        rendered = renderer(data)
        if not isinstance(rendered, dict):
            raise RenderError(
                f"Platform '{self.name}' produced no response for '{message_type}' via {method}()"
            )
        result = dict(rendered)
        if self.name != GenericPlatform.name:
            result["platform"] = self.name
        result["lang"] = LANG
        return result
