"""
Platform base class. A platform is a table of pure renderers, each mapping
a generic board payload to the response shape one messaging integration
expects. The table is explicit and ordered; Provider dispatches on it.
"""

from typing import Optional, Dict, List, Any, Callable

Renderer = Callable[[Dict[str, Any]], Dict[str, Any]]

# Response type codes of the NLU platform's message objects
TEXT = 0
CARD = 1
QUICK_REPLIES = 2
IMAGE = 3
CUSTOM_PAYLOAD = 4


class Platform:
    """Base for all platform capability sets."""

    name: str = "generic"
    reply_label_limit: Optional[int] = None

    def renderers(self) -> Dict[str, Renderer]:
        """Ordered method name -> renderer table. Earlier entries win substring ties."""
        raise NotImplementedError

    # ── Shared payload helpers ────────────────────────────────────

    def label(self, title: Any) -> str:
        text = "" if title is None else str(title)
        if self.reply_label_limit is not None:
            return text[:self.reply_label_limit]
        return text

    def reply_titles(self, data: Dict[str, Any]) -> List[str]:
        return [self.label(r.get("title")) for r in data.get("quick_replies") or []]

    @staticmethod
    def card_fields(data: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize `button`/`generic` payloads to title, subtitle, image_url, buttons."""
        elements = data.get("elements") or []
        source = elements[0] if elements else data
        return {
            "title": source.get("title") or data.get("text", ""),
            "subtitle": source.get("subtitle") or data.get("text", ""),
            "image_url": source.get("image_url", ""),
            "buttons": source.get("buttons") or data.get("buttons") or [],
        }

    @staticmethod
    def button_target(button: Dict[str, Any]) -> str:
        return button.get("url") or button.get("payload") or button.get("title", "")
