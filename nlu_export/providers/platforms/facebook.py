"""Facebook Messenger integration."""

from typing import Dict, Any

from nlu_export.providers.base import CUSTOM_PAYLOAD
from nlu_export.providers.platforms.generic import GenericPlatform


class FacebookPlatform(GenericPlatform):
    name = "facebook"
    reply_label_limit = 20

    def renderers(self):
        table = super().renderers()
        table["list"] = self.list
        return table

    def list(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Carousels and lists become a generic-template custom payload."""
        elements = []
        for el in data.get("elements") or []:
            element = {
                "title": el.get("title", ""),
                "subtitle": el.get("subtitle", ""),
                "image_url": el.get("image_url", ""),
            }
            buttons = [
                {"type": "postback", "title": b.get("title", ""), "payload": self.button_target(b)}
                for b in el.get("buttons") or []
            ]
            if buttons:
                element["buttons"] = buttons
            elements.append(element)
        return {
            "type": CUSTOM_PAYLOAD,
            "payload": {
                "facebook": {
                    "attachment": {
                        "type": "template",
                        "payload": {"template_type": "generic", "elements": elements},
                    }
                }
            },
        }
