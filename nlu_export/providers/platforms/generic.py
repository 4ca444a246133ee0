"""Generic platform - default response types understood by every integration."""

from typing import Dict, Any

from nlu_export.providers.base import Platform, TEXT, CARD, QUICK_REPLIES, IMAGE


class GenericPlatform(Platform):
    name = "generic"

    def renderers(self):
        return {
            "text": self.text,
            "quick_replies": self.quick_replies,
            "image": self.image,
            "card": self.card,
        }

    def text(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {"type": TEXT, "speech": data.get("text", "")}

    def quick_replies(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {"type": QUICK_REPLIES, "title": data.get("text", ""), "replies": self.reply_titles(data)}

    def image(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {"type": IMAGE, "imageUrl": data.get("image_url", "")}

    def card(self, data: Dict[str, Any]) -> Dict[str, Any]:
        fields = self.card_fields(data)
        return {
            "type": CARD,
            "title": fields["title"],
            "subtitle": fields["subtitle"],
            "imageUrl": fields["image_url"],
            "buttons": [
                {"text": b.get("title", ""), "postback": self.button_target(b)}
                for b in fields["buttons"]
            ],
        }
