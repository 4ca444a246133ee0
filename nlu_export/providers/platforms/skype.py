"""Skype integration. Cards carry their text as title and subtitle; buttons have no postback."""

from typing import Dict, Any

from nlu_export.providers.base import Platform, TEXT, CARD, QUICK_REPLIES, IMAGE


class SkypePlatform(Platform):
    name = "skype"
    reply_label_limit = 19

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
        # Skype cards have no image slot on the board side; buttons carry text only
        return {
            "type": CARD,
            "title": data.get("text", ""),
            "subtitle": data.get("text", ""),
            "imageUrl": "",
            "buttons": [{"text": b.get("title", "")} for b in data.get("buttons") or []],
        }
