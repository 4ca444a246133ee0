"""
Actions on Google integration. Renders rich responses (simple responses,
suggestion chips, basic cards, list cards) instead of numeric type codes.
"""

from typing import Dict, List, Any

from nlu_export.providers.base import Platform


class GooglePlatform(Platform):
    name = "google"
    reply_label_limit = 20

    def renderers(self):
        return {
            "text": self.text,
            "quick_replies": self.quick_replies,
            "suggestion_chips": self.suggestion_chips,
            "image": self.image,
            "card": self.card,
            "list": self.list,
        }

    def text(self, data: Dict[str, Any]) -> Dict[str, Any]:
        text = data.get("text", "")
        return {"type": "simple_response", "textToSpeech": text, "displayText": text}

    def quick_replies(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._chips(self.reply_titles(data))

    def suggestion_chips(self, data: Dict[str, Any]) -> Dict[str, Any]:
        titles = [self.label(s.get("title")) for s in data.get("suggestions") or []]
        return self._chips(titles)

    def image(self, data: Dict[str, Any]) -> Dict[str, Any]:
        url = data.get("image_url", "")
        return {
            "type": "basic_card",
            "image": {"url": url, "accessibilityText": data.get("text", url)},
            "buttons": [],
        }

    def card(self, data: Dict[str, Any]) -> Dict[str, Any]:
        fields = self.card_fields(data)
        return {
            "type": "basic_card",
            "title": fields["title"],
            "subtitle": fields["subtitle"],
            "formattedText": data.get("text", ""),
            "image": {"url": fields["image_url"], "accessibilityText": fields["title"]},
            "buttons": [
                {"title": b.get("title", ""), "openUrlAction": {"url": self.button_target(b)}}
                for b in fields["buttons"]
            ],
        }

    def list(self, data: Dict[str, Any]) -> Dict[str, Any]:
        items = []
        for el in data.get("elements") or []:
            title = el.get("title", "")
            items.append({
                "optionInfo": {"key": title, "synonyms": []},
                "title": title,
                "description": el.get("subtitle", ""),
                "image": {"url": el.get("image_url", ""), "accessibilityText": title},
            })
        return {"type": "list_card", "title": data.get("text", ""), "items": items}

    @staticmethod
    def _chips(titles: List[str]) -> Dict[str, Any]:
        return {"type": "suggestion_chips", "suggestions": [{"title": t} for t in titles]}
