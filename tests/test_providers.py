"""
Tests for platform providers: platform resolution, dispatch rules,
fallback payloads and per-platform renderers.
Run: pytest tests/test_providers.py -v
"""
import json
import pytest

from nlu_export.providers import PLATFORMS, Provider, normalize_platform, resolve_method

CARD_PAYLOAD = {"text": "Pick one", "buttons": [{"title": "Open site", "payload": "OPEN"}]}
ELEMENTS_PAYLOAD = {
    "text": "Destinations",
    "elements": [
        {"title": "Paris", "subtitle": "France", "image_url": "https://img/paris.png",
         "buttons": [{"title": "Go", "payload": "GO_PARIS"}]},
        {"title": "Rome", "subtitle": "Italy", "image_url": "https://img/rome.png"},
    ],
}


# ══════════════════════════════════════════════════════════════════
# RESOLUTION
# ══════════════════════════════════════════════════════════════════


class TestPlatformResolution:

    @pytest.mark.parametrize("name", ["slack", "facebook", "google", "skype", "generic"])
    def test_known_platforms(self, name):
        assert Provider(name).name == name

    def test_case_insensitive(self):
        assert Provider("Facebook").name == "facebook"

    def test_google_actions_alias(self):
        assert normalize_platform("google-actions") == "google"
        assert Provider("google-actions").name == "google"

    def test_unknown_falls_back_to_generic(self):
        assert Provider("alexa").name == "generic"
        assert Provider(None).name == "generic"


class TestDispatch:

    def test_substring_match(self):
        table = PLATFORMS["generic"]().renderers()
        assert resolve_method("text", table) == "text"
        assert resolve_method("quick_replies", table) == "quick_replies"
        assert resolve_method("image", table) == "image"

    def test_carousel_always_list(self):
        table = PLATFORMS["generic"]().renderers()
        assert resolve_method("carousel", table) == "list"

    def test_button_and_generic_suffixes_use_card(self):
        table = PLATFORMS["generic"]().renderers()
        assert resolve_method("button", table) == "card"
        assert resolve_method("generic", table) == "card"
        assert resolve_method("quick_replies_button", table) == "card"
        assert resolve_method("text_generic", table) == "card"

    def test_no_match(self):
        assert resolve_method("webview", PLATFORMS["slack"]().renderers()) is None

    @pytest.mark.parametrize("platform", sorted(PLATFORMS))
    @pytest.mark.parametrize("message_type", ["text", "carousel", "webview", "", "button", "list", "video"])
    def test_dispatch_is_total(self, platform, message_type):
        rendered = Provider(platform).create(message_type, {"text": "x"})
        assert isinstance(rendered, dict)
        assert rendered["lang"] == "en"


class TestFallback:

    def test_unrenderable_type_becomes_custom_payload(self):
        data = {"url": "https://example.com", "height": 3}
        assert Provider("slack").create("webview", data) == {
            "type": 4,
            "payload": {"slack": json.dumps(data, separators=(",", ":"))},
            "lang": "en",
        }

    def test_carousel_without_list_renderer_falls_back(self):
        rendered = Provider("skype").create("carousel", ELEMENTS_PAYLOAD)
        assert rendered["type"] == 4
        assert "skype" in rendered["payload"]
        assert "platform" not in rendered

    def test_generic_fallback_key(self):
        rendered = Provider("generic").create("delay", {"show_typing": True})
        assert list(rendered["payload"]) == ["generic"]


# ══════════════════════════════════════════════════════════════════
# RENDERERS
# ══════════════════════════════════════════════════════════════════


class TestGenericRenderers:

    def test_text_has_no_platform_tag(self):
        assert Provider("generic").create("text", {"text": "Hello"}) == {
            "type": 0, "speech": "Hello", "lang": "en",
        }

    def test_card_from_button_payload(self):
        rendered = Provider("generic").create("button", CARD_PAYLOAD)
        assert rendered["type"] == 1
        assert rendered["title"] == "Pick one"
        assert rendered["buttons"] == [{"text": "Open site", "postback": "OPEN"}]


class TestSlackRenderers:

    def test_platform_tag(self):
        rendered = Provider("slack").create("text", {"text": "Hi"})
        assert rendered == {"type": 0, "speech": "Hi", "platform": "slack", "lang": "en"}

    def test_quick_reply_labels_truncated(self):
        rendered = Provider("slack").create("quick_replies", {
            "text": "Pick",
            "quick_replies": [{"title": "Yes please book it now"}, {"title": "No"}],
        })
        assert rendered["type"] == 2
        assert rendered["replies"] == ["Yes please book it n", "No"]

    def test_generic_template_renders_first_element_as_card(self):
        rendered = Provider("slack").create("generic", ELEMENTS_PAYLOAD)
        assert rendered["title"] == "Paris"
        assert rendered["imageUrl"] == "https://img/paris.png"
        assert rendered["buttons"] == [{"text": "Go", "postback": "GO_PARIS"}]


class TestFacebookRenderers:

    def test_carousel_becomes_generic_template(self):
        rendered = Provider("facebook").create("carousel", ELEMENTS_PAYLOAD)
        assert rendered["type"] == 4
        assert rendered["platform"] == "facebook"
        template = rendered["payload"]["facebook"]["attachment"]["payload"]
        assert template["template_type"] == "generic"
        assert [e["title"] for e in template["elements"]] == ["Paris", "Rome"]
        assert template["elements"][0]["buttons"][0]["payload"] == "GO_PARIS"
        assert "buttons" not in template["elements"][1]

    def test_image(self):
        rendered = Provider("facebook").create("image", {"image_url": "https://img/x.png"})
        assert rendered == {"type": 3, "imageUrl": "https://img/x.png", "platform": "facebook", "lang": "en"}


class TestGoogleRenderers:

    def test_text_is_simple_response(self):
        rendered = Provider("google").create("text", {"text": "Welcome"})
        assert rendered["type"] == "simple_response"
        assert rendered["textToSpeech"] == "Welcome"
        assert rendered["platform"] == "google"

    def test_quick_replies_become_chips(self):
        rendered = Provider("google").create("quick_replies", {
            "quick_replies": [{"title": "A very long suggestion label"}],
        })
        assert rendered["type"] == "suggestion_chips"
        assert rendered["suggestions"] == [{"title": "A very long suggesti"}]

    def test_list_card(self):
        rendered = Provider("google").create("list", ELEMENTS_PAYLOAD)
        assert rendered["type"] == "list_card"
        assert [i["title"] for i in rendered["items"]] == ["Paris", "Rome"]

    def test_carousel_uses_list(self):
        assert Provider("google").create("carousel", ELEMENTS_PAYLOAD)["type"] == "list_card"


class TestSkypeRenderers:

    def test_quick_replies_truncated_to_19(self):
        rendered = Provider("skype").create("quick_replies", {
            "text": "Pick",
            "quick_replies": [{"title": "abcdefghijklmnopqrstuvwxyz"}],
        })
        assert rendered["replies"] == ["abcdefghijklmnopqrs"]
        assert rendered["title"] == "Pick"

    def test_card_buttons_text_only(self):
        rendered = Provider("skype").create("button", CARD_PAYLOAD)
        assert rendered["buttons"] == [{"text": "Open site"}]
        assert rendered["subtitle"] == "Pick one"
        assert rendered["platform"] == "skype"
