"""
Tests for the utterance tokenizer.
Run: pytest tests/test_tokenizer.py -v
"""
import uuid

from nlu_export.compiler.manifest import Utterance, Variable
from nlu_export.compiler.tokenizer import tokenize_text, tokenize_utterance

BOOKING = "Book a %flight% to %city%"
BOOKING_VARS = [
    Variable(id="v1", name="%flight%", entity="flight_entity", start_index=7),
    Variable(id="v2", name="%city%", entity="city", start_index=19),
]


def _joined(tokens):
    return "".join(t["text"] for t in tokens)


class TestTokenizeText:

    def test_no_variables_single_plain_token(self):
        tokens = tokenize_text("just some words", [])
        assert tokens == [{"text": "just some words", "userDefined": False}]

    def test_two_variables_five_tokens(self):
        tokens = tokenize_text(BOOKING, BOOKING_VARS)
        assert len(tokens) == 5
        assert tokens[0] == {"text": "Book a ", "userDefined": False}
        assert tokens[1] == {
            "text": "%flight%",
            "meta": "@flight_entity",
            "alias": "flight",
            "userDefined": True,
        }
        assert tokens[2] == {"text": " to ", "userDefined": False}
        assert tokens[3]["meta"] == "@city"
        assert tokens[3]["userDefined"] is True
        assert tokens[4] == {"text": "", "userDefined": False}

    def test_concatenation_reproduces_text(self):
        text = "from %origin% to %destination% on %date% please"
        variables = [
            Variable(id="a", name="%origin%", entity="city", start_index=5),
            Variable(id="b", name="%destination%", entity="city", start_index=17),
            Variable(id="c", name="%date%", entity="sys.date", start_index=34),
        ]
        tokens = tokenize_text(text, variables)
        assert _joined(tokens) == text
        assert [t["userDefined"] for t in tokens] == [False, True, False, True, False, True, False]

    def test_variable_at_start_has_no_leading_token(self):
        tokens = tokenize_text("%city% is lovely", [Variable(id="v", name="%city%", entity="city", start_index=0)])
        assert tokens[0]["userDefined"] is True
        assert tokens[1] == {"text": " is lovely", "userDefined": False}
        assert len(tokens) == 2

    def test_adjacent_variables(self):
        text = "[a][b] end"
        variables = [
            Variable(id="1", name="[a]", entity="x", start_index=0),
            Variable(id="2", name="[b]", entity="y", start_index=3),
        ]
        tokens = tokenize_text(text, variables)
        assert [t["text"] for t in tokens] == ["[a]", "[b]", " end"]


class TestTokenizeUtterance:

    def test_envelope(self):
        entry = tokenize_utterance(Utterance(text=BOOKING, variables=BOOKING_VARS), 1565715023000)
        uuid.UUID(entry["id"])
        assert entry["updated"] == 1565715023000
        assert entry["count"] == 0
        assert entry["isTemplate"] is False
        assert _joined(entry["data"]) == BOOKING

    def test_fresh_ids(self):
        u = Utterance(text="hi")
        assert tokenize_utterance(u, 0)["id"] != tokenize_utterance(u, 0)["id"]
