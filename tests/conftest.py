"""
Shared fixtures for the NLU export test suite.
"""
import sys
import os
import copy
import pytest

# Ensure project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Set env vars before any imports that read them
os.environ.setdefault("LOG_LEVEL", "DEBUG")
for _var in ("BOTMOCK_TOKEN", "BOTMOCK_TEAM_ID", "BOTMOCK_PROJECT_ID", "BOTMOCK_BOARD_ID", "OUTPUT_DIR"):
    os.environ.pop(_var, None)


def edge(target, intent=None):
    """Upstream-shaped next_message_ids entry."""
    return {"message_id": target, "intent": {"value": intent, "label": intent} if intent else ""}


PROJECT_DATA = {
    "platform": "slack",
    "board": {
        "root_messages": ["root"],
        "messages": [
            {
                "message_id": "root",
                "message_type": "text",
                "payload": {"text": "", "nodeName": "Root"},
                "next_message_ids": [edge("welcome", "i-hello"), edge("welcome", "i-hi")],
                "previous_message_ids": [],
            },
            {
                "message_id": "welcome",
                "message_type": "text",
                "payload": {"text": "Hi there!", "nodeName": "Welcome Node"},
                "next_message_ids": [edge("ask")],
                "previous_message_ids": [{"message_id": "root"}, {"message_id": "root"}],
            },
            {
                "message_id": "ask",
                "message_type": "quick_replies",
                "payload": {
                    "text": "Shall I book?",
                    "nodeName": "Ask",
                    "quick_replies": [
                        {"title": "Yes please book it now", "payload": "yes"},
                        {"title": "No", "payload": "no"},
                    ],
                },
                "next_message_ids": [edge("book", "i-book"), edge("bye", "i-bye")],
                "previous_message_ids": [{"message_id": "welcome"}],
            },
            {
                "message_id": "book",
                "message_type": "button",
                "payload": {
                    "text": "Booked",
                    "nodeName": "book flight",
                    "buttons": [{"title": "Open", "payload": "open"}],
                },
                "next_message_ids": [],
                "previous_message_ids": [{"message_id": "ask"}],
            },
            {
                "message_id": "bye",
                "message_type": "text",
                "payload": {"text": "Bye", "nodeName": "Goodbye"},
                "next_message_ids": [],
                "previous_message_ids": [{"message_id": "ask"}],
            },
        ],
    },
    "intents": [
        {
            "id": "i-hello",
            "name": "hello",
            "updated_at": {"date": "2019-08-13 16:50:23.000000", "timezone_type": 3, "timezone": "UTC"},
            "utterances": [{"text": "hello", "variables": []}],
        },
        {"id": "i-hi", "name": "hi", "updated_at": "2019-08-13T16:50:23Z", "utterances": []},
        {
            "id": "i-book",
            "name": "book",
            "updated_at": "2019-08-14T10:00:00Z",
            "utterances": [
                {
                    "text": "Book a %flight% to %city%",
                    "variables": [
                        {"id": "v1", "name": "%flight%", "entity": "flight_entity", "start_index": 7},
                        {"id": "v2", "name": "%city%", "entity": "city", "start_index": 19},
                    ],
                }
            ],
        },
        {"id": "i-bye", "name": "bye", "updated_at": "2019-08-14T10:00:00Z", "utterances": []},
    ],
    "entities": [
        {"id": "e1", "name": "city", "data": [{"value": "Paris", "synonyms": ["Paris", "City of Light"]}]},
    ],
}


@pytest.fixture
def project_data():
    """Upstream-shaped project payload (fresh copy per test)."""
    return copy.deepcopy(PROJECT_DATA)


@pytest.fixture
def snapshot(project_data):
    """ProjectSnapshot built from the sample project."""
    from nlu_export.compiler.manifest import ProjectSnapshot
    return ProjectSnapshot.model_validate(project_data)


@pytest.fixture
def graph(snapshot):
    """MessageGraph over the sample board."""
    from nlu_export.compiler.manifest import MessageGraph
    return MessageGraph(snapshot.board)


@pytest.fixture
def writer(tmp_path):
    """Fresh OutputWriter under a temp directory, already prepared."""
    from nlu_export.writer.output import OutputWriter
    w = OutputWriter(tmp_path / "output")
    w.prepare()
    return w
