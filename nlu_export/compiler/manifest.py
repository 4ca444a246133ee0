"""
Project Snapshot Schema - In-memory model of a conversational flow project.
The snapshot is delivered once by the project-data source and stays frozen
for the whole export run. MessageGraph is the read-only index the compiler
walks; it never mutates the board.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, List, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nlu_export.errors import MessageNotFoundError


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class NextMessage(_Frozen):
    """An outgoing edge. `intent` is the id of the intent gating the transition."""
    message_id: str
    intent: Optional[str] = None

    @field_validator("intent", mode="before")
    @classmethod
    def unwrap_intent(cls, v: Any) -> Optional[str]:
        # upstream sends {"value": <id>, "label": <name>} or "" for untagged edges
        if isinstance(v, dict):
            v = v.get("value")
        return v or None

    @property
    def is_tagged(self) -> bool:
        return bool(self.intent)


class PreviousMessage(_Frozen):
    """An incoming edge."""
    message_id: str


class Message(_Frozen):
    """A single node of the conversation board."""
    message_id: str
    message_type: str = "text"
    payload: Dict[str, Any] = Field(default_factory=dict)
    next_message_ids: List[NextMessage] = Field(default_factory=list)
    previous_message_ids: List[PreviousMessage] = Field(default_factory=list)

    @property
    def node_name(self) -> str:
        return str(self.payload.get("nodeName") or self.message_id)


class Variable(_Frozen):
    """An annotated span inside an utterance; its length is len(name)."""
    id: str
    name: str
    entity: str = ""
    start_index: int = 0

    @property
    def end_index(self) -> int:
        return self.start_index + len(self.name)

    @property
    def alias(self) -> str:
        """Display name without its surrounding markers (e.g. %city% -> city)."""
        return self.name[1:-1] if len(self.name) >= 2 else self.name


class Utterance(_Frozen):
    text: str = ""
    variables: List[Variable] = Field(default_factory=list)


class Intent(_Frozen):
    id: str
    name: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    utterances: List[Utterance] = Field(default_factory=list)

    @field_validator("updated_at", mode="before")
    @classmethod
    def unwrap_date(cls, v: Any) -> Any:
        # upstream timestamps look like {"date": "2019-08-13 16:50:23.000000", "timezone": "UTC"}
        if isinstance(v, dict):
            v = v.get("date")
        return v

    @field_validator("updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)

    @property
    def updated_ms(self) -> int:
        """Last update as epoch milliseconds."""
        return int(self.updated_at.timestamp() * 1000)


class Entity(_Frozen):
    id: str = ""
    name: str
    data: Any = Field(default_factory=list)


class Board(_Frozen):
    messages: List[Message] = Field(default_factory=list)
    root_messages: List[str] = Field(default_factory=list)


class ProjectSnapshot(_Frozen):
    """Everything one export run needs, fully resolved."""
    platform: str = "generic"
    board: Board = Field(default_factory=Board)
    intents: List[Intent] = Field(default_factory=list)
    entities: List[Entity] = Field(default_factory=list)

    def intent_table(self) -> Dict[str, Intent]:
        return {i.id: i for i in self.intents}


class MessageGraph:
    """
    Read-only index over the board's messages.
    Lookups are O(1); an unknown id is a corrupt graph and raises
    MessageNotFoundError instead of being skipped.
    """

    def __init__(self, board: Board):
        self._board = board
        self._messages: Dict[str, Message] = {m.message_id: m for m in board.messages}
        self._roots = frozenset(board.root_messages)

    @property
    def messages(self) -> List[Message]:
        """Messages in board order."""
        return list(self._board.messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __contains__(self, message_id: str) -> bool:
        return message_id in self._messages

    def contains(self, message_id: str) -> bool:
        return message_id in self._messages

    def get(self, message_id: str) -> Message:
        try:
            return self._messages[message_id]
        except KeyError:
            raise MessageNotFoundError(message_id) from None

    def is_root(self, message_id: str) -> bool:
        return message_id in self._roots

    def outgoing(self, message_id: str) -> List[NextMessage]:
        return list(self.get(message_id).next_message_ids)

    def validate(self, intents: Optional[Dict[str, Intent]] = None) -> List[str]:
        """Check edges and roots against the index. Returns a list of problems."""
        errors = []
        for root_id in self._board.root_messages:
            if root_id not in self._messages:
                errors.append(f"Root message '{root_id}' not found")
        for m in self._board.messages:
            for edge in m.next_message_ids:
                if edge.message_id not in self._messages:
                    errors.append(f"Message {m.message_id}: next message '{edge.message_id}' not found")
                if intents is not None and edge.intent and edge.intent not in intents:
                    errors.append(f"Message {m.message_id}: intent '{edge.intent}' not found")
            for edge in m.previous_message_ids:
                if edge.message_id not in self._messages:
                    errors.append(f"Message {m.message_id}: previous message '{edge.message_id}' not found")
        return errors


def build_intent_map(graph: MessageGraph) -> Dict[str, List[str]]:
    """
    Map each privileged message to the intents that lead into it.

    Scans every outgoing edge in board order; an intent-tagged edge marks
    its target as a decision point owned by that intent. Intent ids keep
    first-seen order and are not repeated.
    """
    intent_map: Dict[str, List[str]] = {}
    for message in graph.messages:
        for edge in message.next_message_ids:
            if not edge.is_tagged:
                continue
            owners = intent_map.setdefault(edge.message_id, [])
            if edge.intent not in owners:
                owners.append(edge.intent)
    return intent_map
