"""
Artifact schemas - the JSON documents written into the agent export.
Each artifact is merged over the static template of its kind, so fields the
compiler does not own (priority, webhook flags, ...) keep template values.
"""

import json
import re
import uuid
from pathlib import Path
from typing import Optional, Dict, List, Any

from pydantic import BaseModel, ConfigDict, Field

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# Integrations the NLU platform can mark as default response platforms
SUPPORTED_PLATFORMS = frozenset({
    "facebook", "slack", "telegram", "kik", "viber", "skype", "line", "google", "twitter",
})

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')
_WORD_BOUNDARY = re.compile(r"[\W_]+")


def load_template(kind: str, templates_dir: Optional[Path] = None) -> Dict[str, Any]:
    path = (templates_dir or TEMPLATES_DIR) / f"{kind}.json"
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _split_case(chunk: str) -> List[str]:
    # lower or digit followed by upper starts a new word, in any script
    words, start = [], 0
    for i in range(1, len(chunk)):
        prev, cur = chunk[i - 1], chunk[i]
        if cur.isupper() and (prev.islower() or prev.isdigit()):
            words.append(chunk[start:i])
            start = i
    words.append(chunk[start:])
    return words


def camel_case(value: str) -> str:
    """'Welcome node' / 'welcome_node' / 'WelcomeNode' -> 'welcomeNode'. Letters of any script are kept."""
    words = []
    for chunk in _WORD_BOUNDARY.split(value or ""):
        words.extend(w for w in _split_case(chunk) if w)
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in tail)


def safe_filename(value: str) -> str:
    """Replace characters that are not allowed in file names on common filesystems."""
    cleaned = _UNSAFE_CHARS.sub("_", value or "").strip().strip(".")
    return cleaned or "_"


def artifact_basename(intent_name: str, node_name: str) -> str:
    """`<intentName>_<camelCasedNodeName>`, safe to use as a file name."""
    return safe_filename(f"{intent_name}_{camel_case(node_name)}")


def default_response_platforms(platform: str) -> Dict[str, bool]:
    key = (platform or "").lower()
    return {key: True} if key in SUPPORTED_PLATFORMS else {}


class _Artifact(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_document(self, template: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return {**(template or {}), **self.model_dump(by_alias=True)}


class AffectedContext(_Artifact):
    name: str
    parameters: Dict[str, Any] = Field(default_factory=dict)
    lifespan: int = 1


class IntentResponse(_Artifact):
    action: str = ""
    speech: List[Any] = Field(default_factory=list)
    parameters: List[Any] = Field(default_factory=list)
    reset_contexts: bool = Field(default=False, alias="resetContexts")
    affected_contexts: List[AffectedContext] = Field(default_factory=list, alias="affectedContexts")
    default_response_platforms: Dict[str, bool] = Field(default_factory=dict, alias="defaultResponsePlatforms")
    messages: List[Dict[str, Any]] = Field(default_factory=list)


class IntentArtifact(_Artifact):
    """One intent definition, owned by a (intent, message) pair."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    contexts: List[str] = Field(default_factory=list)
    events: List[Dict[str, str]] = Field(default_factory=list)
    last_update: int = Field(default=0, alias="lastUpdate")
    responses: List[IntentResponse] = Field(default_factory=list)


class EntityArtifact(_Artifact):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
