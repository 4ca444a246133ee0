"""
Utterance tokenizer - splits training phrases into plain-text and
entity-annotated segments in the usersays format of the NLU platform.
"""

import uuid
from typing import Dict, List, Any, Iterable, Tuple

from nlu_export.compiler.manifest import Utterance, Variable


def plain_token(text: str) -> Dict[str, Any]:
    return {"text": text, "userDefined": False}


def entity_token(text: str, variable: Variable) -> Dict[str, Any]:
    return {
        "text": text,
        "meta": f"@{variable.entity}",
        "alias": variable.alias,
        "userDefined": True,
    }


def _spans(variables: Iterable[Variable]) -> Dict[str, Tuple[Variable, int, int]]:
    # keyed by id: a repeated id keeps its first position but takes the last span
    spans: Dict[str, Tuple[Variable, int, int]] = {}
    for var in variables:
        spans[var.id] = (var, var.start_index, var.end_index)
    return spans


def tokenize_text(text: str, variables: Iterable[Variable]) -> List[Dict[str, Any]]:
    """
    Tokenize `text` against its variables, in declaration order.

    Plain text before each variable is emitted only when the variable does
    not start at the cursor. The cursor moves to each variable's end except
    the last one, whose end starts the trailing token; the trailing token is
    always emitted, even when empty.
    """
    spans = _spans(variables)
    if not spans:
        return [plain_token(text)]

    data: List[Dict[str, Any]] = []
    last_index = 0
    last_id = next(reversed(spans))
    for var_id, (var, start, end) in spans.items():
        if start != last_index:
            data.append(plain_token(text[last_index:start]))
        data.append(entity_token(text[start:end], var))
        if var_id != last_id:
            last_index = end
        else:
            data.append(plain_token(text[end:]))
    return data


def tokenize_utterance(utterance: Utterance, updated_ms: int) -> Dict[str, Any]:
    """Build one usersays entry for an utterance."""
    return {
        "id": str(uuid.uuid4()),
        "data": tokenize_text(utterance.text, utterance.variables),
        "count": 0,
        "isTemplate": False,
        "updated": updated_ms,
    }
