"""
Graph queries used by the export compiler:
intermediate-node collection, welcome-node detection and context resolution.
All functions are pure over a MessageGraph; state is passed in explicitly.
"""

from typing import Optional, Dict, List, Any, Iterable, Set, Container

from nlu_export.errors import GraphIntegrityError
from nlu_export.compiler.manifest import Intent, Message, MessageGraph, NextMessage

WELCOME_EVENT = "WELCOME"
CONTEXT_LIFESPAN = 1


def is_decision_point(message: Message) -> bool:
    """A node ends a pass-through chain when it has no edges or any intent-tagged edge."""
    edges = message.next_message_ids
    return not edges or any(e.is_tagged for e in edges)


def collect_intermediate_nodes(
    graph: MessageGraph,
    next_edges: Iterable[NextMessage],
    privileged: Container[str] = (),
    origin_id: Optional[str] = None,
) -> List[Message]:
    """
    Expand outgoing edges into the chain of pass-through messages.

    Only untagged edges are followed. A privileged target belongs to its own
    intents and is neither collected nor walked through. Each other reached
    message is appended; the walk continues depth-first through its edges
    unless it is a decision point. The origin and any message seen twice
    stop that branch.
    """
    collected: List[Message] = []
    visited: Set[str] = {origin_id} if origin_id else set()
    stack = list(reversed(list(next_edges)))
    while stack:
        edge = stack.pop()
        if edge.is_tagged or edge.message_id in visited or edge.message_id in privileged:
            continue
        visited.add(edge.message_id)
        message = graph.get(edge.message_id)
        collected.append(message)
        if not is_decision_point(message):
            stack.extend(reversed(message.next_message_ids))
    return collected


def root_adjacency(graph: MessageGraph, message: Message) -> int:
    """Number of incoming edges that originate from a declared root."""
    return sum(1 for e in message.previous_message_ids if graph.is_root(e.message_id))


def detect_welcome_node(
    graph: MessageGraph, privileged: Optional[Dict[str, Any]] = None
) -> Optional[str]:
    """
    Pick the message most likely to be the conversation entry point.

    Candidates are the privileged messages when there are any, otherwise the
    whole board, in board order. The candidate with the most incoming edges
    from root messages wins; sorted() is stable so ties go to the earliest.
    """
    if privileged:
        candidates = [m for m in graph.messages if m.message_id in privileged]
    else:
        candidates = graph.messages
    if not candidates:
        return None
    ranked = sorted(candidates, key=lambda m: root_adjacency(graph, m), reverse=True)
    return ranked[0].message_id


def _contexts_for(edges: Iterable[NextMessage], intents: Dict[str, Intent]) -> List[Dict[str, Any]]:
    contexts = []
    for edge in edges:
        if not edge.is_tagged:
            continue
        intent = intents.get(edge.intent)
        if intent is None:
            raise GraphIntegrityError(f"Intent '{edge.intent}' not found")
        contexts.append({"name": intent.name, "parameters": {}, "lifespan": CONTEXT_LIFESPAN})
    return contexts


def resolve_affected_contexts(
    node_edges: Iterable[NextMessage],
    intermediate_nodes: Iterable[Message],
    intents: Dict[str, Intent],
) -> List[Dict[str, Any]]:
    """
    Output contexts for a compiled node: intents emanating from any
    intermediate node, followed by those emanating from the node itself.
    Repeats are kept.
    """
    affected: List[Dict[str, Any]] = []
    for node in intermediate_nodes:
        affected.extend(_contexts_for(node.next_message_ids, intents))
    affected.extend(_contexts_for(node_edges, intents))
    return affected
