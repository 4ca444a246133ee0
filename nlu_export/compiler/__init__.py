"""Export Compiler - Compile conversation boards into NLU agent artifacts"""
from .manifest import (
    Board, Entity, Intent, Message, MessageGraph, NextMessage,
    PreviousMessage, ProjectSnapshot, Utterance, Variable, build_intent_map,
)
from .compiler import ExportCompiler, ExportResult, PairingState
from .pool import BoundedWorkerPool
from .tokenizer import tokenize_text, tokenize_utterance
from .traversal import collect_intermediate_nodes, detect_welcome_node, resolve_affected_contexts

__all__ = [
    "Board",
    "Entity",
    "Intent",
    "Message",
    "MessageGraph",
    "NextMessage",
    "PreviousMessage",
    "ProjectSnapshot",
    "Utterance",
    "Variable",
    "build_intent_map",
    "ExportCompiler",
    "ExportResult",
    "PairingState",
    "BoundedWorkerPool",
    "tokenize_text",
    "tokenize_utterance",
    "collect_intermediate_nodes",
    "detect_welcome_node",
    "resolve_affected_contexts",
]
