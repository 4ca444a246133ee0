"""
Export Compiler - Compiles a project snapshot into NLU agent artifacts.
This is the bridge between the conversation board and the NLU platform's
import format.

Compilation Pipeline:
1. Graph validation (every edge target and intent tag must resolve)
2. Privileged-message map (message -> intents leading into it)
3. Welcome-node detection (one-shot)
4. Bounded export phase, per privileged message and mapped intent:
   intermediate nodes -> affected contexts -> rendered messages ->
   intent definition -> tokenized utterances
5. Entity definitions and entries
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Optional, Dict, List, Tuple, TYPE_CHECKING

from pydantic import BaseModel, Field

from nlu_export.compiler.artifacts import (
    AffectedContext,
    EntityArtifact,
    IntentArtifact,
    IntentResponse,
    artifact_basename,
    default_response_platforms,
    load_template,
    safe_filename,
)
from nlu_export.compiler.manifest import (
    Intent,
    Message,
    MessageGraph,
    ProjectSnapshot,
    build_intent_map,
)
from nlu_export.compiler.pool import BoundedWorkerPool
from nlu_export.compiler.tokenizer import tokenize_utterance
from nlu_export.compiler.traversal import (
    WELCOME_EVENT,
    collect_intermediate_nodes,
    detect_welcome_node,
    resolve_affected_contexts,
)
from nlu_export.errors import GraphIntegrityError
from nlu_export.providers import Provider, normalize_platform

if TYPE_CHECKING:
    from nlu_export.writer.output import OutputWriter

logger = logging.getLogger(__name__)


class PairingState(str, Enum):
    """Lifecycle of one (message, intent) pairing."""
    PENDING = "pending"
    RENDERING = "rendering"
    WRITTEN = "written"
    FAILED = "failed"


class ExportResult(BaseModel):
    """Result of compiling a project snapshot."""
    success: bool = False
    platform: str = ""
    message_count: int = 0
    privileged_count: int = 0
    intent_files: int = 0
    utterance_files: int = 0
    entity_files: int = 0
    welcome_message_id: Optional[str] = None
    peak_concurrency: int = 0
    compilation_time_ms: float = 0.0
    pairings: Dict[str, PairingState] = Field(default_factory=dict)
    errors: List[str] = Field(default_factory=list)


def pairing_key(message_id: str, intent_id: str) -> str:
    return f"{message_id}:{intent_id}"


class ExportCompiler:
    """
    Compiles a ProjectSnapshot into intent and entity files.
    The snapshot, graph and intent table are fixed at construction; a run
    never mutates them. Failures abort the run (no partial-success mode).
    """

    def __init__(
        self,
        snapshot: ProjectSnapshot,
        writer: "OutputWriter",
        concurrency: Optional[int] = None,
        platform: Optional[str] = None,
    ):
        self.snapshot = snapshot
        self.writer = writer
        self.platform = normalize_platform(platform or snapshot.platform) or "generic"
        self.graph = MessageGraph(snapshot.board)
        self.intents: Dict[str, Intent] = snapshot.intent_table()
        self.provider = Provider(self.platform)
        self.pool = BoundedWorkerPool(concurrency)
        self._intent_template = load_template("intent", writer.templates_dir)
        self._entity_template = load_template("entity", writer.templates_dir)
        self.result = ExportResult(platform=self.platform, message_count=len(self.graph))
        self._privileged: Dict[str, List[str]] = {}

    # ── Entry points ──────────────────────────────────────────────────

    def compile(self) -> ExportResult:
        """Synchronous wrapper around run()."""
        return asyncio.run(self.run())

    async def run(self) -> ExportResult:
        start = time.time()
        try:
            problems = self.graph.validate(self.intents)
            if problems:
                raise GraphIntegrityError(
                    f"Board failed integrity check ({len(problems)} problems): {problems[0]}",
                    problems,
                )

            privileged = build_intent_map(self.graph)
            self._check_basenames(privileged)
            self._privileged = privileged
            welcome_id = detect_welcome_node(self.graph, privileged)
            self.result.privileged_count = len(privileged)
            self.result.welcome_message_id = welcome_id
            for message_id, intent_ids in privileged.items():
                for intent_id in intent_ids:
                    self.result.pairings[pairing_key(message_id, intent_id)] = PairingState.PENDING

            logger.info(
                f"[EXPORT] Writing {len(self.result.pairings)} intents from "
                f"{len(privileged)} messages (platform={self.platform}, workers={self.pool.capacity})"
            )

            async def handle(entry: Tuple[str, List[str]]) -> None:
                message_id, intent_ids = entry
                await self._export_message(message_id, intent_ids, welcome_id)

            await self.pool.run(list(privileged.items()), handle)
            await self._export_entities()
            self.result.success = True
        except Exception as e:
            self.result.errors.append(str(e))
            raise
        finally:
            self.result.peak_concurrency = self.pool.peak_in_flight
            self.result.compilation_time_ms = round((time.time() - start) * 1000, 1)
        logger.info(
            f"[EXPORT] Done: {self.result.intent_files} intents, "
            f"{self.result.utterance_files} utterance files, {self.result.entity_files} entity files "
            f"in {self.result.compilation_time_ms}ms"
        )
        return self.result

    # ── Intent phase ──────────────────────────────────────────────────

    async def _export_message(self, message_id: str, intent_ids: List[str], welcome_id: Optional[str]) -> None:
        message = self.graph.get(message_id)
        for intent_id in intent_ids:
            key = pairing_key(message_id, intent_id)
            self.result.pairings[key] = PairingState.RENDERING
            try:
                await self._export_pairing(message, self._intent(intent_id), message_id == welcome_id)
            except Exception:
                self.result.pairings[key] = PairingState.FAILED
                raise
            self.result.pairings[key] = PairingState.WRITTEN

    async def _export_pairing(self, message: Message, intent: Intent, is_welcome: bool) -> None:
        basename = artifact_basename(intent.name, message.node_name)
        artifact = self.build_intent_artifact(message, intent, is_welcome)
        await self.writer.write_intent(basename, artifact.to_document(self._intent_template))
        self.result.intent_files += 1

        if intent.utterances:
            utterances = [tokenize_utterance(u, intent.updated_ms) for u in intent.utterances]
            await self.writer.write_usersays(basename, utterances)
            self.result.utterance_files += 1
        logger.debug(f"[EXPORT] Wrote {basename}")

    def build_intent_artifact(self, message: Message, intent: Intent, is_welcome: bool) -> IntentArtifact:
        """Assemble the intent definition for one (message, intent) pairing."""
        intermediate = collect_intermediate_nodes(
            self.graph, message.next_message_ids, self._privileged, message.message_id
        )
        contexts = resolve_affected_contexts(message.next_message_ids, intermediate, self.intents)
        rendered = [
            self.provider.create(m.message_type, m.payload)
            for m in [message, *intermediate]
        ]
        return IntentArtifact(
            name=artifact_basename(intent.name, message.node_name),
            contexts=[] if is_welcome else [intent.name],
            events=[{"name": WELCOME_EVENT}] if is_welcome else [],
            last_update=intent.updated_ms,
            responses=[
                IntentResponse(
                    affected_contexts=[AffectedContext(**c) for c in contexts],
                    default_response_platforms=default_response_platforms(self.platform),
                    messages=rendered,
                )
            ],
        )

    def _check_basenames(self, privileged: Dict[str, List[str]]) -> None:
        """Each (message, intent) pairing must map to its own intent file."""
        owners: Dict[str, str] = {}
        for message_id, intent_ids in privileged.items():
            node_name = self.graph.get(message_id).node_name
            for intent_id in intent_ids:
                key = pairing_key(message_id, intent_id)
                basename = artifact_basename(self._intent(intent_id).name, node_name)
                if basename in owners:
                    raise GraphIntegrityError(
                        f"Pairings {owners[basename]} and {key} both export as '{basename}'"
                    )
                owners[basename] = key

    def _intent(self, intent_id: str) -> Intent:
        intent = self.intents.get(intent_id)
        if intent is None:
            raise GraphIntegrityError(f"Intent '{intent_id}' not found")
        return intent

    # ── Entity phase ──────────────────────────────────────────────────

    async def _export_entities(self) -> None:
        async def write(entity) -> None:
            document = EntityArtifact(name=entity.name).to_document(self._entity_template)
            await self.writer.write_entity(safe_filename(entity.name), document, entity.data)
            self.result.entity_files += 1

        await asyncio.gather(*[write(e) for e in self.snapshot.entities])
