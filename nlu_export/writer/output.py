"""
Output Writer - owns the export directory layout on disk.

    <output>/
        agent.json, package.json      (copied templates)
        intents/<basename>.json
        intents/<basename>_usersays_en.json
        entities/<name>.json
        entities/<name>_entries_en.json

Blocking file work runs in a thread so the compiler's event loop keeps
scheduling other entries. Every OS failure surfaces as ArtifactWriteError.
"""

import asyncio
import json
import logging
import os
import shutil
from pathlib import Path
from typing import Optional, Union, Any, List

from nlu_export.compiler.artifacts import TEMPLATES_DIR
from nlu_export.errors import ArtifactWriteError

logger = logging.getLogger(__name__)

USERSAYS_SUFFIX = "_usersays_en"
ENTRIES_SUFFIX = "_entries_en"
SKIPPED_TEMPLATE_PREFIXES = ("intent", "entity")


class OutputWriter:
    """Writes export artifacts under one output directory."""

    def __init__(
        self,
        output_dir: Union[str, Path],
        templates_dir: Optional[Union[str, Path]] = None,
        indent: Optional[int] = 2,
    ):
        self.output_dir = Path(output_dir)
        self.intent_dir = self.output_dir / "intents"
        self.entity_dir = self.output_dir / "entities"
        self.templates_dir = Path(templates_dir) if templates_dir else TEMPLATES_DIR
        self.indent = indent
        self.written: List[Path] = []

    @property
    def archive_path(self) -> Path:
        return self.output_dir.with_name(f"{self.output_dir.name}.zip")

    # ── Layout ────────────────────────────────────────────────────────

    def prepare(self) -> None:
        """Remove any previous output and re-create the directory tree."""
        try:
            if self.output_dir.exists():
                shutil.rmtree(self.output_dir)
            self.intent_dir.mkdir(parents=True, exist_ok=True)
            self.entity_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactWriteError(f"Could not prepare output directory {self.output_dir}: {e}") from e
        logger.debug(f"[WRITER] Prepared {self.output_dir}")

    # ── JSON documents ────────────────────────────────────────────────

    def _dump(self, path: Path, document: Any) -> None:
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=self.indent, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            raise ArtifactWriteError(f"Could not write {path}: {e}") from e

    async def write_json(self, path: Path, document: Any) -> Path:
        await asyncio.to_thread(self._dump, path, document)
        self.written.append(path)
        return path

    async def write_intent(self, basename: str, document: Any) -> Path:
        return await self.write_json(self.intent_dir / f"{basename}.json", document)

    async def write_usersays(self, basename: str, utterances: List[Any]) -> Path:
        return await self.write_json(self.intent_dir / f"{basename}{USERSAYS_SUFFIX}.json", utterances)

    async def write_entity(self, name: str, document: Any, entries: Any) -> List[Path]:
        definition = await self.write_json(self.entity_dir / f"{name}.json", document)
        data = await self.write_json(self.entity_dir / f"{name}{ENTRIES_SUFFIX}.json", entries)
        return [definition, data]

    # ── Templates & packaging ─────────────────────────────────────────

    def copy_templates(self) -> List[Path]:
        """Copy static templates into the output root, skipping intent/entity templates."""
        copied = []
        try:
            for filename in sorted(os.listdir(self.templates_dir)):
                if filename.startswith(SKIPPED_TEMPLATE_PREFIXES):
                    continue
                source = self.templates_dir / filename
                if not source.is_file():
                    continue
                target = self.output_dir / filename
                shutil.copyfile(source, target)
                copied.append(target)
        except OSError as e:
            raise ArtifactWriteError(f"Could not copy templates from {self.templates_dir}: {e}") from e
        self.written.extend(copied)
        return copied

    def archive(self, remove_source: bool = True) -> Path:
        """Zip the output directory next to itself, replacing any previous archive."""
        target = self.archive_path
        try:
            if target.exists():
                target.unlink()
            logger.info(f"[WRITER] Zipping {self.output_dir} -> {target}")
            shutil.make_archive(str(target.with_suffix("")), "zip", root_dir=self.output_dir)
            if remove_source:
                shutil.rmtree(self.output_dir)
        except OSError as e:
            raise ArtifactWriteError(f"Could not archive {self.output_dir}: {e}") from e
        return target
