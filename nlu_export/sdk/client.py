"""
Project Client - fetches a complete project snapshot from the Botmock API.
The compiler only ever sees the resulting ProjectSnapshot; this module is
the single place that knows URLs, auth and response envelopes.
"""

import asyncio
import logging
from typing import Optional, Dict, List, Any

import httpx

from nlu_export.compiler.manifest import Board, Entity, Intent, ProjectSnapshot
from nlu_export.errors import InputTimeoutError, ProjectFetchError

logger = logging.getLogger(__name__)


class ProjectClient:
    """Async client for one team/project/board triple."""

    def __init__(
        self,
        token: str,
        team_id: str,
        project_id: str,
        board_id: str,
        base_url: str = "https://app.botmock.com/api",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.team_id = team_id
        self.project_id = project_id
        self.board_id = board_id
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
        )
        logger.info(f"[SDK] Initialized with base_url={self.base_url}")

    @classmethod
    def from_settings(cls, settings=None, **kwargs) -> "ProjectClient":
        if settings is None:
            from nlu_export.config.settings import settings
        return cls(
            token=settings.botmock_token or "",
            team_id=settings.botmock_team_id,
            project_id=settings.botmock_project_id,
            board_id=settings.botmock_board_id,
            base_url=settings.botmock_api_url,
            timeout=settings.request_timeout_seconds,
            **kwargs,
        )

    @property
    def project_path(self) -> str:
        return f"/teams/{self.team_id}/projects/{self.project_id}"

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ProjectClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    # ── Requests ──────────────────────────────────────────────────

    async def _get(self, path: str) -> Any:
        try:
            resp = await self._client.get(path)
        except httpx.TimeoutException as e:
            raise InputTimeoutError(f"Timed out fetching {path}") from e
        if resp.status_code >= 400:
            raise ProjectFetchError(
                f"GET {path} failed with status {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )
        return resp.json()

    async def get_project(self) -> Dict[str, Any]:
        return await self._get(self.project_path)

    async def get_board(self) -> Board:
        data = await self._get(f"{self.project_path}/boards/{self.board_id}")
        return Board.model_validate(data.get("board", data))

    async def get_intents(self) -> List[Intent]:
        data = await self._get(f"{self.project_path}/intents")
        return [Intent.model_validate(i) for i in _unwrap(data, "intents")]

    async def get_entities(self) -> List[Entity]:
        data = await self._get(f"{self.project_path}/entities")
        return [Entity.model_validate(e) for e in _unwrap(data, "entities")]

    async def fetch(self) -> ProjectSnapshot:
        """Fetch project, board, intents and entities concurrently."""
        logger.info(f"[SDK] Fetching project {self.project_id} board {self.board_id}")
        project, board, intents, entities = await asyncio.gather(
            self.get_project(),
            self.get_board(),
            self.get_intents(),
            self.get_entities(),
        )
        return ProjectSnapshot(
            platform=project.get("platform") or "generic",
            board=board,
            intents=intents,
            entities=entities,
        )


def _unwrap(data: Any, key: str) -> List[Any]:
    if isinstance(data, dict):
        return data.get(key) or data.get("data") or []
    return data or []
