"""
Export error taxonomy. Every failure raised by the compiler, the project
client or the output writer derives from ExportError so the CLI can treat
them uniformly (log, report, exit non-zero). Nothing here is retried.
"""

from typing import List, Optional


class ExportError(Exception):
    """Base class for all export failures."""


class GraphIntegrityError(ExportError):
    """The message graph references a message or intent that does not exist."""

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        super().__init__(message)
        self.problems = problems or []


class MessageNotFoundError(GraphIntegrityError, KeyError):
    """Lookup of an unknown message id."""

    def __init__(self, message_id: str):
        super().__init__(f"Message '{message_id}' not found in board")
        self.message_id = message_id

    def __str__(self) -> str:
        return self.args[0]


class RenderError(ExportError):
    """A platform provider could not produce any response shape."""


class ArtifactWriteError(ExportError, OSError):
    """Writing, copying or archiving an output file failed."""


class InputTimeoutError(ExportError):
    """The project-data source did not deliver a snapshot in time."""


class ProjectFetchError(ExportError):
    """The project-data source answered with an error status."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code
