"""BaseService — shared foundation for linkfmt services.

Every service receives a :class:`MarkdownWorkspace` at construction
time. The workspace is a read-only snapshot; services that write files
reload nothing themselves, callers build a fresh workspace instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linkfmt.infrastructure.workspace import MarkdownWorkspace


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ConvertService(BaseService):
            def convert_document(self, uri: URI, target_format: str) -> ServiceResult:
                resource = self._workspace.find(uri)
                ...
    """

    def __init__(self, workspace: MarkdownWorkspace) -> None:
        self._workspace = workspace

    @property
    def workspace(self) -> MarkdownWorkspace:
        return self._workspace
