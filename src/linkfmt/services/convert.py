"""ConvertService — convert every link of a document or a whole workspace.

Pipeline per document: VALIDATE → CONVERT (per link) → APPLY → RESPOND

A link that fails to convert never aborts the document: the error is
logged, recorded under ``failed`` and surfaced as a warning, and the
remaining links are still converted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from structlog.contextvars import bound_contextvars

from linkfmt.domain.convert import convert_link_format
from linkfmt.domain.errors import LinkFormatError
from linkfmt.domain.types import LinkType
from linkfmt.infrastructure.filesystem import read_document, write_document
from linkfmt.services.base import BaseService
from linkfmt.services.result import ServiceResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from linkfmt.domain.model import LinkReplace, Range, Resource
    from linkfmt.domain.uri import URI

logger = logging.getLogger(__name__)


def apply_replacements(text: str, replacements: Sequence[LinkReplace]) -> str:
    """Return *text* with every replacement applied.

    Replacements are applied from the last position to the first so the
    ranges of earlier ones stay valid.

    Raises:
        ValueError: Two replacements overlap, or a range spans lines or
            falls outside *text*.
    """
    ordered = sorted(replacements, key=lambda rep: rep.range.start, reverse=True)
    for later, earlier in zip(ordered, ordered[1:]):
        if earlier.range.overlaps(later.range):
            msg = f"Overlapping replacements at {earlier.range} and {later.range}"
            raise ValueError(msg)

    lines = text.split("\n")
    for rep in ordered:
        start, end = rep.range.start, rep.range.end
        if start.line != end.line:
            msg = f"Replacement spans multiple lines: {rep.range}"
            raise ValueError(msg)
        if start.line >= len(lines):
            msg = f"Replacement outside text: {rep.range}"
            raise ValueError(msg)
        line = lines[start.line]
        lines[start.line] = line[: start.character] + rep.new_text + line[end.character :]
    return "\n".join(lines)


def _text_at(lines: list[str], rng: Range) -> str:
    if rng.start.line != rng.end.line or rng.start.line >= len(lines):
        return ""
    return lines[rng.start.line][rng.start.character : rng.end.character]


class ConvertService(BaseService):
    """Converts links between wikilink and inline link syntax."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def convert_document(
        self,
        uri: URI,
        target_format: str,
        *,
        text: str | None = None,
    ) -> ServiceResult:
        """Convert all links of the document at *uri* to *target_format*.

        Args:
            uri: Document to convert; must be in the workspace.
            target_format: ``"wikilink"`` or ``"link"``.
            text: Current document text. Read from disk when omitted.

        Returns data ``{path, format, converted, already, unresolved,
        failed, replacements, changed, text}``.
        """
        op = "convert_document"

        # ── VALIDATE ─────────────────────────────────────────────
        fmt = _parse_format(target_format)
        if fmt is None:
            return _unsupported(op, target_format)

        resource = self._workspace.find(uri)
        if resource is None:
            return ServiceResult.failure(
                op,
                "NOT_FOUND",
                f"No document found at {uri.path}",
                path=uri.path,
            )

        if text is None:
            try:
                text = read_document(resource.uri.to_path())
            except OSError as exc:
                return ServiceResult.failure(
                    op,
                    "READ_FAILED",
                    f"Cannot read {resource.uri.path}: {exc}",
                    path=resource.uri.path,
                )

        # ── CONVERT ──────────────────────────────────────────────
        with bound_contextvars(document=self._display_path(resource.uri)):
            data, warnings = self._convert_links(resource, fmt, text)

        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def convert_workspace(
        self,
        target_format: str,
        *,
        paths: Iterable[URI] | None = None,
        write: bool = False,
    ) -> ServiceResult:
        """Convert every document in the workspace (or under *paths*).

        Documents are written back only when *write* is set and their
        text actually changed. A document that cannot be converted is
        reported as a warning; the others are still processed.
        """
        op = "convert"
        fmt = _parse_format(target_format)
        if fmt is None:
            return _unsupported(op, target_format)

        warnings: list[str] = []
        documents = self._select_documents(paths, warnings)

        files: list[dict[str, Any]] = []
        written: list[str] = []
        converted = failed = 0
        for resource in documents:
            result = self.convert_document(resource.uri, fmt)
            if not result.ok:
                msg = result.error.message if result.error else "conversion failed"
                warnings.append(msg)
                continue
            warnings.extend(result.warnings)
            data = result.data
            converted += data["converted"]
            failed += len(data["failed"])
            if data["changed"] or data["failed"]:
                files.append(
                    {
                        "path": data["path"],
                        "converted": data["converted"],
                        "failed": len(data["failed"]),
                        "replacements": data["replacements"],
                    }
                )
            if write and data["changed"]:
                write_document(resource.uri.to_path(), data["text"])
                written.append(data["path"])
                logger.info("Wrote %s (%d links converted)", data["path"], data["converted"])

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "format": str(fmt),
                "documents": len(documents),
                "converted": converted,
                "failed": failed,
                "files": files,
                "written": written,
                "dry_run": not write,
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _convert_links(
        self,
        resource: Resource,
        fmt: LinkType,
        text: str,
    ) -> tuple[dict[str, Any], list[str]]:
        warnings: list[str] = []
        lines = text.split("\n")
        replacements: list[LinkReplace] = []
        changes: list[dict[str, Any]] = []
        failed: list[dict[str, Any]] = []
        already = unresolved = 0

        for link in resource.links:
            if link.type == fmt:
                already += 1
                continue
            line_no = link.range.start.line + 1
            if _text_at(lines, link.range) != link.raw_text:
                message = f"line {line_no}: {link.raw_text!r} no longer matches the document"
                logger.warning("Stale link %s at line %d", link.raw_text, line_no)
                failed.append({"line": line_no, "link": link.raw_text, "error": "stale"})
                warnings.append(f"{self._display_path(resource.uri)}: {message}")
                continue
            try:
                replacement = convert_link_format(link, fmt, self._workspace, resource)
            except LinkFormatError as exc:
                logger.warning("Cannot convert %s at line %d: %s", link.raw_text, line_no, exc)
                failed.append({"line": line_no, "link": link.raw_text, "error": str(exc)})
                warnings.append(f"{self._display_path(resource.uri)}: line {line_no}: {exc}")
                continue
            if replacement.new_text == link.raw_text:
                unresolved += 1
                logger.debug("Left %s unchanged at line %d", link.raw_text, line_no)
                continue
            replacements.append(replacement)
            changes.append({"line": line_no, "old": link.raw_text, "new": replacement.new_text})

        new_text = apply_replacements(text, replacements)
        data: dict[str, Any] = {
            "path": self._display_path(resource.uri),
            "format": str(fmt),
            "converted": len(replacements),
            "already": already,
            "unresolved": unresolved,
            "failed": failed,
            "replacements": changes,
            "changed": new_text != text,
            "text": new_text,
        }
        return data, warnings

    def _select_documents(
        self,
        paths: Iterable[URI] | None,
        warnings: list[str],
    ) -> list[Resource]:
        documents = [res for res in self._workspace.resources() if res.links]
        if paths is None:
            return documents

        selected: dict[str, Resource] = {}
        for uri in paths:
            prefix = uri.path.rstrip("/") + "/"
            matches = [res for res in documents if res.uri.path == uri.path]
            matches += [res for res in documents if res.uri.path.startswith(prefix)]
            if not matches and self._workspace.find(uri) is None:
                warnings.append(f"Not in workspace: {uri.path}")
            for res in matches:
                selected[res.uri.path] = res
        return [selected[path] for path in sorted(selected)]

    def _display_path(self, uri: URI) -> str:
        root = self._workspace.root
        if root is not None and uri.path.startswith(root.path.rstrip("/") + "/"):
            return uri.relative_to(root).path
        return uri.path


def _parse_format(value: str) -> LinkType | None:
    try:
        return LinkType(value)
    except ValueError:
        return None


def _unsupported(op: str, target_format: str) -> ServiceResult:
    choices = ", ".join(t.value for t in LinkType)
    return ServiceResult.failure(
        op,
        "UNSUPPORTED_FORMAT",
        f"Unsupported link format {target_format!r} (expected one of: {choices})",
        format=target_format,
    )
