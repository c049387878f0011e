"""Return types shared by every service method.

Services never raise for expected failures such as an unknown document
or an unsupported format. They return a ``ServiceResult`` with
``ok=False`` and a :class:`ServiceError` whose ``code`` is stable enough
for scripts to match on; the CLI decides how to print it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed: a stable ``code``, a message, and context."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of a service operation.

    Attributes:
        ok: False when ``error`` is set.
        op: Operation name, used to pick a renderer (``"convert"``,
            ``"convert_document"``, ``"list_links"``).
        data: Operation payload.
        warnings: Problems that did not stop the operation, such as a
            single link that could not be converted.
        error: Set on failure.
        meta: Free-form extras.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        """Failed result for *op*; keyword arguments become ``error.detail``."""
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
