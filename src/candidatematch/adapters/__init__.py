"""Record store adapters."""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from ..schemas import EvaluationRecord
from .memory import InMemoryEvaluationStore


@runtime_checkable
class EvaluationStore(Protocol):
    """Read side of the evaluation record store.

    ``where`` and ``order_by`` use the nested predicate vocabulary built by
    :mod:`candidatematch.services.query`: field names map to a value (equality),
    to an operator mapping (``in``, ``gte``, ``lte``, ``gt``, ``lt``,
    ``contains`` with optional ``mode``) or, for relations, to a nested
    predicate; to-many relations take ``some`` / ``none`` / ``every``.
    """

    async def find_many(
        self,
        where: dict[str, Any],
        *,
        include: dict[str, Any] | None = None,
        order_by: dict[str, Any] | None = None,
        skip: int = 0,
        take: int | None = None,
    ) -> Sequence[EvaluationRecord]:
        """Return matching records joined to job and resume."""

    async def count(self, where: dict[str, Any]) -> int:
        """Return the number of records matching ``where``."""


__all__ = ["EvaluationStore", "InMemoryEvaluationStore"]
