"""In-process evaluation store interpreting the nested predicate vocabulary."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Sequence

from ..schemas import EvaluationRecord

_SCALAR_OPERATORS = frozenset({"equals", "in", "not_in", "gte", "lte", "gt", "lt", "contains", "mode"})
_LIST_OPERATORS = frozenset({"some", "none", "every"})


class InMemoryEvaluationStore:
    """Evaluation store backed by a list of records.

    ``include`` is accepted for interface compatibility; records are always
    returned fully joined.
    """

    def __init__(self, records: Iterable[EvaluationRecord | dict[str, Any]] = ()) -> None:
        self._records = [
            record if isinstance(record, EvaluationRecord) else EvaluationRecord.model_validate(record)
            for record in records
        ]

    @classmethod
    def from_json(cls, path: Path) -> "InMemoryEvaluationStore":
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid evaluations JSON: {exc}") from exc
        if isinstance(data, dict):
            data = data.get("evaluations", [])
        if not isinstance(data, list):
            raise ValueError("Evaluations JSON must be a list or contain an 'evaluations' list")
        return cls(data)

    def add(self, record: EvaluationRecord) -> None:
        self._records.append(record)

    async def find_many(
        self,
        where: dict[str, Any],
        *,
        include: dict[str, Any] | None = None,
        order_by: dict[str, Any] | None = None,
        skip: int = 0,
        take: int | None = None,
    ) -> list[EvaluationRecord]:
        matched = [record for record in self._records if matches(record, where)]
        if order_by:
            path, direction = _order_path(order_by)
            matched = _sorted_by(matched, path, descending=direction == "desc")
        end = None if take is None else skip + take
        return matched[skip:end]

    async def count(self, where: dict[str, Any]) -> int:
        return sum(1 for record in self._records if matches(record, where))


def matches(obj: Any, where: dict[str, Any] | None) -> bool:
    """Return True when ``obj`` satisfies every condition in ``where``."""
    if not where:
        return True
    return all(_match_condition(_get(obj, key), condition) for key, condition in where.items())


def _match_condition(value: Any, condition: Any) -> bool:
    if isinstance(condition, dict):
        if condition.keys() & _LIST_OPERATORS:
            return _match_list(value or [], condition)
        if condition.keys() & _SCALAR_OPERATORS:
            return _match_scalar(value, condition)
        if value is None:
            return False
        return matches(value, condition)
    return value == condition


def _match_list(items: Sequence[Any], condition: dict[str, Any]) -> bool:
    if "some" in condition and not any(matches(item, condition["some"]) for item in items):
        return False
    if "none" in condition and any(matches(item, condition["none"]) for item in items):
        return False
    if "every" in condition and not all(matches(item, condition["every"]) for item in items):
        return False
    return True


def _match_scalar(value: Any, condition: dict[str, Any]) -> bool:
    insensitive = condition.get("mode") == "insensitive"
    for operator, expected in condition.items():
        if operator == "mode":
            continue
        if operator == "equals" and value != expected:
            return False
        if operator == "in" and value not in expected:
            return False
        if operator == "not_in" and value in expected:
            return False
        if operator == "contains":
            if value is None:
                return False
            haystack, needle = str(value), str(expected)
            if insensitive:
                haystack, needle = haystack.lower(), needle.lower()
            if needle not in haystack:
                return False
        if operator in {"gte", "lte", "gt", "lt"}:
            if value is None or not _compare(value, operator, expected):
                return False
    return True


def _compare(value: Any, operator: str, expected: Any) -> bool:
    if operator == "gte":
        return value >= expected
    if operator == "lte":
        return value <= expected
    if operator == "gt":
        return value > expected
    return value < expected


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _order_path(order_by: dict[str, Any]) -> tuple[list[str], str]:
    path: list[str] = []
    node: Any = order_by
    while isinstance(node, dict):
        key, node = next(iter(node.items()))
        path.append(key)
    return path, str(node)


def _sorted_by(records: list[EvaluationRecord], path: list[str], *, descending: bool) -> list[EvaluationRecord]:
    def resolve(record: EvaluationRecord) -> Any:
        value: Any = record
        for key in path:
            value = _get(value, key)
        return value

    present = [record for record in records if resolve(record) is not None]
    missing = [record for record in records if resolve(record) is None]
    present.sort(key=resolve, reverse=descending)
    return present + missing
