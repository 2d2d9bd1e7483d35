"""Domain errors raised by the matching services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .core.batch import CandidateFailure, RankedEvaluation
    from .schemas import ParsedResume


class CandidateMatchError(Exception):
    """Base error carrying the failed operation and optional details."""

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "operation": self.operation,
            "details": self.details,
        }
        if self.__cause__ is not None:
            payload["cause"] = str(self.__cause__)
        return payload


class FilteringError(CandidateMatchError):
    """Raised when the record store cannot serve a filtering request."""


class BatchEvaluationError(CandidateMatchError):
    """Raised after a batch run in which some candidates failed to evaluate.

    ``partial`` holds the ranked evaluations that did succeed.
    """

    def __init__(
        self,
        failures: list["CandidateFailure"],
        partial: list["RankedEvaluation"],
    ) -> None:
        super().__init__(
            f"{len(failures)} candidate evaluation(s) failed",
            operation="process_candidates",
            details={"failed_candidates": [failure.candidate_id for failure in failures]},
        )
        self.failures = failures
        self.partial = partial


class CandidateLoadError(CandidateMatchError):
    """Raised when some lines of a candidate file could not be loaded.

    ``partial`` holds the candidates that did load, in file order.
    """

    def __init__(self, errors: list[str], partial: list["ParsedResume"]) -> None:
        super().__init__(
            f"{len(errors)} candidate record(s) rejected: " + "; ".join(errors),
            operation="load_candidates",
            details={"errors": errors},
        )
        self.errors = errors
        self.partial = partial
