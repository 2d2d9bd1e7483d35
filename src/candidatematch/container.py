"""Dependency injection container for the matching services."""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import EvaluationStore, InMemoryEvaluationStore
from .core import BatchFilters, ScoringWeights
from .core.batch import DEFAULT_MAX_CONCURRENCY
from .pipeline import RankingPipeline
from .services import CandidateFilteringService
from .services.filtering import DEFAULT_SUMMARY_LIMIT, DEFAULT_TIMEOUT


class MatchingContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration(
        default={
            "batch": {"max_concurrency": DEFAULT_MAX_CONCURRENCY},
            "filtering": {"timeout": DEFAULT_TIMEOUT, "max_summary_records": DEFAULT_SUMMARY_LIMIT},
        }
    )

    scoring_weights = providers.Callable(ScoringWeights.from_mapping, config.scoring.weights)
    batch_filters = providers.Callable(BatchFilters.from_mapping, config.batch.filters)

    evaluation_store = providers.Singleton(InMemoryEvaluationStore)

    filtering_service = providers.Factory(
        CandidateFilteringService,
        store=evaluation_store,
        timeout=config.filtering.timeout,
        max_summary_records=config.filtering.max_summary_records,
    )

    pipeline = providers.Factory(
        RankingPipeline,
        weights=scoring_weights,
        filters=batch_filters,
        max_concurrency=config.batch.max_concurrency,
    )


def create_container(
    *,
    settings: dict | None = None,
    store: EvaluationStore | None = None,
) -> MatchingContainer:
    """Instantiate container with optional overrides."""

    container = MatchingContainer()

    if store is not None:
        container.evaluation_store.override(providers.Object(store))

    if settings:
        container.config.from_dict(settings)

    return container
