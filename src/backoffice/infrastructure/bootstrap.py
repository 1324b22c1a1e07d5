"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from backoffice.application.retry import RetryPolicy
from backoffice.domain.repository.unit_of_work import UnitOfWorkFactory
from backoffice.infrastructure.config import Settings
from backoffice.infrastructure.persistence.json_store import JsonFileStore
from backoffice.infrastructure.persistence.unit_of_work import StoreUnitOfWork


def settings() -> Settings:
    return Settings.from_env()


def uow_factory(config: Settings | None = None) -> UnitOfWorkFactory:
    config = config or settings()
    store = JsonFileStore(config.store_path)
    return lambda: StoreUnitOfWork(store)


def retry_policy(config: Settings | None = None) -> RetryPolicy:
    config = config or settings()
    return RetryPolicy(attempts=config.retry_attempts, backoff=config.retry_backoff)
