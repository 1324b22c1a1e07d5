"""Tests for transparent retry on optimistic-concurrency conflicts."""

from decimal import Decimal

import pytest

from backoffice.application.dto import LineItemSpec
from backoffice.application.create_invoice import CreateInvoiceHandler
from backoffice.application.retry import NO_RETRY, RetryPolicy
from backoffice.domain.exceptions import ConcurrencyConflict
from tests.fakes import ConflictingStore, make_store, stock_of, uow_factory


def _store(failures):
    store = make_store(store=ConflictingStore(0))
    store.failures = failures
    store.commit_attempts = 0
    return store


class TestRetryPolicy:

    def test_returns_first_success(self):
        calls = []

        def op():
            calls.append(1)
            return "ok"

        assert RetryPolicy(attempts=3, backoff=0).run(op) == "ok"
        assert len(calls) == 1

    def test_gives_up_after_attempts(self):
        calls = []

        def op():
            calls.append(1)
            raise ConcurrencyConflict("busy")

        with pytest.raises(ConcurrencyConflict, match="busy"):
            RetryPolicy(attempts=3, backoff=0).run(op)
        assert len(calls) == 3

    def test_other_errors_not_retried(self):
        calls = []

        def op():
            calls.append(1)
            raise ValueError("boom")

        with pytest.raises(ValueError):
            RetryPolicy(attempts=5, backoff=0).run(op)
        assert len(calls) == 1


class TestHandlerRetry:

    def test_conflict_retried_transparently(self):
        store = _store(failures=2)
        handler = CreateInvoiceHandler(uow_factory(store), RetryPolicy(attempts=3, backoff=0))

        dto = handler.handle("c1", [LineItemSpec("p1", 2)])

        assert dto.total_amount == "236.00"
        assert store.commit_attempts == 3
        assert stock_of(store, "p1") == Decimal("8")

    def test_conflict_surfaces_without_retry(self):
        store = _store(failures=1)
        handler = CreateInvoiceHandler(uow_factory(store), NO_RETRY)

        with pytest.raises(ConcurrencyConflict):
            handler.handle("c1", [LineItemSpec("p1", 2)])

        assert stock_of(store, "p1") == Decimal("10")
        assert store.list_records("invoices") == []
