"""Domain service: Customer Balance Aggregator.

Sole writer of ``Customer.outstanding_amount``. Callers pass a signed
delta instead of a new value, so no caller ever computes a balance from
its own cached copy:

- invoice created: ``+total_amount``
- payment recorded: ``-amount``
- invoice deleted: ``-balance`` (paid portions were already subtracted)

The customer is read through the unit of work and its version is
checked at commit, so an adjustment based on a stale read is rejected
with ConcurrencyConflict instead of overwriting a newer value.
"""

from __future__ import annotations

from decimal import Decimal

from backoffice.domain.exceptions import CustomerNotFound
from backoffice.domain.model.party import Customer
from backoffice.domain.repository.unit_of_work import AbstractUnitOfWork


class CustomerBalanceAggregator:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def adjust(self, customer_id: str, delta: Decimal) -> Customer:
        customer = self._uow.customers.get_by_id(customer_id)
        if customer is None:
            raise CustomerNotFound(f"Customer '{customer_id}' not found")
        if delta:
            customer.apply_outstanding_delta(delta)
            self._uow.customers.save(customer)
        return customer
