"""JSON-file-backed store.

Same commit semantics as InMemoryStore, extended across processes. Every
commit and every sequence draw holds an exclusive lock on a sidecar
``.lock`` file, re-reads the document from disk, runs the version check
against what is on disk and then writes the whole data set through a
temporary file and an atomic rename. The file on disk therefore always
holds the state after some complete commit, and a unit of work that read
before another process committed loses with ConcurrencyConflict.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from filelock import FileLock

from backoffice.domain.model.invoice import Invoice, InvoiceItem
from backoffice.domain.model.party import Customer, Supplier
from backoffice.domain.model.payment import Payment, PaymentMethod
from backoffice.domain.model.product import Product
from backoffice.domain.model.purchase_order import POItem, POStatus, PurchaseOrder
from backoffice.domain.model.value_objects import Money, Quantity, TaxRate
from backoffice.infrastructure.persistence.memory_store import KINDS, InMemoryStore, Write

_Stamp = tuple[int, int, int]


class JsonFileStore(InMemoryStore):

    def __init__(self, file_path: Path) -> None:
        super().__init__()
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock = FileLock(str(file_path) + ".lock")
        # Serializes threads of this process; the file lock covers other processes.
        self._disk_lock = threading.RLock()
        self._stamp: _Stamp | None = None
        with self._disk_lock, self._file_lock:
            self._ensure_file()
            self._sync(force=True)

    # --- InMemoryStore overrides ----------------------------------------------

    def get(self, kind: str, key: str) -> Any | None:
        self._sync()
        return super().get(kind, key)

    def list_records(self, kind: str) -> list[Any]:
        self._sync()
        return super().list_records(kind)

    def next_sequence(self, prefix: str) -> int:
        with self._disk_lock, self._file_lock:
            self._sync(force=True)
            value = super().next_sequence(prefix)
            with self._lock:
                self._flush(self._records, dict(self._sequences))
            return value

    def commit(self, writes: list[Write]) -> None:
        if not writes:
            return
        with self._disk_lock, self._file_lock:
            self._sync(force=True)
            super().commit(writes)

    def _flush(self, records: dict[str, dict[str, Any]], sequences: dict[str, int]) -> None:
        document: dict[str, Any] = {"sequences": sequences}
        for kind in KINDS:
            encode = _ENCODERS[kind]
            document[kind] = [encode(r) for r in records[kind].values()]
        self._persist_raw(document)
        self._stamp = self._file_stamp()

    # --- File helpers ---------------------------------------------------------

    def _sync(self, force: bool = False) -> None:
        """Reload the document if another store instance has replaced it."""
        stamp = self._file_stamp()
        with self._lock:
            if force or stamp != self._stamp:
                self._load()
                self._stamp = stamp

    def _file_stamp(self) -> _Stamp:
        st = os.stat(self._file_path)
        return (st.st_ino, st.st_mtime_ns, st.st_size)

    def _load(self) -> None:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        self._sequences = {k: int(v) for k, v in raw.get("sequences", {}).items()}
        self._records = {
            kind: {r["id"]: _DECODERS[kind](r) for r in raw.get(kind, [])}
            for kind in KINDS
        }

    def _persist_raw(self, document: dict[str, Any]) -> None:
        fd, tmp = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=".backoffice-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(document, indent=2) + "\n")
            os.replace(tmp, self._file_path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._persist_raw({"sequences": {}, **{kind: [] for kind in KINDS}})


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _dt(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _product_to_raw(p: Product) -> dict:
    return {
        "id": p.id,
        "version": p.version,
        "name": p.name,
        "sku": p.sku,
        "unit": p.unit,
        "price": str(p.price.amount),
        "tax_rate": str(p.tax_rate.percent),
        "stock_quantity": str(p.stock_quantity),
        "reorder_level": str(p.reorder_level),
        "description": p.description,
        "hsn_code": p.hsn_code,
    }


def _product_to_domain(raw: dict) -> Product:
    return Product(
        id=raw["id"],
        version=raw.get("version", 0),
        name=raw["name"],
        sku=raw["sku"],
        unit=raw["unit"],
        price=Money(Decimal(raw["price"])),
        tax_rate=TaxRate(Decimal(raw["tax_rate"])),
        stock_quantity=Decimal(raw["stock_quantity"]),
        reorder_level=Decimal(raw.get("reorder_level", "0")),
        description=raw.get("description", ""),
        hsn_code=raw.get("hsn_code", ""),
    )


def _contact_to_raw(party: Customer | Supplier) -> dict:
    return {
        "id": party.id,
        "version": party.version,
        "name": party.name,
        "phone": party.phone,
        "email": party.email,
        "address": party.address,
        "tax_id": party.tax_id,
    }


def _contact_fields(raw: dict) -> dict:
    return {
        "id": raw["id"],
        "version": raw.get("version", 0),
        "name": raw["name"],
        "phone": raw.get("phone", ""),
        "email": raw.get("email", ""),
        "address": raw.get("address", ""),
        "tax_id": raw.get("tax_id", ""),
    }


def _customer_to_raw(c: Customer) -> dict:
    return {**_contact_to_raw(c), "outstanding_amount": str(c.outstanding_amount.amount)}


def _customer_to_domain(raw: dict) -> Customer:
    return Customer(
        **_contact_fields(raw),
        outstanding_amount=Money(Decimal(raw.get("outstanding_amount", "0"))),
    )


def _supplier_to_domain(raw: dict) -> Supplier:
    return Supplier(**_contact_fields(raw))


def _invoice_to_raw(inv: Invoice) -> dict:
    return {
        "id": inv.id,
        "version": inv.version,
        "invoice_number": inv.invoice_number,
        "customer_id": inv.customer_id,
        "customer_name": inv.customer_name,
        "total_amount": str(inv.total_amount.amount),
        "balance": str(inv.balance.amount),
        "created_at": _dt(inv.created_at),
        "due_date": _dt(inv.due_date),
        "items": [
            {
                "product_id": item.product_id,
                "product_name": item.product_name,
                "unit": item.unit,
                "hsn_code": item.hsn_code,
                "quantity": str(item.quantity.value),
                "unit_price": str(item.unit_price.amount),
                "tax_rate": str(item.tax_rate.percent),
                "tax_amount": str(item.tax_amount.amount),
                "line_total": str(item.line_total.amount),
            }
            for item in inv.items
        ],
    }


def _invoice_to_domain(raw: dict) -> Invoice:
    items = tuple(
        InvoiceItem(
            product_id=i["product_id"],
            product_name=i["product_name"],
            unit=i.get("unit", ""),
            hsn_code=i.get("hsn_code", ""),
            quantity=Quantity(Decimal(i["quantity"])),
            unit_price=Money(Decimal(i["unit_price"])),
            tax_rate=TaxRate(Decimal(i["tax_rate"])),
            tax_amount=Money(Decimal(i["tax_amount"])),
            line_total=Money(Decimal(i["line_total"])),
        )
        for i in raw["items"]
    )
    return Invoice(
        id=raw["id"],
        version=raw.get("version", 0),
        invoice_number=raw["invoice_number"],
        customer_id=raw["customer_id"],
        customer_name=raw.get("customer_name", ""),
        items=items,
        total_amount=Money(Decimal(raw["total_amount"])),
        balance=Money(Decimal(raw["balance"])),
        created_at=datetime.fromisoformat(raw["created_at"]),
        due_date=_parse_dt(raw.get("due_date")),
    )


def _payment_to_raw(p: Payment) -> dict:
    return {
        "id": p.id,
        "version": p.version,
        "payment_number": p.payment_number,
        "invoice_id": p.invoice_id,
        "invoice_number": p.invoice_number,
        "customer_id": p.customer_id,
        "amount": str(p.amount.amount),
        "method": p.method.value,
        "reference_number": p.reference_number,
        "notes": p.notes,
        "payment_date": _dt(p.payment_date),
    }


def _payment_to_domain(raw: dict) -> Payment:
    return Payment(
        id=raw["id"],
        version=raw.get("version", 0),
        payment_number=raw["payment_number"],
        invoice_id=raw["invoice_id"],
        invoice_number=raw.get("invoice_number", ""),
        customer_id=raw["customer_id"],
        amount=Money(Decimal(raw["amount"])),
        method=PaymentMethod(raw["method"]),
        reference_number=raw.get("reference_number", ""),
        notes=raw.get("notes", ""),
        payment_date=datetime.fromisoformat(raw["payment_date"]),
    )


def _po_to_raw(po: PurchaseOrder) -> dict:
    return {
        "id": po.id,
        "version": po.version,
        "po_number": po.po_number,
        "supplier_id": po.supplier_id,
        "supplier_name": po.supplier_name,
        "status": po.status.value,
        "created_at": _dt(po.created_at),
        "received_at": _dt(po.received_at),
        "items": [
            {
                "product_id": item.product_id,
                "product_name": item.product_name,
                "quantity": str(item.quantity.value),
                "unit_price": str(item.unit_price.amount),
            }
            for item in po.items
        ],
    }


def _po_to_domain(raw: dict) -> PurchaseOrder:
    items = tuple(
        POItem(
            product_id=i["product_id"],
            product_name=i["product_name"],
            quantity=Quantity(Decimal(i["quantity"])),
            unit_price=Money(Decimal(i["unit_price"])),
        )
        for i in raw["items"]
    )
    return PurchaseOrder(
        id=raw["id"],
        version=raw.get("version", 0),
        po_number=raw["po_number"],
        supplier_id=raw["supplier_id"],
        supplier_name=raw.get("supplier_name", ""),
        items=items,
        status=POStatus(raw["status"]),
        created_at=datetime.fromisoformat(raw["created_at"]),
        received_at=_parse_dt(raw.get("received_at")),
    )


_ENCODERS = {
    "products": _product_to_raw,
    "customers": _customer_to_raw,
    "suppliers": _contact_to_raw,
    "invoices": _invoice_to_raw,
    "payments": _payment_to_raw,
    "purchase_orders": _po_to_raw,
}

_DECODERS = {
    "products": _product_to_domain,
    "customers": _customer_to_domain,
    "suppliers": _supplier_to_domain,
    "invoices": _invoice_to_domain,
    "payments": _payment_to_domain,
    "purchase_orders": _po_to_domain,
}
