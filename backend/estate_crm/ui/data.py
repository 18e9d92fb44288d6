"""
Data layer behind the server-rendered pages.

Pages read through a QueryCache keyed by resource name. Mutations validate
with the same schemas as the REST API, write through the stores, and
invalidate the affected cache keys so the next page render re-fetches.
"""
import calendar
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from ..schemas import RESOURCE_SCHEMAS
from ..schemas.common import describe_errors
from ..schemas.transaction import sign_agrees_with_type
from ..store import CrmError, Record, Stores
from ..store.base import utcnow
from .cache import QueryCache

logger = logging.getLogger(__name__)

PIPELINE_COLUMNS = ("Lead", "Active", "Inactive")
PIPELINE_KEY = ("pipeline-clients",)
PAGE_SIZE = 100

LABELS = {
    "clients": "Client",
    "properties": "Property",
    "transactions": "Transaction",
    "contracts": "Contract",
}

# Cache keys to drop after a successful mutation of each resource.
INVALIDATES = {
    "clients": [("clients",), PIPELINE_KEY],
    "properties": [("properties",)],
    "transactions": [("transactions",)],
    "contracts": [("contracts",)],
}


@dataclass
class Notice:
    """Transient notification shown once after an action."""
    level: str
    message: str


@dataclass
class MutationResult:
    ok: bool
    notice: Optional[Notice] = None
    record: Optional[Record] = None


@dataclass
class Dashboard:
    total_revenue: float
    new_leads: int
    active_listings: int
    pending_contracts: int
    monthly: List[Dict[str, Any]] = field(default_factory=list)


def clean_form(form: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop blank form fields so they count as "not supplied"."""
    cleaned = {}
    for key, value in form.items():
        if isinstance(value, str):
            value = value.strip()
            if value == "":
                continue
        cleaned[key] = value
    return cleaned


class CrmData:
    """Cached reads and cache-invalidating writes for the UI."""

    def __init__(self, stores: Stores, cache: Optional[QueryCache] = None, auto_seed: bool = True):
        self.stores = stores
        self.cache = cache if cache is not None else QueryCache()
        self.auto_seed = auto_seed

    # Reads

    def records(self, resource: str) -> List[Record]:
        """All records of a resource, following cursors across pages."""
        return self.cache.fetch((resource,), lambda: self._load_all(resource))

    def _load_all(self, resource: str) -> List[Record]:
        store = self.stores.by_resource(resource)
        if self.auto_seed:
            store.ensure_seed()
        items: List[Record] = []
        cursor = None
        while True:
            page = store.list(cursor, PAGE_SIZE)
            items.extend(page.items)
            if page.next is None:
                return items
            cursor = page.next

    def pipeline(self) -> Dict[str, List[Record]]:
        """Clients grouped into pipeline columns by status."""
        def load():
            columns = {status: [] for status in PIPELINE_COLUMNS}
            for client in self._load_all("clients"):
                columns.setdefault(client["status"], []).append(client)
            return columns
        return self.cache.fetch(PIPELINE_KEY, load)

    def dashboard(self) -> Dashboard:
        transactions = self.records("transactions")
        clients = self.records("clients")
        properties = self.records("properties")
        contracts = self.records("contracts")

        monthly = [{"name": calendar.month_abbr[m], "sales": 0, "revenue": 0.0} for m in range(1, 13)]
        for t in transactions:
            if t["type"] == "Income" and t["category"] == "Commission":
                bucket = monthly[t["date"].month - 1]
                bucket["sales"] += 1
                bucket["revenue"] += t["amount"]

        return Dashboard(
            total_revenue=sum(t["amount"] for t in transactions if t["type"] == "Income"),
            new_leads=sum(1 for c in clients if c["status"] == "Lead"),
            active_listings=sum(1 for p in properties if p["status"] == "For Sale"),
            pending_contracts=sum(1 for c in contracts if c["status"] == "Sent"),
            monthly=monthly,
        )

    def contract_rows(self) -> List[Dict[str, Any]]:
        """Contracts with referenced property and client names resolved."""
        properties = {p["id"]: p for p in self.records("properties")}
        clients = {c["id"]: c for c in self.records("clients")}
        rows = []
        for contract in self.records("contracts"):
            prop = properties.get(contract["propertyId"])
            client = clients.get(contract["clientId"])
            rows.append({
                **contract,
                "propertyName": prop["name"] if prop else "N/A",
                "clientName": client["name"] if client else "N/A",
            })
        return rows

    def ledger_rows(self) -> List[Dict[str, Any]]:
        """Transactions, each flagged when its amount sign disagrees with its type."""
        return [
            {**t, "signMismatch": not sign_agrees_with_type(t["amount"], t["type"])}
            for t in self.records("transactions")
        ]

    def search(self, query: str) -> Dict[str, List[Record]]:
        needle = (query or "").strip().lower()
        if not needle:
            return {"clients": [], "properties": []}
        return {
            "clients": [
                c for c in self.records("clients")
                if needle in c["name"].lower() or needle in c["email"].lower()
            ],
            "properties": [
                p for p in self.records("properties")
                if needle in p["name"].lower() or needle in p["address"].lower()
            ],
        }

    # Writes

    def create(self, resource: str, form: Mapping[str, Any]) -> MutationResult:
        create_schema = RESOURCE_SCHEMAS[resource][0]
        try:
            payload = create_schema.model_validate(clean_form(form))
        except ValidationError as exc:
            return self._failed(describe_errors(exc))
        record = payload.to_record()
        if resource == "clients":
            record["lastContacted"] = utcnow()
        try:
            created = self.stores.by_resource(resource).create(record)
        except CrmError as exc:
            return self._failed(f"Failed to add {LABELS[resource].lower()}: {exc}")
        self._after_write(resource, created)
        return MutationResult(True, Notice("success", f"{LABELS[resource]} added successfully!"), created)

    def update(self, resource: str, record_id: str, form: Mapping[str, Any]) -> MutationResult:
        update_schema = RESOURCE_SCHEMAS[resource][1]
        try:
            payload = update_schema.model_validate(clean_form(form))
        except ValidationError as exc:
            return self._failed(describe_errors(exc))
        try:
            updated = self.stores.by_resource(resource).update(record_id, payload.to_record(partial=True))
        except CrmError as exc:
            return self._failed(f"Failed to update {LABELS[resource].lower()}: {exc}")
        self._after_write(resource, updated)
        return MutationResult(True, Notice("success", f"{LABELS[resource]} updated successfully!"), updated)

    def delete(self, resource: str, record_id: str) -> MutationResult:
        try:
            deleted = self.stores.by_resource(resource).delete(record_id)
        except CrmError as exc:
            return self._failed(f"Failed to delete {LABELS[resource].lower()}: {exc}")
        if not deleted:
            return self._failed(f"{LABELS[resource]} '{record_id}' not found")
        self._after_write(resource, None)
        return MutationResult(True, Notice("success", f"{LABELS[resource]} deleted successfully!"))

    def move_card(self, client_id: str, target: str) -> MutationResult:
        """
        Move a pipeline card to the column it was dropped on.

        The new status is the drop target. Pipeline and client queries are
        invalidated whether the update succeeds or fails, so a failed move
        reverts to the stored state on the next read.
        """
        if target not in PIPELINE_COLUMNS:
            return self._failed(f"Unknown pipeline column '{target}'")
        current = next(
            (c for column in self.pipeline().values() for c in column if c["id"] == client_id),
            None,
        )
        if current is not None and current["status"] == target:
            return MutationResult(True, record=current)
        try:
            updated = self.stores.clients.update(client_id, {"status": target})
        except CrmError as exc:
            self.invalidate("clients")
            logger.warning(f"Pipeline move of client {client_id} to {target} failed: {exc}")
            return self._failed(f"Failed to update status: {exc}")
        self.invalidate("clients")
        return MutationResult(True, Notice("success", "Client status updated!"), updated)

    def invalidate(self, resource: str) -> int:
        """Drop cached queries that depend on a resource."""
        return self.cache.invalidate(*INVALIDATES[resource])

    def _after_write(self, resource: str, record: Optional[Record]):
        self.invalidate(resource)
        if resource == "transactions" and record is not None:
            if not sign_agrees_with_type(record["amount"], record["type"]):
                logger.warning(
                    f"Transaction {record['id']} amount {record['amount']} disagrees with type {record['type']}"
                )

    @staticmethod
    def _failed(message: str) -> MutationResult:
        return MutationResult(False, Notice("error", message))
