"""
UI data layer tests.

Covers the query cache, cached page data, form mutations with their
notices, and pipeline drag-and-drop moves.
"""
import pytest

from estate_crm.store import StoreError
from estate_crm.ui import QueryCache
from estate_crm.ui.data import PIPELINE_KEY, clean_form


class TestQueryCache:
    """Test cases for prefix invalidation."""

    def test_fetch_loads_once(self):
        cache = QueryCache()
        calls = []
        loader = lambda: calls.append(1) or len(calls)
        assert cache.fetch("clients", loader) == 1
        assert cache.fetch(("clients",), loader) == 1
        assert calls == [1]

    def test_invalidate_by_prefix(self):
        cache = QueryCache()
        cache.fetch(("clients",), lambda: "all")
        cache.fetch(("clients", "page-2"), lambda: "second")
        cache.fetch(("properties",), lambda: "props")
        assert cache.invalidate("clients") == 2
        assert ("clients", "page-2") not in cache
        assert "properties" in cache


class TestCrmReads:
    """Test cases for cached page data."""

    def test_records_are_cached(self, crm, seeded_stores):
        assert len(crm.records("clients")) == 5
        seeded_stores.clients.create({"name": "Ann Lee", "email": "a@x.com", "phone": "1234567890", "status": "Lead"})
        assert len(crm.records("clients")) == 5
        crm.invalidate("clients")
        assert len(crm.records("clients")) == 6

    def test_records_follow_every_page(self, crm, seeded_stores, monkeypatch):
        monkeypatch.setattr("estate_crm.ui.data.PAGE_SIZE", 2)
        assert [c["id"] for c in crm.records("clients")] == ["cli-1", "cli-2", "cli-3", "cli-4", "cli-5"]

    def test_records_seed_empty_tables(self, stores):
        from estate_crm.ui import CrmData

        assert len(CrmData(stores).records("properties")) == 4
        assert CrmData(stores, auto_seed=False).records("contracts") == []

    def test_pipeline_columns(self, crm):
        columns = crm.pipeline()
        assert list(columns) == ["Lead", "Active", "Inactive"]
        assert [c["id"] for c in columns["Lead"]] == ["cli-2", "cli-5"]
        assert [c["id"] for c in columns["Active"]] == ["cli-1", "cli-4"]
        assert [c["id"] for c in columns["Inactive"]] == ["cli-3"]

    def test_dashboard(self, crm):
        dashboard = crm.dashboard()
        assert dashboard.total_revenue == 41000
        assert dashboard.new_leads == 2
        assert dashboard.active_listings == 2
        assert dashboard.pending_contracts == 1
        october = dashboard.monthly[9]
        assert october == {"name": "Oct", "sales": 1, "revenue": 36000}
        assert sum(m["sales"] for m in dashboard.monthly) == 1

    def test_contract_rows_resolve_names(self, crm):
        rows = {r["id"]: r for r in crm.contract_rows()}
        assert rows["con-1"]["propertyName"] == "Suburban Family Home"
        assert rows["con-1"]["clientName"] == "John Doe"

    def test_contract_rows_dangling_reference(self, crm):
        assert crm.delete("properties", "prop-2").ok
        rows = {r["id"]: r for r in crm.contract_rows()}
        assert rows["con-1"]["propertyName"] == "N/A"
        assert rows["con-1"]["clientName"] == "John Doe"

    def test_ledger_flags_sign_mismatch(self, crm, seeded_stores):
        seeded_stores.transactions.create({
            "date": "2023-11-02", "description": "Refund", "category": "Other", "amount": 80.0, "type": "Expense",
        })
        flags = {t["description"]: t["signMismatch"] for t in crm.ledger_rows()}
        assert flags["Refund"] is True
        assert flags["Office Supplies"] is False
        assert flags["Rental income Q3"] is False

    @pytest.mark.parametrize("query, clients, properties", [
        ("jane", ["cli-2"], []),
        ("OAK", [], ["prop-2"]),
        ("example.com", ["cli-1", "cli-2", "cli-3", "cli-4", "cli-5"], []),
        ("   ", [], []),
    ])
    def test_search(self, crm, query, clients, properties):
        results = crm.search(query)
        assert [c["id"] for c in results["clients"]] == clients
        assert [p["id"] for p in results["properties"]] == properties


class TestCrmWrites:
    """Test cases for form mutations."""

    def test_clean_form_drops_blanks(self):
        assert clean_form({"name": "  Ann  ", "signingDate": "", "amount": "5"}) == {"name": "Ann", "amount": "5"}

    def test_create_client(self, crm):
        crm.pipeline()
        result = crm.create("clients", {"name": "Ann Lee", "email": "a@x.com", "phone": "1234567890", "status": "Lead"})
        assert result.ok
        assert result.notice.level == "success"
        assert result.notice.message == "Client added successfully!"
        assert result.record["lastContacted"] is not None
        assert PIPELINE_KEY not in crm.cache
        assert len(crm.pipeline()["Lead"]) == 3

    def test_create_from_string_form_values(self, crm):
        result = crm.create("properties", {
            "name": "Harbor View Condo", "address": "12 Harbor Rd, Seaside", "price": "640000",
            "status": "For Sale", "imageUrl": "https://images.unsplash.com/photo-1", "bedrooms": "2",
            "bathrooms": "1", "sqft": "950",
        })
        assert result.ok
        assert result.record["price"] == 640000.0
        assert result.record["bedrooms"] == 2

    def test_invalid_form_keeps_cache(self, crm):
        crm.records("clients")
        result = crm.create("clients", {"name": "A", "email": "nope", "phone": "1", "status": "Lead"})
        assert not result.ok
        assert result.notice.level == "error"
        assert "email" in result.notice.message
        assert ("clients",) in crm.cache

    def test_non_finite_form_amount_is_rejected(self, crm):
        result = crm.create("transactions", {
            "date": "2024-01-05", "description": "Bonus", "category": "Other", "amount": "nan", "type": "Income",
        })
        assert not result.ok
        assert "amount" in result.notice.message
        assert len(crm.ledger_rows()) == 4

    def test_update_transaction(self, crm):
        result = crm.update("transactions", "trn-3", {"amount": "-300", "description": ""})
        assert result.ok
        assert result.notice.message == "Transaction updated successfully!"
        assert result.record["amount"] == -300
        assert result.record["description"] == "Office Supplies"

    def test_update_missing(self, crm):
        result = crm.update("contracts", "missing", {"status": "Sent"})
        assert not result.ok
        assert "not found" in result.notice.message

    def test_delete_missing(self, crm):
        result = crm.delete("clients", "missing")
        assert not result.ok
        assert result.notice.message == "Client 'missing' not found"


class TestPipelineMoves:
    """Test cases for drag-and-drop status changes."""

    def test_move_card(self, crm):
        crm.pipeline()
        result = crm.move_card("cli-2", "Active")
        assert result.ok
        assert result.notice.message == "Client status updated!"
        assert result.record["status"] == "Active"
        assert PIPELINE_KEY not in crm.cache
        assert "cli-2" in [c["id"] for c in crm.pipeline()["Active"]]

    def test_drop_on_same_column_is_a_no_op(self, crm, seeded_stores):
        before = seeded_stores.clients.get("cli-1")["updatedAt"]
        result = crm.move_card("cli-1", "Active")
        assert result.ok
        assert result.notice is None
        assert seeded_stores.clients.get("cli-1")["updatedAt"] == before

    def test_unknown_column(self, crm):
        result = crm.move_card("cli-1", "Archived")
        assert not result.ok

    def test_failed_move_reverts_on_refetch(self, crm, seeded_stores, monkeypatch):
        crm.pipeline()

        def fail(record_id, changes):
            raise StoreError("connection lost")

        monkeypatch.setattr(seeded_stores.clients, "update", fail)
        result = crm.move_card("cli-2", "Inactive")
        assert not result.ok
        assert result.notice.message == "Failed to update status: connection lost"
        assert PIPELINE_KEY not in crm.cache
        assert "cli-2" in [c["id"] for c in crm.pipeline()["Lead"]]

    def test_move_missing_client(self, crm):
        result = crm.move_card("cli-404", "Active")
        assert not result.ok
        assert result.notice.message.startswith("Failed to update status")
