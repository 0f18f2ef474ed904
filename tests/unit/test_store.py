"""
Unit tests for the in-memory data store.
"""

from incident_hub.repositories.store import InMemoryDataStore


async def test_insert_assigns_id_and_created_at() -> None:
    store = InMemoryDataStore()

    row = await store.insert("comments", {"name": "Ann", "comment": "hi"})

    assert row["id"]
    assert row["created_at"]
    assert await store.get("comments", row["id"]) == row


async def test_list_filters_by_equality_and_membership() -> None:
    store = InMemoryDataStore(
        {
            "incidents": [
                {"id": "1", "status": "Open"},
                {"id": "2", "status": "Closed"},
                {"id": "3", "status": "In Progress"},
            ]
        }
    )

    open_rows = await store.list("incidents", filters={"status": "Open"})
    active_rows = await store.list("incidents", filters={"status": ["Open", "In Progress"]})

    assert [r["id"] for r in open_rows] == ["1"]
    assert sorted(r["id"] for r in active_rows) == ["1", "3"]


async def test_list_orders_descending_with_insertion_tiebreak() -> None:
    store = InMemoryDataStore(
        {
            "t": [
                {"id": "a", "created_at": "2026-01-01T00:00:00+00:00"},
                {"id": "b", "created_at": "2026-01-02T00:00:00+00:00"},
                {"id": "c", "created_at": "2026-01-02T00:00:00+00:00"},
            ]
        }
    )

    rows = await store.list("t", order_by="created_at", descending=True, limit=2)

    assert [r["id"] for r in rows] == ["c", "b"]


async def test_update_and_delete() -> None:
    store = InMemoryDataStore({"t": [{"id": "1", "status": "Open"}]})

    updated = await store.update("t", "1", {"status": "Closed"})
    assert updated["status"] == "Closed"
    assert "updated_at" in updated
    assert await store.update("t", "missing", {"status": "Closed"}) is None

    assert await store.delete("t", "1") is True
    assert await store.delete("t", "1") is False
    assert store.rows("t") == []


async def test_returned_rows_are_copies() -> None:
    store = InMemoryDataStore({"t": [{"id": "1", "status": "Open"}]})

    row = await store.get("t", "1")
    row["status"] = "Closed"

    assert (await store.get("t", "1"))["status"] == "Open"
