import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.models.schemas import PhoneNumberBulkCreate, PhoneNumberCreate
from app.services import assignment_service, history_service, pool_service


class TestPool:

    @pytest.mark.asyncio
    async def test_add_then_remove(self, db):
        row = await pool_service.add_number(PhoneNumberCreate(phone_number="+15551234", name="Alice"))

        assert row["status"] is None
        assert row["assigned_to"] is None
        assert row["name"] == "Alice"

        await pool_service.remove_number(row["id"])

        ids = [n["id"] for n in await pool_service.list_numbers()]
        assert row["id"] not in ids

    @pytest.mark.asyncio
    async def test_remove_missing_is_404(self, db):
        with pytest.raises(HTTPException) as exc:
            await pool_service.remove_number(404)
        assert exc.value.status_code == 404

    @pytest.mark.asyncio
    async def test_remove_claimed_number_is_unconditional(self, insert_number):
        number = insert_number("+1001", assigned_to="opA")

        result = await pool_service.remove_number(number["id"])

        assert result == {"status": "deleted", "id": number["id"]}

    @pytest.mark.asyncio
    async def test_bulk_add_preserves_order(self, db):
        batch = PhoneNumberBulkCreate(numbers=[
            {"phone_number": " +1001 ", "name": "A"},
            {"phone_number": "+1002"},
            {"phone_number": "+1003", "name": "  "},
        ])

        rows = await pool_service.add_numbers_bulk(batch)

        assert [r["phone_number"] for r in rows] == ["+1001", "+1002", "+1003"]
        assert rows[2]["name"] is None
        listed = await pool_service.list_numbers()
        assert [r["id"] for r in listed] == [r["id"] for r in rows]

    def test_blank_number_rejected(self):
        with pytest.raises(ValidationError):
            PhoneNumberCreate(phone_number="   ")

    def test_empty_batch_rejected(self):
        with pytest.raises(ValidationError):
            PhoneNumberBulkCreate(numbers=[])

    @pytest.mark.asyncio
    async def test_stats(self, insert_number):
        insert_number("+1001")
        insert_number("+1002", assigned_to="opA")
        insert_number("+1003", status="answered")

        stats = await pool_service.get_pool_stats()

        assert stats == {"total": 3, "available": 1, "claimed": 1, "worked": 1}


class TestHistory:

    @pytest.mark.asyncio
    async def test_history_per_operator_newest_first(self, insert_number):
        a1 = insert_number("+1001", name="Alice", created_at="2024-01-01T00:00:00.000000Z")
        b1 = insert_number("+1002", name="Bob", created_at="2024-01-02T00:00:00.000000Z")
        a2 = insert_number("+1003", name="Carol", created_at="2024-01-03T00:00:00.000000Z")

        assert (await assignment_service.claim_next("opA"))["id"] == a1["id"]
        await assignment_service.complete(a1["id"], "opA", "answered")
        assert (await assignment_service.claim_next("opB"))["id"] == b1["id"]
        await assignment_service.complete(b1["id"], "opB", "rejected")
        assert (await assignment_service.claim_next("opA"))["id"] == a2["id"]
        await assignment_service.complete(a2["id"], "opA", "no_answer")

        history = await history_service.list_history("opA")

        assert [h["phone_number_id"] for h in history] == [a2["id"], a1["id"]]
        assert all(h["operator_id"] == "opA" for h in history)
        assert history[0]["called_at"] >= history[1]["called_at"]

    @pytest.mark.asyncio
    async def test_history_survives_number_removal(self, insert_number):
        number = insert_number("+1001", name="Alice")
        await assignment_service.claim_next("opA")
        await assignment_service.complete(number["id"], "opA", "answered")

        await pool_service.remove_number(number["id"])

        history = await history_service.list_history("opA")
        assert len(history) == 1
        assert history[0]["phone_number"] == "+1001"
        assert history[0]["name"] == "Alice"

    def test_filter_by_name_is_case_insensitive(self):
        entries = [
            {"name": "Alice Smith", "phone_number": "+1001"},
            {"name": "Bob", "phone_number": "+2002"},
            {"name": None, "phone_number": "+3003"},
        ]

        assert history_service.filter_history(entries, "alice") == [entries[0]]
        assert history_service.filter_history(entries, "300") == [entries[2]]
        assert history_service.filter_history(entries, "") == entries
        assert history_service.filter_history(entries, None) == entries
        assert history_service.filter_history(entries, "zzz") == []

    @pytest.mark.asyncio
    async def test_list_history_applies_query(self, insert_number):
        alice = insert_number("+1001", name="Alice", created_at="2024-01-01T00:00:00.000000Z")
        bob = insert_number("+2002", name="Bob", created_at="2024-01-02T00:00:00.000000Z")
        for number in (alice, bob):
            await assignment_service.claim_next("opA")
            await assignment_service.complete(number["id"], "opA", "answered")

        history = await history_service.list_history("opA", "bob")

        assert [h["phone_number_id"] for h in history] == [bob["id"]]
