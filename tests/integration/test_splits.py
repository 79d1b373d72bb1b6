"""Integration tests: split endpoints."""

from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient

CENT = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT)


@pytest.fixture
async def item_id(async_client: AsyncClient, bill_with_people: dict) -> str:
    resp = await async_client.post(
        f"/bills/{bill_with_people['bill_id']}/items", json={"name": "Steamboat", "amount": "80"}
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["id"]


@pytest.mark.asyncio
async def test_assign_whole_replaces_existing(async_client: AsyncClient, bill_with_people: dict, item_id: str):
    bill_id = bill_with_people["bill_id"]
    url = f"/bills/{bill_id}/items/{item_id}/assign"

    await async_client.post(url, json={"person_id": bill_with_people["Alice"]})
    resp = await async_client.post(url, json={"person_id": bill_with_people["Bob"]})
    splits = resp.json()["data"]["splits"]
    assert len(splits) == 1
    assert splits[0]["person_id"] == bill_with_people["Bob"]
    assert [p["name"] for p in resp.json()["data"]["shared_by"]] == ["Bob"]

    resp = await async_client.get(f"/bills/{bill_id}")
    people = {p["name"]: _money(p["subtotal"]) for p in resp.json()["data"]["people"]}
    assert people == {"Alice": Decimal("0.00"), "Bob": Decimal("80.00")}


@pytest.mark.asyncio
async def test_split_equally_with_empty_selection_is_noop(
    async_client: AsyncClient, bill_with_people: dict, item_id: str
):
    bill_id = bill_with_people["bill_id"]
    await async_client.post(f"/bills/{bill_id}/items/{item_id}/assign", json={"person_id": bill_with_people["Alice"]})

    resp = await async_client.post(f"/bills/{bill_id}/items/{item_id}/split-equally", json={"person_ids": []})
    assert resp.status_code == 200
    assert len(resp.json()["data"]["splits"]) == 1


@pytest.mark.asyncio
async def test_custom_split_appends(async_client: AsyncClient, bill_with_people: dict, item_id: str):
    bill_id = bill_with_people["bill_id"]
    url = f"/bills/{bill_id}/items/{item_id}/custom-split"

    await async_client.post(url, json={"person_id": bill_with_people["Alice"], "amount": "30"})
    resp = await async_client.post(url, json={"person_id": bill_with_people["Bob"], "amount": "50"})
    data = resp.json()["data"]
    assert [s["display_label"] for s in data["splits"]] == ["30.00", "50.00"]
    assert all(s["is_manual_amount"] for s in data["splits"])
    assert _money(data["splits"][0]["percentage"]) == Decimal("37.50")
    assert data["is_fully_assigned"] is True


@pytest.mark.asyncio
async def test_split_by_percentage(async_client: AsyncClient, bill_with_people: dict, item_id: str):
    bill_id = bill_with_people["bill_id"]
    resp = await async_client.post(
        f"/bills/{bill_id}/items/{item_id}/split-by-percentage",
        json={
            "shares": [
                {"person_id": bill_with_people["Alice"], "percentage": "25"},
                {"person_id": bill_with_people["Bob"], "percentage": "75"},
            ]
        },
    )
    assert resp.status_code == 200, resp.text
    amounts = [_money(s["amount"]) for s in resp.json()["data"]["splits"]]
    assert amounts == [Decimal("20.00"), Decimal("60.00")]


@pytest.mark.asyncio
async def test_apply_split_modes(async_client: AsyncClient, bill_with_people: dict, item_id: str):
    bill_id = bill_with_people["bill_id"]
    alice, bob = bill_with_people["Alice"], bill_with_people["Bob"]
    url = f"/bills/{bill_id}/items/{item_id}/apply-split"

    resp = await async_client.post(url, json={"mode": "equal", "person_ids": [alice, bob]})
    assert [_money(s["amount"]) for s in resp.json()["data"]["splits"]] == [Decimal("40.00"), Decimal("40.00")]

    resp = await async_client.post(
        url, json={"mode": "custom", "person_ids": [alice, bob], "amounts": {alice: "70"}}
    )
    data = resp.json()["data"]
    assert [s["person_id"] for s in data["splits"]] == [alice]
    assert _money(data["unassigned_amount"]) == Decimal("10.00")

    resp = await async_client.post(
        url,
        json={"mode": "percentage", "person_ids": [alice, bob], "percentages": {alice: "50", bob: "50"}},
    )
    assert [_money(s["amount"]) for s in resp.json()["data"]["splits"]] == [Decimal("40.00"), Decimal("40.00")]

    resp = await async_client.post(url, json={"mode": "halves", "person_ids": [alice]})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_remove_single_split_and_clear(async_client: AsyncClient, bill_with_people: dict, item_id: str):
    bill_id = bill_with_people["bill_id"]
    alice, bob = bill_with_people["Alice"], bill_with_people["Bob"]
    resp = await async_client.post(
        f"/bills/{bill_id}/items/{item_id}/split-equally", json={"person_ids": [alice, bob]}
    )
    alice_split = next(s["id"] for s in resp.json()["data"]["splits"] if s["person_id"] == alice)

    resp = await async_client.delete(f"/bills/{bill_id}/splits/{alice_split}")
    assert resp.status_code == 200, resp.text
    assert [s["person_id"] for s in resp.json()["data"]["splits"]] == [bob]

    resp = await async_client.get(f"/bills/{bill_id}")
    people = {p["name"]: _money(p["subtotal"]) for p in resp.json()["data"]["people"]}
    assert people == {"Alice": Decimal("0.00"), "Bob": Decimal("40.00")}

    resp = await async_client.delete(f"/bills/{bill_id}/splits/{alice_split}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Split not found"

    resp = await async_client.delete(f"/bills/{bill_id}/items/{item_id}/splits")
    assert resp.status_code == 200
    assert resp.json()["data"]["splits"] == []
    resp = await async_client.get(f"/bills/{bill_id}/validation")
    assert resp.json()["data"]["unassigned_item_ids"] == [item_id]


@pytest.mark.asyncio
async def test_split_with_unknown_person_is_rejected(
    async_client: AsyncClient, bill_with_people: dict, item_id: str
):
    bill_id = bill_with_people["bill_id"]
    resp = await async_client.post(
        f"/bills/{bill_id}/items/{item_id}/split-equally",
        json={"person_ids": [bill_with_people["Alice"], str(uuid4())]},
    )
    assert resp.status_code == 404

    resp = await async_client.get(f"/bills/{bill_id}")
    item = resp.json()["data"]["items"][0]
    assert item["splits"] == []


@pytest.mark.asyncio
async def test_split_on_unknown_item(async_client: AsyncClient, bill_with_people: dict):
    resp = await async_client.post(
        f"/bills/{bill_with_people['bill_id']}/items/{uuid4()}/assign",
        json={"person_id": bill_with_people["Alice"]},
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Item not found"
