"""Unit tests for ContactService."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4
from sqlalchemy.ext.asyncio import AsyncSession

from splitter.models.bill import Person
from splitter.schemas.contact import ContactCreate, ContactUpdate
from splitter.services.contact_service import ContactService


def test_new_contact_is_flagged_and_billless():
    contact = ContactService.new_contact("Chen", payment_method="TNG")
    assert contact.is_contact is True
    assert contact.bill_id is None
    assert contact.has_paid is False
    assert contact.payment_method == "TNG"


@pytest.mark.asyncio
async def test_create_contact():
    db = AsyncMock(spec=AsyncSession)

    contact = await ContactService.create_contact(db, ContactCreate(name="Chen", phone_number="019"))

    assert contact.is_contact is True
    assert contact.name == "Chen"
    db.add.assert_called_once_with(contact)
    assert db.commit.called
    assert db.refresh.called


@pytest.mark.asyncio
async def test_list_contacts_returns_scalars():
    db = AsyncMock(spec=AsyncSession)
    chen = ContactService.new_contact("Chen")
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = [chen]
    db.execute.return_value = mock_result

    contacts = await ContactService.list_contacts(db, search="che")

    assert contacts == [chen]
    assert db.execute.called


@pytest.mark.asyncio
async def test_update_contact_only_changes_given_fields():
    db = AsyncMock(spec=AsyncSession)
    contact = ContactService.new_contact("Chen", phone_number="019", payment_method="TNG")

    with patch(
        "splitter.services.contact_service.ContactService.get_contact_by_id", new_callable=AsyncMock
    ) as mock_get:
        mock_get.return_value = contact
        result = await ContactService.update_contact(db, contact.id, ContactUpdate(phone_number="012"))

    assert result is contact
    assert contact.phone_number == "012"
    assert contact.name == "Chen"
    assert contact.payment_method == "TNG"
    assert db.commit.called


@pytest.mark.asyncio
async def test_update_missing_contact_returns_none():
    db = AsyncMock(spec=AsyncSession)
    with patch(
        "splitter.services.contact_service.ContactService.get_contact_by_id", new_callable=AsyncMock
    ) as mock_get:
        mock_get.return_value = None
        result = await ContactService.update_contact(db, uuid4(), ContactUpdate(name="X"))

    assert result is None
    assert not db.commit.called


@pytest.mark.asyncio
async def test_delete_contact():
    db = AsyncMock(spec=AsyncSession)
    contact = Person(name="Chen", is_contact=True)
    with patch(
        "splitter.services.contact_service.ContactService.get_contact_by_id", new_callable=AsyncMock
    ) as mock_get:
        mock_get.return_value = contact
        assert await ContactService.delete_contact(db, contact.id) is True

    db.delete.assert_awaited_once_with(contact)
    assert db.commit.called


@pytest.mark.asyncio
async def test_contacts_persist_outside_bills(db_session):
    created = await ContactService.create_contact(db_session, ContactCreate(name="Zara"))
    await ContactService.create_contact(db_session, ContactCreate(name="Amir", phone_number="0177"))

    contacts = await ContactService.list_contacts(db_session)
    assert [c.name for c in contacts] == ["Amir", "Zara"]
    assert [c.name for c in await ContactService.list_contacts(db_session, "0177")] == ["Amir"]
    assert (await ContactService.get_contact_by_id(db_session, created.id)).bill_id is None
