"""Contact endpoints - reusable people templates"""

from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from splitter.api import deps
from splitter.schemas.contact import ContactCreate, ContactResponse, ContactUpdate
from splitter.schemas.responses import SuccessResponse
from splitter.services.contact_service import ContactService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[ContactResponse]])
async def list_contacts(
    search: Optional[str] = None,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    contacts = await ContactService.list_contacts(db, search)
    return SuccessResponse(data=contacts)


@router.post("", response_model=SuccessResponse[ContactResponse], status_code=status.HTTP_201_CREATED)
async def create_contact(
    contact_in: ContactCreate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    contact = await ContactService.create_contact(db, contact_in)
    return SuccessResponse(data=contact, message="Contact created successfully")


@router.put("/{contact_id}", response_model=SuccessResponse[ContactResponse])
async def update_contact(
    contact_id: UUID,
    contact_in: ContactUpdate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Edit a contact. Copies already added to bills keep their own values.
    """
    contact = await ContactService.update_contact(db, contact_id, contact_in)
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    return SuccessResponse(data=contact, message="Contact updated successfully")


@router.delete("/{contact_id}", response_model=SuccessResponse)
async def delete_contact(
    contact_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    deleted = await ContactService.delete_contact(db, contact_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Contact not found")
    return SuccessResponse(data={"id": str(contact_id)}, message="Contact deleted successfully")
