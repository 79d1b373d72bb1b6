"""API Dependencies"""

from uuid import UUID
from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from splitter.database import get_db
from splitter.models.bill import Bill, BillItem, Person
from splitter.services.bill_service import BillService

__all__ = ["get_db", "get_bill", "get_item", "get_person"]


async def get_bill(
    bill_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Bill:
    """
    Load the bill named in the path, with its whole graph.
    
    Raises:
        HTTPException: If the bill does not exist
    """
    bill = await BillService.get_bill_by_id(db, bill_id)
    if not bill:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bill not found"
        )
    return bill


async def get_item(item_id: UUID, bill: Bill = Depends(get_bill)) -> BillItem:
    item = BillService.find_item(bill, item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


async def get_person(person_id: UUID, bill: Bill = Depends(get_bill)) -> Person:
    person = BillService.find_person(bill, person_id)
    if not person:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Person not found")
    return person


def require_person(bill: Bill, person_id: UUID) -> Person:
    """Resolve a person id from a request body against the bill"""
    person = BillService.find_person(bill, person_id)
    if not person:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Person {person_id} not found in this bill"
        )
    return person
