"""People endpoints - participants of a bill"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from splitter.api import deps
from splitter.models.bill import Bill, Person
from splitter.schemas.bill import (
    BillResponse,
    PaymentToggle,
    PersonBreakdownResponse,
    PersonCreate,
    PersonFromContact,
    PersonResponse,
    PersonUpdate,
)
from splitter.schemas.responses import SuccessResponse
from splitter.services.bill_service import BillService
from splitter.services.calculation_service import CalculationEngine
from splitter.services.contact_service import ContactService

router = APIRouter()


@router.post("", response_model=SuccessResponse[PersonResponse], status_code=status.HTTP_201_CREATED)
async def add_person(
    person_in: PersonCreate,
    bill: Bill = Depends(deps.get_bill),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    person = BillService.add_person(bill, **person_in.model_dump())
    bill = await BillService.save_bill(db, bill)
    return SuccessResponse(data=BillService.find_person(bill, person.id), message="Person added")


@router.post("/from-contact", response_model=SuccessResponse[PersonResponse], status_code=status.HTTP_201_CREATED)
async def add_person_from_contact(
    contact_in: PersonFromContact,
    bill: Bill = Depends(deps.get_bill),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Add a copy of a saved contact. Later edits to either side stay separate.
    """
    contact = await ContactService.get_contact_by_id(db, contact_in.contact_id)
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    person = BillService.add_person_from_contact(bill, contact)
    bill = await BillService.save_bill(db, bill)
    return SuccessResponse(data=BillService.find_person(bill, person.id), message="Person added from contact")


@router.put("/{person_id}", response_model=SuccessResponse[PersonResponse])
async def update_person(
    person_in: PersonUpdate,
    bill: Bill = Depends(deps.get_bill),
    person: Person = Depends(deps.get_person),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    BillService.update_person(bill, person, **person_in.model_dump(exclude_unset=True))
    bill = await BillService.save_bill(db, bill)
    return SuccessResponse(data=BillService.find_person(bill, person.id), message="Person updated")


@router.delete("/{person_id}", response_model=SuccessResponse[BillResponse])
async def remove_person(
    bill: Bill = Depends(deps.get_bill),
    person: Person = Depends(deps.get_person),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Remove a person together with every share they held.
    """
    BillService.remove_person(bill, person)
    bill = await BillService.save_bill(db, bill)
    return SuccessResponse(data=bill, message="Person removed")


@router.post("/{person_id}/toggle-payment", response_model=SuccessResponse[PersonResponse])
async def toggle_payment_status(
    payment_in: PaymentToggle,
    bill: Bill = Depends(deps.get_bill),
    person: Person = Depends(deps.get_person),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    BillService.toggle_payment_status(bill, person, payment_in.method_used)
    bill = await BillService.save_bill(db, bill)
    return SuccessResponse(data=BillService.find_person(bill, person.id))


@router.get("/{person_id}/breakdown", response_model=SuccessResponse[PersonBreakdownResponse])
async def get_person_breakdown(
    bill: Bill = Depends(deps.get_bill),
    person: Person = Depends(deps.get_person),
) -> Any:
    breakdown = CalculationEngine.breakdown_for(bill, person)
    return SuccessResponse(data=PersonBreakdownResponse.from_breakdown(breakdown, bill.currency_code))
