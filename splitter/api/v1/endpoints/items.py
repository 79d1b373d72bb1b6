"""Item endpoints - priced lines on a bill"""

from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from splitter.api import deps
from splitter.models.bill import Bill, BillItem
from splitter.schemas.bill import BillResponse, ItemCreate, ItemResponse, ItemUpdate
from splitter.schemas.responses import SuccessResponse
from splitter.services.bill_service import BillService

router = APIRouter()


@router.post("", response_model=SuccessResponse[ItemResponse], status_code=status.HTTP_201_CREATED)
async def add_item(
    item_in: ItemCreate,
    bill: Bill = Depends(deps.get_bill),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Append an item; it sorts after the existing ones.
    """
    item = BillService.add_item(bill, item_in.name, item_in.amount, item_in.quantity, item_in.notes)
    bill = await BillService.save_bill(db, bill)
    return SuccessResponse(data=BillService.find_item(bill, item.id), message="Item added")


@router.put("/{item_id}", response_model=SuccessResponse[ItemResponse])
async def update_item(
    item_in: ItemUpdate,
    bill: Bill = Depends(deps.get_bill),
    item: BillItem = Depends(deps.get_item),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Edit name, price, quantity or notes. Existing splits are not rescaled.
    """
    BillService.update_item(bill, item, **item_in.model_dump(exclude_unset=True))
    bill = await BillService.save_bill(db, bill)
    return SuccessResponse(data=BillService.find_item(bill, item.id), message="Item updated")


@router.delete("/{item_id}", response_model=SuccessResponse[BillResponse])
async def remove_item(
    bill: Bill = Depends(deps.get_bill),
    item: BillItem = Depends(deps.get_item),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    BillService.remove_item(bill, item)
    bill = await BillService.save_bill(db, bill)
    return SuccessResponse(data=bill, message="Item removed")
