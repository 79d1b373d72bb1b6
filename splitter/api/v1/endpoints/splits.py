"""Split endpoints - allocating items to people"""

from typing import Any, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from splitter.api import deps
from splitter.models.bill import Bill, BillItem
from splitter.schemas.bill import (
    ApplySplitRequest,
    AssignWholeRequest,
    CustomSplitRequest,
    EqualSplitRequest,
    ItemResponse,
    PercentageSplitRequest,
)
from splitter.schemas.responses import SuccessResponse
from splitter.services.bill_service import BillService
from splitter.services.split_service import SplitService

router = APIRouter()


async def _saved_item(db: AsyncSession, bill: Bill, item_id: UUID) -> BillItem:
    bill = await BillService.save_bill(db, bill)
    return BillService.find_item(bill, item_id)


def _people(bill: Bill, person_ids: List[UUID]):
    return [deps.require_person(bill, person_id) for person_id in person_ids]


@router.post("/items/{item_id}/assign", response_model=SuccessResponse[ItemResponse])
async def assign_whole(
    split_in: AssignWholeRequest,
    bill: Bill = Depends(deps.get_bill),
    item: BillItem = Depends(deps.get_item),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Give the whole item to one person, replacing any existing splits.
    """
    person = deps.require_person(bill, split_in.person_id)
    SplitService.assign_whole(item, person)
    return SuccessResponse(data=await _saved_item(db, bill, item.id))


@router.post("/items/{item_id}/split-equally", response_model=SuccessResponse[ItemResponse])
async def split_equally(
    split_in: EqualSplitRequest,
    bill: Bill = Depends(deps.get_bill),
    item: BillItem = Depends(deps.get_item),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Divide the item evenly. An empty selection leaves the item unchanged.
    """
    SplitService.split_equally(item, _people(bill, split_in.person_ids))
    return SuccessResponse(data=await _saved_item(db, bill, item.id))


@router.post("/items/{item_id}/custom-split", response_model=SuccessResponse[ItemResponse])
async def custom_split(
    split_in: CustomSplitRequest,
    bill: Bill = Depends(deps.get_bill),
    item: BillItem = Depends(deps.get_item),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Add a manual amount for one person alongside the item's other splits.
    """
    person = deps.require_person(bill, split_in.person_id)
    SplitService.custom_split(item, person, split_in.amount)
    return SuccessResponse(data=await _saved_item(db, bill, item.id))


@router.post("/items/{item_id}/split-by-percentage", response_model=SuccessResponse[ItemResponse])
async def split_by_percentage(
    split_in: PercentageSplitRequest,
    bill: Bill = Depends(deps.get_bill),
    item: BillItem = Depends(deps.get_item),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    shares = {deps.require_person(bill, share.person_id): share.percentage for share in split_in.shares}
    SplitService.split_by_percentage(item, shares)
    return SuccessResponse(data=await _saved_item(db, bill, item.id))


@router.post("/items/{item_id}/apply-split", response_model=SuccessResponse[ItemResponse])
async def apply_split(
    split_in: ApplySplitRequest,
    bill: Bill = Depends(deps.get_bill),
    item: BillItem = Depends(deps.get_item),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Replace the item's splits with the selected people under one mode.
    """
    SplitService.apply_split(
        item,
        split_in.mode,
        _people(bill, split_in.person_ids),
        amounts=split_in.amounts,
        percentages=split_in.percentages,
    )
    return SuccessResponse(data=await _saved_item(db, bill, item.id))


@router.delete("/items/{item_id}/splits", response_model=SuccessResponse[ItemResponse])
async def clear_all_splits(
    bill: Bill = Depends(deps.get_bill),
    item: BillItem = Depends(deps.get_item),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    SplitService.clear_all_splits(item)
    return SuccessResponse(data=await _saved_item(db, bill, item.id), message="Splits cleared")


@router.delete("/splits/{split_id}", response_model=SuccessResponse[ItemResponse])
async def remove_split(
    split_id: UUID,
    bill: Bill = Depends(deps.get_bill),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    split = BillService.find_split(bill, split_id)
    if not split:
        raise HTTPException(status_code=404, detail="Split not found")
    item_id = split.item.id
    SplitService.remove_split(split)
    return SuccessResponse(data=await _saved_item(db, bill, item_id), message="Split removed")
