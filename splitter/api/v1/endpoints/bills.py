"""Bill endpoints - bill settings, listings, totals and exports"""

from typing import Any, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from splitter.api import deps
from splitter.models.bill import Bill
from splitter.models.enums import FilterStatus
from splitter.schemas.bill import (
    AssignmentValidationResponse,
    BillCreate,
    BillQuery,
    BillResponse,
    BillSummary,
    BillTotalsResponse,
    BillUpdate,
)
from splitter.schemas.responses import SuccessResponse
from splitter.services.bill_service import BillService
from splitter.services.calculation_service import CalculationEngine
from splitter.services.export_service import ExportService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[BillSummary]])
async def list_bills(
    search_text: str = "",
    show_archived: bool = False,
    status_filter: FilterStatus = Query(FilterStatus.ALL, alias="status"),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    List bills, newest first. Archived bills are hidden unless requested.
    """
    query = BillQuery(search_text=search_text, show_archived=show_archived, status=status_filter)
    bills = await BillService.list_bills(db, query)
    return SuccessResponse(data=bills)


@router.post("", response_model=SuccessResponse[BillResponse], status_code=status.HTTP_201_CREATED)
async def create_bill(
    bill_in: BillCreate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    bill = await BillService.create_bill(db, bill_in)
    return SuccessResponse(data=bill, message="Bill created successfully")


@router.get("/{bill_id}", response_model=SuccessResponse[BillResponse])
async def get_bill(bill: Bill = Depends(deps.get_bill)) -> Any:
    return SuccessResponse(data=bill)


@router.put("/{bill_id}", response_model=SuccessResponse[BillResponse])
async def update_bill(
    bill_id: UUID,
    bill_in: BillUpdate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Update place, date, notes, rates, currency or payee details.
    """
    bill = await BillService.update_bill(db, bill_id, bill_in)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return SuccessResponse(data=bill, message="Bill updated successfully")


@router.delete("/{bill_id}", response_model=SuccessResponse)
async def delete_bill(
    bill_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    deleted = await BillService.delete_bill(db, bill_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Bill not found")
    return SuccessResponse(data={"id": str(bill_id)}, message="Bill deleted successfully")


@router.post("/{bill_id}/duplicate", response_model=SuccessResponse[BillResponse], status_code=status.HTTP_201_CREATED)
async def duplicate_bill(
    bill_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Start a new bill with the same venue, rates, payee and people (all unpaid).
    """
    bill = await BillService.duplicate_stored_bill(db, bill_id)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return SuccessResponse(data=bill, message="Bill duplicated successfully")


@router.post("/{bill_id}/archive", response_model=SuccessResponse[BillResponse])
async def archive_bill(
    bill: Bill = Depends(deps.get_bill),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    BillService.archive_bill(bill)
    bill = await BillService.save_bill(db, bill)
    return SuccessResponse(data=bill, message="Bill archived")


@router.post("/{bill_id}/unarchive", response_model=SuccessResponse[BillResponse])
async def unarchive_bill(
    bill: Bill = Depends(deps.get_bill),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    BillService.unarchive_bill(bill)
    bill = await BillService.save_bill(db, bill)
    return SuccessResponse(data=bill, message="Bill unarchived")


@router.get("/{bill_id}/totals", response_model=SuccessResponse[BillTotalsResponse])
async def get_bill_totals(bill: Bill = Depends(deps.get_bill)) -> Any:
    """
    Bill-level breakdown, every person's share and the reconciliation gap.
    """
    totals = CalculationEngine.bill_totals(bill)
    return SuccessResponse(data=BillTotalsResponse.from_totals(totals, bill.currency_code))


@router.get("/{bill_id}/validation", response_model=SuccessResponse[AssignmentValidationResponse])
async def validate_bill_assignments(bill: Bill = Depends(deps.get_bill)) -> Any:
    validation = CalculationEngine.validate_assignments(bill)
    return SuccessResponse(data=AssignmentValidationResponse.from_validation(validation))


@router.get("/{bill_id}/export/csv", response_class=PlainTextResponse)
async def export_bill_csv(bill: Bill = Depends(deps.get_bill)) -> Any:
    # Header values must stay latin-1
    filename = ExportService.export_filename(bill, "csv").encode("ascii", "ignore").decode()
    return PlainTextResponse(
        ExportService.generate_csv(bill),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{bill_id}/export/summary", response_class=PlainTextResponse)
async def export_bill_summary(bill: Bill = Depends(deps.get_bill)) -> Any:
    return PlainTextResponse(ExportService.generate_text_summary(bill))
