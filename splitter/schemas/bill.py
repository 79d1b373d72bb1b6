"""Bill, item, person and split schemas"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from splitter.models.enums import FilterStatus, SplitMode
from splitter.services.calculation_service import AssignmentValidation, BillTotals, PersonBreakdown
from splitter.utils.currency import format_amount


# ---------------------------------------------------------------------------
# Bills
# ---------------------------------------------------------------------------

class BillBase(BaseModel):
    place_name: str = ""
    date: Optional[datetime] = None
    notes: str = ""
    discount_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)
    service_charge_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)
    tax_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)
    currency_code: Optional[str] = Field(default=None, min_length=3, max_length=3)
    pay_to_name: str = ""
    pay_to_method: str = ""
    pay_to_details: str = ""
    
    @field_validator("currency_code")
    @classmethod
    def upper_currency(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else v


class BillCreate(BillBase):
    """Omitted rates and currency fall back to the configured defaults"""
    pass


class BillUpdate(BaseModel):
    place_name: Optional[str] = None
    date: Optional[datetime] = None
    notes: Optional[str] = None
    discount_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)
    service_charge_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)
    tax_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)
    currency_code: Optional[str] = Field(default=None, min_length=3, max_length=3)
    pay_to_name: Optional[str] = None
    pay_to_method: Optional[str] = None
    pay_to_details: Optional[str] = None
    
    @field_validator("currency_code")
    @classmethod
    def upper_currency(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else v


class BillQuery(BaseModel):
    """Listing criteria, passed explicitly by the caller"""
    search_text: str = ""
    show_archived: bool = False
    status: FilterStatus = FilterStatus.ALL


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Item name cannot be empty")
    amount: Decimal = Field(..., ge=0)
    quantity: int = Field(default=1, ge=1)
    notes: str = ""


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[Decimal] = Field(default=None, ge=0)
    quantity: Optional[int] = Field(default=None, ge=1)
    notes: Optional[str] = None


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------

class PersonCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Name cannot be empty")
    phone_number: str = ""
    payment_method: str = ""
    payment_details: str = ""


class PersonUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    phone_number: Optional[str] = None
    payment_method: Optional[str] = None
    payment_details: Optional[str] = None


class PersonFromContact(BaseModel):
    contact_id: UUID


class PaymentToggle(BaseModel):
    method_used: Optional[str] = None


# ---------------------------------------------------------------------------
# Splits
# ---------------------------------------------------------------------------

class AssignWholeRequest(BaseModel):
    person_id: UUID


class EqualSplitRequest(BaseModel):
    person_ids: List[UUID] = Field(default_factory=list)


class CustomSplitRequest(BaseModel):
    person_id: UUID
    amount: Decimal = Field(..., ge=0)


class PercentageShare(BaseModel):
    person_id: UUID
    percentage: Decimal = Field(..., ge=0)


class PercentageSplitRequest(BaseModel):
    shares: List[PercentageShare] = Field(default_factory=list)


class ApplySplitRequest(BaseModel):
    """Replace an item's splits in one go, as a split editor would"""
    mode: SplitMode
    person_ids: List[UUID] = Field(default_factory=list)
    amounts: Dict[UUID, Decimal] = Field(default_factory=dict)
    percentages: Dict[UUID, Decimal] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class SplitResponse(BaseModel):
    id: UUID
    item_id: Optional[UUID] = None
    person_id: Optional[UUID] = None
    amount: Decimal
    percentage: Decimal
    is_manual_amount: bool
    display_label: str
    created_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class PersonBrief(BaseModel):
    """Who shares an item, for item rows"""
    id: UUID
    name: str
    initials: str

    model_config = ConfigDict(from_attributes=True)


class ItemResponse(BaseModel):
    id: UUID
    name: str
    amount: Decimal
    quantity: int
    notes: str
    sort_order: int
    total_amount: Decimal
    assigned_amount: Decimal
    unassigned_amount: Decimal
    is_fully_assigned: bool
    created_at: datetime
    splits: List[SplitResponse] = []
    shared_by: List[PersonBrief] = []

    model_config = ConfigDict(from_attributes=True)


class PersonResponse(BaseModel):
    id: UUID
    name: str
    phone_number: str
    payment_method: str
    payment_details: str
    is_contact: bool
    has_paid: bool
    paid_at: Optional[datetime] = None
    payment_method_used: Optional[str] = None
    subtotal: Decimal
    initials: str
    created_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class BillSummary(BaseModel):
    """Listing row"""
    id: UUID
    place_name: str
    date: datetime
    currency_code: str
    is_archived: bool
    subtotal: Decimal
    is_fully_paid: bool
    paid_count: int
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class BillResponse(BillSummary):
    notes: str
    discount_percentage: Decimal
    service_charge_percentage: Decimal
    tax_percentage: Decimal
    currency_symbol: str
    pay_to_name: str
    pay_to_method: str
    pay_to_details: str
    items: List[ItemResponse] = []
    people: List[PersonResponse] = []


class PersonBreakdownResponse(BaseModel):
    person_id: UUID
    name: str
    has_paid: bool
    subtotal: Decimal
    discount_amount: Decimal
    after_discount: Decimal
    service_charge: Decimal
    tax: Decimal
    final_amount: Decimal
    display_amount: str
    
    @classmethod
    def from_breakdown(cls, breakdown: PersonBreakdown, currency_code: str) -> "PersonBreakdownResponse":
        person = breakdown.person
        return cls(
            person_id=person.id,
            name=person.name,
            has_paid=person.has_paid,
            subtotal=breakdown.subtotal,
            discount_amount=breakdown.discount_amount,
            after_discount=breakdown.after_discount,
            service_charge=breakdown.service_charge,
            tax=breakdown.tax,
            final_amount=breakdown.final_amount,
            display_amount=format_amount(breakdown.final_amount, currency_code),
        )


class BillTotalsResponse(BaseModel):
    subtotal: Decimal
    discount_amount: Decimal
    after_discount: Decimal
    service_charge: Decimal
    tax: Decimal
    grand_total: Decimal
    total_from_people: Decimal
    unassigned_amount: Decimal
    difference: Decimal
    has_difference: bool
    display_grand_total: str
    person_breakdowns: List[PersonBreakdownResponse] = []
    
    @classmethod
    def from_totals(cls, totals: BillTotals, currency_code: str) -> "BillTotalsResponse":
        return cls(
            subtotal=totals.subtotal,
            discount_amount=totals.discount_amount,
            after_discount=totals.after_discount,
            service_charge=totals.service_charge,
            tax=totals.tax,
            grand_total=totals.grand_total,
            total_from_people=totals.total_from_people,
            unassigned_amount=totals.unassigned_amount,
            difference=totals.difference,
            has_difference=totals.has_difference,
            display_grand_total=format_amount(totals.grand_total, currency_code),
            person_breakdowns=[
                PersonBreakdownResponse.from_breakdown(b, currency_code) for b in totals.person_breakdowns
            ],
        )


class AssignmentValidationResponse(BaseModel):
    is_complete: bool
    issue_count: int
    unassigned_item_ids: List[UUID] = []
    partially_assigned_item_ids: List[UUID] = []
    
    @classmethod
    def from_validation(cls, validation: AssignmentValidation) -> "AssignmentValidationResponse":
        return cls(
            is_complete=validation.is_complete,
            issue_count=validation.issue_count,
            unassigned_item_ids=[item.id for item in validation.unassigned_items],
            partially_assigned_item_ids=[item.id for item in validation.partially_assigned_items],
        )
