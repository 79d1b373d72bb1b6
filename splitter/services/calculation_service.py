"""Calculation Engine - pure, read-only money breakdowns.

Every figure is derived with the same cascade::

    discount        = subtotal * discount% / 100
    after_discount  = subtotal - discount
    service_charge  = after_discount * service% / 100
    tax             = (after_discount + service_charge) * tax% / 100
    final           = after_discount + service_charge + tax

Discount comes first, service charge is levied on the discounted amount and
tax on the discounted amount plus service charge. Values are exact Decimals;
nothing here rounds.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Tuple

from splitter.config import settings
from splitter.models.bill import Bill, BillItem, ItemSplit, Person
from splitter.utils.currency import round_to_places

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Adjustments:
    """The cascade applied to one subtotal"""
    subtotal: Decimal
    discount_amount: Decimal
    after_discount: Decimal
    service_charge: Decimal
    tax: Decimal
    final_amount: Decimal


@dataclass(frozen=True)
class PersonBreakdown:
    """What one person owes, stage by stage"""
    person: Person
    subtotal: Decimal
    discount_amount: Decimal
    after_discount: Decimal
    service_charge: Decimal
    tax: Decimal
    final_amount: Decimal
    
    @property
    def items(self) -> List[Tuple[BillItem, ItemSplit]]:
        """(item, split) pairs this person is paying for"""
        return [(split.item, split) for split in self.person.splits if split.item is not None]
    
    @property
    def has_items(self) -> bool:
        return bool(self.person.splits)


@dataclass(frozen=True)
class BillTotals:
    """Bill-level cascade plus the per-person view used to reconcile it"""
    subtotal: Decimal
    discount_amount: Decimal
    after_discount: Decimal
    service_charge: Decimal
    tax: Decimal
    grand_total: Decimal
    total_from_people: Decimal
    unassigned_amount: Decimal
    person_breakdowns: List[PersonBreakdown] = field(default_factory=list)
    
    @property
    def difference(self) -> Decimal:
        """Positive when value is unassigned, negative when over-assigned"""
        return self.grand_total - self.total_from_people
    
    @property
    def has_difference(self) -> bool:
        return abs(self.difference) > settings.RECONCILIATION_TOLERANCE
    
    @property
    def is_reconciled(self) -> bool:
        return not self.has_difference


@dataclass(frozen=True)
class AssignmentValidation:
    """Advisory report of items whose splits do not cover their value"""
    is_complete: bool
    unassigned_items: List[BillItem] = field(default_factory=list)
    partially_assigned_items: List[BillItem] = field(default_factory=list)
    
    @property
    def has_issues(self) -> bool:
        return not self.is_complete
    
    @property
    def issue_count(self) -> int:
        return len(self.unassigned_items) + len(self.partially_assigned_items)


class CalculationEngine:
    """Derives breakdowns from a bill snapshot without mutating it"""
    
    @staticmethod
    def apply_adjustments(
        subtotal: Decimal,
        discount_percentage: Decimal,
        service_charge_percentage: Decimal,
        tax_percentage: Decimal,
    ) -> Adjustments:
        subtotal = Decimal(subtotal)
        discount_amount = subtotal * (Decimal(discount_percentage) / HUNDRED)
        after_discount = subtotal - discount_amount
        service_charge = after_discount * (Decimal(service_charge_percentage) / HUNDRED)
        taxable_amount = after_discount + service_charge
        tax = taxable_amount * (Decimal(tax_percentage) / HUNDRED)
        final_amount = after_discount + service_charge + tax
        return Adjustments(
            subtotal=subtotal,
            discount_amount=discount_amount,
            after_discount=after_discount,
            service_charge=service_charge,
            tax=tax,
            final_amount=final_amount,
        )
    
    @staticmethod
    def person_breakdown(
        person: Person,
        discount_percentage: Decimal,
        service_charge_percentage: Decimal,
        tax_percentage: Decimal,
    ) -> PersonBreakdown:
        """Run the cascade over one person's subtotal"""
        adjusted = CalculationEngine.apply_adjustments(
            person.subtotal, discount_percentage, service_charge_percentage, tax_percentage
        )
        return PersonBreakdown(
            person=person,
            subtotal=adjusted.subtotal,
            discount_amount=adjusted.discount_amount,
            after_discount=adjusted.after_discount,
            service_charge=adjusted.service_charge,
            tax=adjusted.tax,
            final_amount=adjusted.final_amount,
        )
    
    @staticmethod
    def breakdown_for(bill: Bill, person: Person) -> PersonBreakdown:
        """Person breakdown using the bill's own rates"""
        return CalculationEngine.person_breakdown(
            person,
            bill.discount_percentage,
            bill.service_charge_percentage,
            bill.tax_percentage,
        )
    
    @staticmethod
    def all_breakdowns(bill: Bill) -> List[PersonBreakdown]:
        return [CalculationEngine.breakdown_for(bill, person) for person in bill.people]
    
    @staticmethod
    def bill_totals(bill: Bill) -> BillTotals:
        """
        Bill-level cascade over the item subtotal, alongside every person's
        breakdown. ``unassigned_amount`` is the item value no split covers;
        it goes negative when items are over-assigned.
        """
        adjusted = CalculationEngine.apply_adjustments(
            bill.subtotal,
            bill.discount_percentage,
            bill.service_charge_percentage,
            bill.tax_percentage,
        )
        breakdowns = CalculationEngine.all_breakdowns(bill)
        total_from_people = sum((b.final_amount for b in breakdowns), ZERO)
        assigned_subtotal = sum((person.subtotal for person in bill.people), ZERO)
        
        return BillTotals(
            subtotal=adjusted.subtotal,
            discount_amount=adjusted.discount_amount,
            after_discount=adjusted.after_discount,
            service_charge=adjusted.service_charge,
            tax=adjusted.tax,
            grand_total=adjusted.final_amount,
            total_from_people=total_from_people,
            unassigned_amount=adjusted.subtotal - assigned_subtotal,
            person_breakdowns=breakdowns,
        )
    
    @staticmethod
    def validate_assignments(bill: Bill) -> AssignmentValidation:
        """Classify items as unassigned (nothing split) or partially assigned"""
        unassigned: List[BillItem] = []
        partial: List[BillItem] = []
        for item in bill.items:
            assigned = item.assigned_amount
            if assigned == ZERO:
                unassigned.append(item)
            elif assigned < item.total_amount:
                partial.append(item)
        return AssignmentValidation(
            is_complete=not unassigned and not partial,
            unassigned_items=unassigned,
            partially_assigned_items=partial,
        )
    
    # Splitting helpers
    
    @staticmethod
    def split_amount_equally(amount: Decimal, count: int) -> Decimal:
        """Exact equal share; a non-positive count leaves the amount whole"""
        if count <= 0:
            return Decimal(amount)
        return Decimal(amount) / Decimal(count)
    
    @staticmethod
    def calculate_share(amount: Decimal, percentage: Decimal) -> Decimal:
        return Decimal(amount) * (Decimal(percentage) / HUNDRED)
    
    @staticmethod
    def round_to_currency(value: Decimal, places: int = 2) -> Decimal:
        """Banker's rounding, for display only"""
        return round_to_places(value, places)
