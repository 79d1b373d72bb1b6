"""Bill Service - entity operations and persistence for the bill graph.

The synchronous methods mutate an in-memory bill graph and never touch the
database; the async methods load, flush and commit around them. Every
mutating operation refreshes the bill's ``updated_at``.
"""

from decimal import Decimal
from typing import Any, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from splitter.core.exceptions import BillIntegrityError
from splitter.core.logging import get_logger
from splitter.models.bill import Bill, BillItem, ItemSplit, Person
from splitter.models.enums import FilterStatus
from splitter.schemas.bill import BillCreate, BillQuery, BillUpdate
from splitter.services.split_service import SplitService
from splitter.utils.time import get_utc_now

logger = get_logger(__name__)

# Bill-level fields a caller may edit directly
BILL_SETTINGS_FIELDS = (
    "place_name",
    "date",
    "notes",
    "discount_percentage",
    "service_charge_percentage",
    "tax_percentage",
    "currency_code",
    "pay_to_name",
    "pay_to_method",
    "pay_to_details",
)


def _bill_load_options():
    """
    Eager-load the whole bill graph so no attribute access needs IO.

    With populate_existing, each object reached through a split is refreshed
    and its own ``splits`` collection reset, so both chains reload it.
    """
    return (
        selectinload(Bill.items)
        .selectinload(BillItem.splits)
        .selectinload(ItemSplit.person)
        .selectinload(Person.splits),
        selectinload(Bill.people)
        .selectinload(Person.splits)
        .selectinload(ItemSplit.item)
        .selectinload(BillItem.splits),
    )


class BillService:
    """Service layer for bills, their items and their people"""
    
    # ------------------------------------------------------------------
    # Bill graph operations (synchronous, in memory)
    # ------------------------------------------------------------------
    
    @staticmethod
    def new_bill(**fields: Any) -> Bill:
        """Build a bill; rates and currency default from settings"""
        fields = {k: v for k, v in fields.items() if v is not None}
        return Bill(**fields)
    
    @staticmethod
    def add_item(bill: Bill, name: str, amount: Decimal, quantity: int = 1, notes: str = "") -> BillItem:
        item = BillItem(
            name=name,
            amount=Decimal(amount),
            quantity=quantity,
            notes=notes,
            sort_order=len(bill.items),
        )
        bill.items.append(item)
        bill.mark_updated()
        return item
    
    @staticmethod
    def update_item(
        bill: Bill,
        item: BillItem,
        name: Optional[str] = None,
        amount: Optional[Decimal] = None,
        quantity: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> BillItem:
        """Edit an item in place. Existing splits keep their amounts."""
        if name is not None:
            item.name = name
        if amount is not None:
            item.amount = Decimal(amount)
        if quantity is not None:
            item.quantity = quantity
        if notes is not None:
            item.notes = notes
        bill.mark_updated()
        return item
    
    @staticmethod
    def remove_item(bill: Bill, item: BillItem) -> None:
        """Detach an item and its splits, including from every sharer"""
        SplitService.clear_all_splits(item)
        if item in bill.items:
            bill.items.remove(item)
        bill.mark_updated()
    
    @staticmethod
    def add_person(
        bill: Bill,
        name: str,
        phone_number: str = "",
        payment_method: str = "",
        payment_details: str = "",
    ) -> Person:
        person = Person(
            name=name,
            phone_number=phone_number,
            payment_method=payment_method,
            payment_details=payment_details,
            is_contact=False,
        )
        bill.people.append(person)
        bill.mark_updated()
        return person
    
    @staticmethod
    def add_person_from_contact(bill: Bill, contact: Person) -> Person:
        """Add an unpaid bill-scoped copy of a contact; the contact itself is untouched"""
        person = contact.copy_for_bill()
        bill.people.append(person)
        bill.mark_updated()
        return person
    
    @staticmethod
    def update_person(
        bill: Bill,
        person: Person,
        name: Optional[str] = None,
        payment_method: Optional[str] = None,
        payment_details: Optional[str] = None,
        phone_number: Optional[str] = None,
    ) -> Person:
        if name is not None:
            person.name = name
        if payment_method is not None:
            person.payment_method = payment_method
        if payment_details is not None:
            person.payment_details = payment_details
        if phone_number is not None:
            person.phone_number = phone_number
        bill.mark_updated()
        return person
    
    @staticmethod
    def remove_person(bill: Bill, person: Person) -> None:
        """Detach a person and every split they hold from the items sharing them"""
        for split in list(person.splits):
            SplitService.remove_split(split)
        if person in bill.people:
            bill.people.remove(person)
        bill.mark_updated()
    
    @staticmethod
    def toggle_payment_status(bill: Bill, person: Person, method_used: Optional[str] = None) -> Person:
        """Flip has_paid; paid_at is stamped when paying and cleared when not"""
        person.has_paid = not person.has_paid
        if person.has_paid:
            person.paid_at = get_utc_now()
            person.payment_method_used = method_used
        else:
            person.paid_at = None
            person.payment_method_used = None
        bill.mark_updated()
        return person
    
    @staticmethod
    def archive_bill(bill: Bill) -> None:
        bill.is_archived = True
        bill.mark_updated()
    
    @staticmethod
    def unarchive_bill(bill: Bill) -> None:
        bill.is_archived = False
        bill.mark_updated()
    
    @staticmethod
    def update_settings(bill: Bill, **changes: Any) -> Bill:
        """Edit bill-level fields; unknown keys and None values are ignored"""
        for field in BILL_SETTINGS_FIELDS:
            value = changes.get(field)
            if value is not None:
                setattr(bill, field, value)
        bill.mark_updated()
        return bill
    
    @staticmethod
    def duplicate_bill(bill: Bill) -> Bill:
        """
        Copy a bill's venue, rates, currency and payee along with its people
        (as fresh unpaid copies). Items and splits are not copied.
        """
        copy = Bill(
            place_name=bill.place_name,
            discount_percentage=bill.discount_percentage,
            service_charge_percentage=bill.service_charge_percentage,
            tax_percentage=bill.tax_percentage,
            currency_code=bill.currency_code,
            pay_to_name=bill.pay_to_name,
            pay_to_method=bill.pay_to_method,
            pay_to_details=bill.pay_to_details,
        )
        for person in bill.people:
            copy.people.append(person.copy_for_bill())
        return copy
    
    # ------------------------------------------------------------------
    # Lookups and consistency
    # ------------------------------------------------------------------
    
    @staticmethod
    def find_item(bill: Bill, item_id: UUID) -> Optional[BillItem]:
        return next((item for item in bill.items if item.id == item_id), None)
    
    @staticmethod
    def find_person(bill: Bill, person_id: UUID) -> Optional[Person]:
        return next((person for person in bill.people if person.id == person_id), None)
    
    @staticmethod
    def find_split(bill: Bill, split_id: UUID) -> Optional[ItemSplit]:
        for item in bill.items:
            for split in item.splits:
                if split.id == split_id:
                    return split
        return None
    
    @staticmethod
    def check_consistency(bill: Bill) -> List[str]:
        """
        List structural defects in the bill graph. An empty list means every
        split is held by both its item and its person, both within this bill,
        and payment timestamps agree with payment flags.
        """
        violations: List[str] = []
        item_ids = {item.id for item in bill.items}
        person_ids = {person.id for person in bill.people}
        
        for item in bill.items:
            for split in item.splits:
                if split.person is None or split.person.id not in person_ids:
                    violations.append(f"split {split.id} on item {item.id} references a person outside the bill")
                elif split not in split.person.splits:
                    violations.append(f"split {split.id} is missing from person {split.person.id}")
        
        for person in bill.people:
            if person.is_contact:
                violations.append(f"contact {person.id} is attached to the bill directly")
            if not person.has_paid and person.paid_at is not None:
                violations.append(f"person {person.id} is unpaid but has paid_at set")
            for split in person.splits:
                if split.item is None or split.item.id not in item_ids:
                    violations.append(f"split {split.id} of person {person.id} references an item outside the bill")
                elif split not in split.item.splits:
                    violations.append(f"split {split.id} is missing from item {split.item.id}")
        
        return violations
    
    @staticmethod
    def assert_consistent(bill: Bill) -> None:
        violations = BillService.check_consistency(bill)
        if violations:
            logger.error("Bill graph is inconsistent", extra={"bill_id": bill.id, "violations": violations})
            raise BillIntegrityError(violations)
    
    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    
    @staticmethod
    def filter_bills(bills: Iterable[Bill], query: BillQuery) -> List[Bill]:
        """Apply archive, payment-status and search filters; newest date first"""
        result = list(bills)
        
        if not query.show_archived:
            result = [bill for bill in result if not bill.is_archived]
        
        if query.status == FilterStatus.PAID:
            result = [bill for bill in result if bill.is_fully_paid]
        elif query.status == FilterStatus.PENDING:
            result = [bill for bill in result if not bill.is_fully_paid]
        
        needle = query.search_text.strip().casefold()
        if needle:
            result = [
                bill for bill in result
                if needle in bill.place_name.casefold()
                or any(needle in person.name.casefold() for person in bill.people)
            ]
        
        result.sort(key=lambda bill: bill.date, reverse=True)
        return result
    
    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    
    @staticmethod
    async def get_bill_by_id(db: AsyncSession, bill_id: UUID) -> Optional[Bill]:
        result = await db.execute(
            select(Bill)
            .options(*_bill_load_options())
            .where(Bill.id == bill_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
    
    @staticmethod
    async def list_bills(db: AsyncSession, query: Optional[BillQuery] = None) -> List[Bill]:
        result = await db.execute(select(Bill).options(*_bill_load_options()))
        return BillService.filter_bills(result.scalars().all(), query or BillQuery())
    
    @staticmethod
    async def save_bill(db: AsyncSession, bill: Bill) -> Bill:
        """Check, commit and fully reload the bill graph"""
        BillService.assert_consistent(bill)
        db.add(bill)
        await db.commit()
        logger.debug("Bill saved", extra={"bill_id": bill.id})
        return await BillService.get_bill_by_id(db, bill.id)
    
    @staticmethod
    async def create_bill(db: AsyncSession, bill_data: BillCreate) -> Bill:
        bill = BillService.new_bill(**bill_data.model_dump(exclude_none=True))
        saved = await BillService.save_bill(db, bill)
        logger.info("Bill created", extra={"bill_id": saved.id})
        return saved
    
    @staticmethod
    async def update_bill(db: AsyncSession, bill_id: UUID, bill_update: BillUpdate) -> Optional[Bill]:
        bill = await BillService.get_bill_by_id(db, bill_id)
        if not bill:
            return None
        BillService.update_settings(bill, **bill_update.model_dump(exclude_unset=True))
        return await BillService.save_bill(db, bill)
    
    @staticmethod
    async def duplicate_stored_bill(db: AsyncSession, bill_id: UUID) -> Optional[Bill]:
        bill = await BillService.get_bill_by_id(db, bill_id)
        if not bill:
            return None
        copy = await BillService.save_bill(db, BillService.duplicate_bill(bill))
        logger.info("Bill duplicated", extra={"bill_id": copy.id, "source_bill_id": str(bill_id)})
        return copy
    
    @staticmethod
    async def delete_bill(db: AsyncSession, bill_id: UUID) -> bool:
        """Delete a bill; its items, people and splits go with it"""
        bill = await BillService.get_bill_by_id(db, bill_id)
        if not bill:
            return False
        await db.delete(bill)
        await db.commit()
        logger.info("Bill deleted", extra={"bill_id": bill_id})
        return True
