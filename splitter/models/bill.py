"""Bill Splitting Models"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, Numeric, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from splitter.config import settings
from splitter.models.base import BaseModel, UpdatedAtMixin
from splitter.utils import currency
from splitter.utils.time import get_utc_now

ZERO = Decimal("0")

# Split amounts carry sub-cent residue (100 / 3), so money keeps 10 fractional digits
Money = Numeric(24, 10, asdecimal=True)
Rate = Numeric(7, 4, asdecimal=True)


def _sum_amounts(splits) -> Decimal:
    return sum((Decimal(split.amount) for split in splits), ZERO)


class Bill(BaseModel, UpdatedAtMixin):
    """
    One shared-expense session: the items ordered, the people sharing them
    and the percentage adjustments applied to everyone's share.
    
    Rates are whole-number percents (``6`` means 6%).
    """
    __tablename__ = "bills"
    
    place_name = Column(String(255), nullable=False, default="")
    date = Column(DateTime, nullable=False, default=get_utc_now, index=True)
    notes = Column(Text, nullable=False, default="")
    
    discount_percentage = Column(Rate, nullable=False, default=ZERO)
    service_charge_percentage = Column(Rate, nullable=False, default=ZERO)
    tax_percentage = Column(Rate, nullable=False, default=lambda: settings.DEFAULT_TAX_PERCENTAGE)
    
    currency_code = Column(String(3), nullable=False, default=lambda: settings.DEFAULT_CURRENCY)
    
    pay_to_name = Column(String(255), nullable=False, default="")
    pay_to_method = Column(String(255), nullable=False, default="")
    pay_to_details = Column(String(255), nullable=False, default="")
    
    is_archived = Column(Boolean, default=False, nullable=False, index=True)
    
    # Relationships
    items = relationship(
        "BillItem",
        back_populates="bill",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="BillItem.sort_order",
    )
    people = relationship(
        "Person",
        back_populates="bill",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Person.created_at",
    )
    
    @property
    def subtotal(self) -> Decimal:
        """Total of all items before any adjustments"""
        return sum((item.total_amount for item in self.items), ZERO)
    
    @property
    def is_fully_paid(self) -> bool:
        return bool(self.people) and all(person.has_paid for person in self.people)
    
    @property
    def paid_count(self) -> int:
        return sum(1 for person in self.people if person.has_paid)
    
    @property
    def currency_symbol(self) -> str:
        return currency.currency_symbol(self.currency_code)
    
    def format_amount(self, value: Decimal) -> str:
        """Format a value in this bill's currency"""
        return currency.format_amount(value, self.currency_code)
    
    @property
    def display_date(self) -> str:
        return self.date.strftime("%d %b %Y")
    
    @property
    def short_display_date(self) -> str:
        return self.date.strftime("%d %b")
    
    def __repr__(self) -> str:
        return f"<Bill {self.place_name!r} {self.date:%Y-%m-%d}>"


class BillItem(BaseModel):
    """
    One priced line on a bill. ``amount`` is the unit price; the item's
    value is ``amount * quantity``.
    """
    __tablename__ = "bill_items"
    
    bill_id = Column(Uuid(as_uuid=True), ForeignKey("bills.id", ondelete="CASCADE"), nullable=False, index=True)
    
    name = Column(String(255), nullable=False, default="")
    amount = Column(Money, nullable=False, default=ZERO)
    quantity = Column(Integer, nullable=False, default=1)
    notes = Column(Text, nullable=False, default="")
    sort_order = Column(Integer, nullable=False, default=0)
    
    # Relationships
    bill = relationship("Bill", back_populates="items")
    splits = relationship(
        "ItemSplit",
        back_populates="item",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ItemSplit.created_at",
    )
    
    @property
    def total_amount(self) -> Decimal:
        return Decimal(self.amount) * self.quantity
    
    @property
    def assigned_amount(self) -> Decimal:
        return _sum_amounts(self.splits)
    
    @property
    def unassigned_amount(self) -> Decimal:
        return max(ZERO, self.total_amount - self.assigned_amount)
    
    @property
    def is_fully_assigned(self) -> bool:
        return self.assigned_amount >= self.total_amount
    
    @property
    def shared_by(self) -> List["Person"]:
        """People holding a share of this item"""
        return [split.person for split in self.splits if split.person is not None]
    
    def __repr__(self) -> str:
        return f"<BillItem {self.name!r} {self.amount} x{self.quantity}>"


class Person(BaseModel):
    """
    A participant in one bill, or a reusable contact when ``is_contact`` is set.
    
    Contacts have no bill; adding one to a bill creates a separate copy.
    """
    __tablename__ = "people"
    
    bill_id = Column(Uuid(as_uuid=True), ForeignKey("bills.id", ondelete="CASCADE"), nullable=True, index=True)
    
    name = Column(String(255), nullable=False, default="")
    phone_number = Column(String(50), nullable=False, default="")
    payment_method = Column(String(255), nullable=False, default="")  # e.g. "DuitNow", "Bank Transfer"
    payment_details = Column(String(255), nullable=False, default="")
    is_contact = Column(Boolean, default=False, nullable=False, index=True)
    
    # Payment status for the owning bill
    has_paid = Column(Boolean, default=False, nullable=False)
    paid_at = Column(DateTime, nullable=True)
    payment_method_used = Column(String(255), nullable=True)
    
    # Relationships
    bill = relationship("Bill", back_populates="people")
    splits = relationship(
        "ItemSplit",
        back_populates="person",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ItemSplit.created_at",
    )
    
    @property
    def subtotal(self) -> Decimal:
        """Sum of this person's item shares before discount, service charge and tax"""
        return _sum_amounts(self.splits)
    
    @property
    def initials(self) -> str:
        parts = self.name.split()
        if len(parts) >= 2:
            return (parts[0][:1] + parts[1][:1]).upper()
        if parts:
            return parts[0][:2].upper()
        return "?"
    
    def copy_for_bill(self) -> "Person":
        """Fresh bill-scoped copy of the identity and payment fields, unpaid"""
        return Person(
            name=self.name,
            phone_number=self.phone_number,
            payment_method=self.payment_method,
            payment_details=self.payment_details,
            is_contact=False,
        )
    
    def __repr__(self) -> str:
        return f"<Person {self.name!r}{' (contact)' if self.is_contact else ''}>"


class ItemSplit(BaseModel):
    """
    How much of one item one person owes.
    
    ``amount`` is authoritative; ``percentage`` is informational.
    """
    __tablename__ = "item_splits"
    
    item_id = Column(Uuid(as_uuid=True), ForeignKey("bill_items.id", ondelete="CASCADE"), nullable=False, index=True)
    person_id = Column(Uuid(as_uuid=True), ForeignKey("people.id", ondelete="CASCADE"), nullable=False, index=True)
    
    amount = Column(Money, nullable=False, default=ZERO)
    percentage = Column(Money, nullable=False, default=Decimal("100"))
    is_manual_amount = Column(Boolean, default=False, nullable=False)
    
    # Relationships
    item = relationship("BillItem", back_populates="splits")
    person = relationship("Person", back_populates="splits")
    
    @property
    def display_label(self) -> str:
        return currency.split_label(self.amount, self.percentage, self.is_manual_amount)
    
    def __repr__(self) -> str:
        return f"<ItemSplit {self.amount} ({self.percentage}%)>"


def bill_of(split: ItemSplit) -> Optional[Bill]:
    """The bill a split belongs to, through whichever side is still attached"""
    if split.item is not None and split.item.bill is not None:
        return split.item.bill
    if split.person is not None:
        return split.person.bill
    return None
