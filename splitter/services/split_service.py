"""Split Allocator - creates and removes ItemSplit records.

A split sits in two collections at once, ``item.splits`` and
``person.splits``. Every operation here adds to or removes from both sides
together, so neither side is left holding a split the other has dropped.
None of these operations raise on partial input; empty selections are no-ops.
"""

from decimal import Decimal
from typing import Dict, Iterable, Mapping, Optional, Sequence
from uuid import UUID

from splitter.core.logging import get_logger
from splitter.models.bill import BillItem, ItemSplit, Person, bill_of
from splitter.models.enums import SplitMode
from splitter.services.calculation_service import CalculationEngine

logger = get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _touch(item: Optional[BillItem]) -> None:
    if item is not None and item.bill is not None:
        item.bill.mark_updated()


def _link(item: BillItem, person: Person, amount: Decimal, percentage: Decimal, is_manual: bool) -> ItemSplit:
    split = ItemSplit(amount=amount, percentage=percentage, is_manual_amount=is_manual)
    # Appending to both collections also sets split.item / split.person
    item.splits.append(split)
    person.splits.append(split)
    return split


def _unlink(split: ItemSplit) -> None:
    item, person = split.item, split.person
    if item is not None and split in item.splits:
        item.splits.remove(split)
    if person is not None and split in person.splits:
        person.splits.remove(split)


class SplitService:
    """Allocation policies over a single item"""
    
    @staticmethod
    def clear_all_splits(item: BillItem) -> None:
        """Remove every split of the item from both the item and its people"""
        for split in list(item.splits):
            _unlink(split)
        _touch(item)
    
    @staticmethod
    def assign_whole(item: BillItem, person: Person) -> ItemSplit:
        """Give the whole item to one person, replacing any existing splits"""
        SplitService.clear_all_splits(item)
        split = _link(item, person, item.total_amount, HUNDRED, is_manual=False)
        logger.debug("Assigned item to one person", extra={"item_id": str(item.id), "person_id": str(person.id)})
        return split
    
    @staticmethod
    def split_equally(item: BillItem, people: Sequence[Person]) -> list:
        """
        Replace the item's splits with one exact equal share per person.
        
        Shares are never rounded, so an indivisible total (10.00 / 3) leaves
        a sub-cent residual rather than handing the remainder to anyone.
        """
        people = list(people)
        if not people:
            return []
        
        SplitService.clear_all_splits(item)
        count = len(people)
        share = CalculationEngine.split_amount_equally(item.total_amount, count)
        percentage = HUNDRED / Decimal(count)
        splits = [_link(item, person, share, percentage, is_manual=False) for person in people]
        logger.debug("Split item equally", extra={"item_id": str(item.id), "people": count})
        return splits
    
    @staticmethod
    def custom_split(item: BillItem, person: Person, amount: Decimal) -> ItemSplit:
        """
        Append a manual-amount split for one person. Existing splits are kept;
        calling twice for the same person adds a second split.
        """
        amount = Decimal(amount)
        total = item.total_amount
        percentage = (amount / total) * HUNDRED if total > ZERO else ZERO
        split = _link(item, person, amount, percentage, is_manual=True)
        _touch(item)
        return split
    
    @staticmethod
    def split_by_percentage(item: BillItem, shares: Mapping[Person, Decimal]) -> list:
        """
        Replace the item's splits with one manual split per person sized by
        their percentage of the item total. Non-positive percentages are skipped.
        """
        SplitService.clear_all_splits(item)
        splits = []
        for person, percentage in shares.items():
            percentage = Decimal(percentage)
            if percentage <= ZERO:
                continue
            amount = CalculationEngine.calculate_share(item.total_amount, percentage)
            splits.append(SplitService.custom_split(item, person, amount))
        return splits
    
    @staticmethod
    def apply_split(
        item: BillItem,
        mode: SplitMode,
        people: Iterable[Person],
        amounts: Optional[Mapping[UUID, Decimal]] = None,
        percentages: Optional[Mapping[UUID, Decimal]] = None,
    ) -> list:
        """
        Replace the item's splits with the selected people under one policy.
        
        ``amounts`` and ``percentages`` are keyed by person id. People without
        a positive amount or percentage get no split in those modes.
        """
        people = list(people)
        SplitService.clear_all_splits(item)
        
        if mode == SplitMode.EQUAL:
            return SplitService.split_equally(item, people)
        
        if mode == SplitMode.PERCENTAGE:
            percentages = percentages or {}
            shares: Dict[Person, Decimal] = {
                person: Decimal(percentages[person.id]) for person in people if person.id in percentages
            }
            return SplitService.split_by_percentage(item, shares)
        
        amounts = amounts or {}
        splits = []
        for person in people:
            amount = amounts.get(person.id)
            if amount is None or Decimal(amount) <= ZERO:
                continue
            splits.append(SplitService.custom_split(item, person, amount))
        return splits
    
    @staticmethod
    def remove_split(split: ItemSplit) -> None:
        """Detach one split from its item and its person"""
        bill = bill_of(split)
        _unlink(split)
        if bill is not None:
            bill.mark_updated()
