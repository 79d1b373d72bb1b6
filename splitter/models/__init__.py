"""Models Package - Export all models for easy imports"""

from splitter.models.base import BaseModel, UpdatedAtMixin
from splitter.models.enums import SplitMode, FilterStatus
from splitter.models.bill import Bill, BillItem, Person, ItemSplit


__all__ = [
    # Base classes
    "BaseModel",
    "UpdatedAtMixin",
    
    # Enums
    "SplitMode",
    "FilterStatus",
    
    # Bill graph
    "Bill",
    "BillItem",
    "Person",
    "ItemSplit",
]
