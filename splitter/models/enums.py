"""Centralized Enum Definitions"""

import enum


class SplitMode(str, enum.Enum):
    """How an item's total is divided between the selected people"""
    EQUAL = "equal"
    CUSTOM = "custom"
    PERCENTAGE = "percentage"


class FilterStatus(str, enum.Enum):
    """Payment-status filter for bill listings"""
    ALL = "all"
    PAID = "paid"
    PENDING = "pending"
