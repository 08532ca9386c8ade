"""Paid By update results"""
from typing import Any, Optional

from pydantic import BaseModel

from splitt.models.enums import PayerType


class AddEntryResult(BaseModel):
    """Result of adding a Paid By entry"""
    entry_id: int
    is_new_entry: bool
    entries_count: int
    is_default_entry_affected: bool
    default_entry_id: Optional[int] = None


class RemoveEntryResult(BaseModel):
    """Result of removing a Paid By entry"""
    is_removed: bool
    is_default_entry_affected: bool = False
    is_recalculated: bool = False
    removed_user_id: Optional[Any] = None
    default_entry_id: Optional[int] = None
    total: int = 0
    remainder: int = 0
    is_valid: bool = False


class UpdateUserResult(BaseModel):
    """Result of assigning a user to a Paid By entry"""
    added_user_id: Any
    removed_user_id: Optional[Any] = None
    is_valid: bool


class UpdateAmountResult(BaseModel):
    """Result of changing the amount of a Paid By entry"""
    amount: int
    total: int
    remainder: int
    is_valid: bool


class ExpenseAmountChangeResult(BaseModel):
    """Paid By state after the expense amount changed"""
    has_single_entry: bool
    total: int
    remainder: int
    is_valid: bool
    default_entry_amount: int


class PayerSummary(BaseModel):
    """Who paid, as shown on the Paid By button"""
    type: PayerType
    payer_id: Optional[Any] = None
