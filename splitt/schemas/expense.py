"""Expense schemas"""

from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator

from splitt.models.enums import ExpenseFormType, SplitType


class ExpenseSubmission(BaseModel):
    """Snapshot of a valid expense draft, handed over for persistence"""

    form_type: ExpenseFormType
    title: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)
    expense_date: Optional[date] = None
    emoji: Optional[str] = None
    note: Optional[str] = None
    split_type: SplitType
    paid_by: Dict[Any, int]
    split_amounts: Dict[Any, int]
    split_shares: Optional[Dict[Any, int]] = None

    @model_validator(mode="after")
    def validate_totals(self):
        """Paid and owed amounts must both add up to the expense amount"""
        if sum(self.paid_by.values()) != self.amount:
            raise ValueError(
                f"Sum of amounts paid ({sum(self.paid_by.values())}) must equal amount ({self.amount})"
            )
        if sum(self.split_amounts.values()) != self.amount:
            raise ValueError(
                f"Sum of amounts owed ({sum(self.split_amounts.values())}) must equal amount ({self.amount})"
            )
        return self
