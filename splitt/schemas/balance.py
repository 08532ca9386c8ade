"""Balance schemas"""
from typing import Optional

from pydantic import BaseModel, model_validator

from splitt.models.enums import BalanceStatusType


class ExpenseBalance(BaseModel):
    """Current user's balance note for the expense being edited"""
    status: BalanceStatusType
    amount: Optional[int] = None  # set only when RESOLVED

    @model_validator(mode="after")
    def check_amount_matches_status(self):
        """Only a resolved balance carries an amount"""
        if self.status == BalanceStatusType.RESOLVED and self.amount is None:
            raise ValueError("A resolved balance requires an amount")
        if self.status != BalanceStatusType.RESOLVED and self.amount is not None:
            raise ValueError(f"Balance status {self.status.value} carries no amount")
        return self

    @classmethod
    def resolved(cls, amount: int) -> "ExpenseBalance":
        return cls(status=BalanceStatusType.RESOLVED, amount=amount)
