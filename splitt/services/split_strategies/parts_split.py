"""Parts split strategy"""

from typing import Hashable, Optional

from splitt.models.enums import SplitType
from splitt.schemas.split import PartsSplitResult
from splitt.services.split_strategies.base import BaseSplitStrategy
from splitt.utils.amount_utils import sum_amounts


class PartsSplitStrategy(BaseSplitStrategy):
    """Strategy for splitting with fixed amounts entered per user"""

    split_type = SplitType.PARTS

    def __init__(self, rng=None):
        super().__init__(rng)
        self._total = 0
        self._remainder = 0

    @property
    def total(self) -> int:
        return self._total

    @property
    def remainder(self) -> int:
        """Expense amount not yet assigned to anyone"""
        return self._remainder

    def reset(self) -> None:
        for user_id in self._split_amounts:
            self._split_amounts[user_id] = 0
        self._total = 0
        self._remainder = 0
        self._validate_for_submission()

    def update(
        self, expense_amount: int, user_id: Optional[Hashable] = None, value: Optional[int] = None
    ) -> PartsSplitResult:
        """
        Set a user's part and recalculate the totals.

        No correction is applied: the parts must be balanced by hand.
        """
        self._validate_amount(expense_amount, "expense_amount")
        if user_id is not None:
            self._validate_known_user(user_id)
            self._validate_amount(value, "value")
            self._split_amounts[user_id] = value
        self._calculate_splits(expense_amount)
        self._validate_for_submission()
        return self._prepare_update_response()

    def recalculate(self, expense_amount: int) -> None:
        self._validate_amount(expense_amount, "expense_amount")
        self._calculate_splits(expense_amount)
        self._validate_for_submission()

    def _prepare_update_response(self) -> PartsSplitResult:
        return PartsSplitResult(
            split_amounts=self.get_split_amounts(),
            total=self._total,
            remainder=self._remainder,
            is_valid=self._is_valid,
        )

    def _validate_for_submission(self) -> None:
        self._is_valid = self._remainder == 0

    def _calculate_splits(self, expense_amount: int) -> None:
        self._total = sum_amounts(self._split_amounts.values())
        self._remainder = expense_amount - self._total
