"""Shares (percentage) split strategy"""

from typing import Any, Dict, Hashable, List, Optional

from splitt.core.exceptions import ValidationError
from splitt.models.enums import SplitType
from splitt.schemas.split import SharesSplitResult
from splitt.services.split_strategies.base import BaseSplitStrategy
from splitt.utils.amount_utils import ONE_HUNDRED_PERCENT, percent_of, sum_amounts
from splitt.utils.validators import describe, is_non_negative_int


class SharesSplitStrategy(BaseSplitStrategy):
    """
    Strategy for splitting expense by integer percentage shares.

    Amounts are derived from shares and rounded half up. Once the shares
    reach 100%, the amounts are reconciled to the exact expense amount:
    on a single edit the edited user absorbs the rounding gap, on a full
    recalculation randomly chosen users are nudged by one unit each.
    """

    split_type = SplitType.SHARES

    def __init__(self, rng=None):
        super().__init__(rng)
        self._split_shares: Dict[Any, int] = {}
        self._total_amount = 0
        self._total_share = 0
        self._remainder_amount = 0
        self._remainder_share = 0

    def _register_user(self, user_id: Hashable) -> None:
        super()._register_user(user_id)
        self._split_shares[user_id] = 0

    def get_split_shares(self) -> Dict[Any, int]:
        """Split shares by user ID (a copy)"""
        return dict(self._split_shares)

    @property
    def total_amount(self) -> int:
        return self._total_amount

    @property
    def total_share(self) -> int:
        return self._total_share

    @property
    def remainder_amount(self) -> int:
        """Expense amount not covered by the derived amounts"""
        return self._remainder_amount

    @property
    def remainder_share(self) -> int:
        """Percentage still to be assigned; informational only"""
        return self._remainder_share

    def reset(self) -> None:
        for user_id in self._split_shares:
            self._split_shares[user_id] = 0
            self._split_amounts[user_id] = 0
        self._total_amount = 0
        self._total_share = 0
        self._remainder_amount = 0
        self._remainder_share = 0
        self._validate_for_submission()

    def update(
        self, expense_amount: int, user_id: Optional[Hashable] = None, value: Optional[int] = None
    ) -> SharesSplitResult:
        """
        Set a user's share, or recalculate every amount when no user is given.

        Args:
            expense_amount: Current expense amount
            user_id: User whose share is edited
            value: New share, an integer percentage between 0 and 100

        Returns:
            SharesSplitResult with amounts, shares and remainders

        Raises:
            ValidationError: If the share or an amount is out of range
        """
        self._validate_amount(expense_amount, "expense_amount")
        if user_id is not None:
            self._validate_known_user(user_id)
            self._validate_share(value)
            self._update_user_split(expense_amount, user_id, value)
        else:
            self._update_amounts(expense_amount)
        self._calculate_splits(expense_amount)
        self._validate_for_submission()
        return self._prepare_update_response()

    def recalculate(self, expense_amount: int) -> None:
        self._validate_amount(expense_amount, "expense_amount")
        self._update_amounts(expense_amount)
        self._calculate_splits(expense_amount)
        self._validate_for_submission()

    def _prepare_update_response(self) -> SharesSplitResult:
        return SharesSplitResult(
            split_amounts=self.get_split_amounts(),
            split_shares=self.get_split_shares(),
            total_amount=self._total_amount,
            total_share=self._total_share,
            remainder_amount=self._remainder_amount,
            remainder_share=self._remainder_share,
            is_valid=self._is_valid,
        )

    # Inner logic

    def _validate_for_submission(self) -> None:
        self._is_valid = self._remainder_amount == 0

    def _update_user_split(self, expense_amount: int, user_id: Hashable, share: int) -> None:
        other_users_share = self._total_share - self._split_shares[user_id]

        if other_users_share + share == ONE_HUNDRED_PERCENT:
            other_users_amount = self._total_amount - self._split_amounts[user_id]
            amount = expense_amount - other_users_amount
            if amount < 0:
                # Others were rounded up past the expense amount
                self._split_shares[user_id] = share
                self._update_amounts(expense_amount)
                return
        else:
            amount = percent_of(expense_amount, share)

        self._split_amounts[user_id] = amount
        self._split_shares[user_id] = share

    def _update_amounts(self, expense_amount: int) -> None:
        users_with_amounts: List[Hashable] = []
        for user_id, share in self._split_shares.items():
            if share == 0 or expense_amount == 0:
                self._split_amounts[user_id] = 0
                continue
            self._split_amounts[user_id] = percent_of(expense_amount, share)
            users_with_amounts.append(user_id)

        self._correct_rounding_error(expense_amount, users_with_amounts)

    def _correct_rounding_error(self, expense_amount: int, users_with_amounts: List[Hashable]) -> None:
        """
        Nudge randomly chosen users by one unit until the amounts add up.

        Applies only when the shares total exactly 100%.
        """
        total_share = sum_amounts(self._split_shares.values())
        if total_share != ONE_HUNDRED_PERCENT or not users_with_amounts:
            return

        rounding_error = expense_amount - sum_amounts(self._split_amounts.values())
        if rounding_error == 0:
            return

        step = 1 if rounding_error > 0 else -1
        candidates = users_with_amounts
        if step < 0:
            candidates = [u for u in users_with_amounts if self._split_amounts[u] > 0]

        for user_id in self._rng.sample(candidates, abs(rounding_error)):
            self._split_amounts[user_id] += step

    def _calculate_splits(self, expense_amount: int) -> None:
        self._total_amount = sum_amounts(self._split_amounts.values())
        self._total_share = sum_amounts(self._split_shares.values())
        self._remainder_amount = expense_amount - self._total_amount
        self._remainder_share = (
            0 if expense_amount == 0 else ONE_HUNDRED_PERCENT - self._total_share
        )

    @staticmethod
    def _validate_share(value: Any) -> None:
        if not is_non_negative_int(value) or value > ONE_HUNDRED_PERCENT:
            raise ValidationError(
                f"share must be an integer between 0 and {ONE_HUNDRED_PERCENT}. "
                f"Received: {describe(value)}"
            )
