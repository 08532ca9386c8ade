"""Equal split strategy"""

from typing import Hashable, Optional, Set

from splitt.models.enums import SplitType
from splitt.schemas.split import EqualSplitResult
from splitt.services.split_strategies.base import BaseSplitStrategy


class EqualSplitStrategy(BaseSplitStrategy):
    """
    Strategy for splitting expense equally among selected users.

    When the amount does not divide evenly, the leftover units go one each
    to randomly chosen selected users. Which users get them is
    non-deterministic; the sum and the set of values are not.
    """

    split_type = SplitType.EQUALLY

    def __init__(self, rng=None):
        super().__init__(rng)
        self._selected_users: Set[Hashable] = set()

    def _register_user(self, user_id: Hashable) -> None:
        super()._register_user(user_id)
        self._selected_users.add(user_id)

    @property
    def selected_users(self) -> frozenset:
        return frozenset(self._selected_users)

    def reset(self) -> None:
        """Select every user again and zero the amounts"""
        for user_id in self._split_amounts:
            self._selected_users.add(user_id)
            self._split_amounts[user_id] = 0
        self._validate_for_submission()

    def update(
        self, expense_amount: int, user_id: Optional[Hashable] = None, value: Optional[int] = None
    ) -> EqualSplitResult:
        """
        Toggle a user's selection and redistribute the amount.

        Args:
            expense_amount: Current expense amount
            user_id: User to select or deselect, or None to only recalculate
            value: Unused, equal splits take no per-user value

        Returns:
            EqualSplitResult with the new amounts and selection
        """
        self._validate_amount(expense_amount, "expense_amount")
        if user_id is not None:
            self._validate_known_user(user_id)
            self._toggle_user(user_id)
        self._calculate_splits(expense_amount)
        self._validate_for_submission()
        return self._prepare_update_response()

    def recalculate(self, expense_amount: int) -> None:
        self._validate_amount(expense_amount, "expense_amount")
        self._calculate_splits(expense_amount)
        self._validate_for_submission()

    def _prepare_update_response(self) -> EqualSplitResult:
        return EqualSplitResult(
            split_amounts=self.get_split_amounts(),
            selected_users=set(self._selected_users),
            is_valid=self._is_valid,
        )

    def _validate_for_submission(self) -> None:
        self._is_valid = len(self._selected_users) > 0

    def _toggle_user(self, user_id: Hashable) -> None:
        if user_id in self._selected_users:
            self._selected_users.remove(user_id)
            self._split_amounts[user_id] = 0
        else:
            self._selected_users.add(user_id)

    def _calculate_splits(self, expense_amount: int) -> None:
        selected_count = len(self._selected_users)

        if selected_count == 0:
            for user_id in self._split_amounts:
                self._split_amounts[user_id] = 0
            return

        if selected_count == 1:
            (selected_user_id,) = self._selected_users
            self._split_amounts[selected_user_id] = expense_amount
            return

        base_amount, extra = divmod(expense_amount, selected_count)
        users_with_higher_amounts = self._select_users_with_higher_amounts(extra)
        for user_id in self._selected_users:
            bonus = 1 if user_id in users_with_higher_amounts else 0
            self._split_amounts[user_id] = base_amount + bonus

    def _select_users_with_higher_amounts(self, count: int) -> Set[Hashable]:
        """Randomly pick the users that receive one extra unit"""
        if count == 0:
            return set()
        # Sort by repr so the draw depends only on the rng state, not on set order
        candidates = sorted(self._selected_users, key=repr)
        return set(self._rng.sample(candidates, count))
