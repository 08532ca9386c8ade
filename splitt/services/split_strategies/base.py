"""Base strategy interface"""

import random
from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, Iterable, Optional

from pydantic import BaseModel

from splitt.core.exceptions import InvariantViolation, ValidationError
from splitt.models.enums import SplitType
from splitt.utils.validators import describe, is_non_negative_int


class BaseSplitStrategy(ABC):
    """
    Base class for split strategies.

    Each strategy owns a ``user_id -> amount`` map for the group roster
    passed to :meth:`init`, and its own validity rule.
    """

    split_type: SplitType

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._split_amounts: Dict[Any, int] = {}
        self._is_valid = False
        self._is_initialized = False

    @property
    def is_valid(self) -> bool:
        """Whether the split is ready for submission"""
        return self._is_valid

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    def get_split_amounts(self) -> Dict[Any, int]:
        """Split amounts by user ID (a copy)"""
        return dict(self._split_amounts)

    def init(self, user_ids: Iterable[Hashable]) -> None:
        """
        Register the group roster with zero amounts.

        Raises:
            InvariantViolation: If the strategy is already initialized
        """
        if self._is_initialized:
            raise InvariantViolation(f"{self.split_type.value} split is already initialized")
        for user_id in user_ids:
            self._register_user(user_id)
        self._validate_for_submission()
        self._is_initialized = True

    def _register_user(self, user_id: Hashable) -> None:
        self._split_amounts[user_id] = 0

    @abstractmethod
    def reset(self) -> None:
        """Restore the initial state for the registered roster"""

    @abstractmethod
    def update(
        self, expense_amount: int, user_id: Optional[Hashable] = None, value: Optional[int] = None
    ) -> BaseModel:
        """
        Apply a user edit (when user_id is given) and recalculate.

        Args:
            expense_amount: Current expense amount
            user_id: User whose split is edited, or None to only recalculate
            value: New value for the user, meaning depends on the strategy

        Returns:
            Strategy-specific update result
        """

    @abstractmethod
    def recalculate(self, expense_amount: int) -> None:
        """Recalculate amounts for a new expense amount"""

    @abstractmethod
    def _validate_for_submission(self) -> None:
        pass

    # Validation

    def _validate_known_user(self, user_id: Hashable) -> None:
        if user_id not in self._split_amounts:
            raise ValidationError(
                f"User ID {user_id} is not a member of the split",
                details={"split_type": self.split_type.value},
            )

    @staticmethod
    def _validate_amount(value: Any, field: str) -> None:
        if not is_non_negative_int(value):
            raise ValidationError(
                f"{field} must be a non-negative integer. Received: {describe(value)}"
            )
