"""Split calculation strategies"""

import random
from typing import Dict, Hashable, Iterable, Optional, Union

from splitt.core.exceptions import InvariantViolation, ValidationError
from splitt.models.enums import SplitType
from splitt.services.split_strategies.base import BaseSplitStrategy
from splitt.services.split_strategies.equal_split import EqualSplitStrategy
from splitt.services.split_strategies.parts_split import PartsSplitStrategy
from splitt.services.split_strategies.shares_split import SharesSplitStrategy


class SplitRegistry:
    """
    One instance of each split strategy and the one currently active.

    The equal split is active after construction and after every reset.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._equally = EqualSplitStrategy(rng)
        self._parts = PartsSplitStrategy(rng)
        self._shares = SharesSplitStrategy(rng)
        self._forms: Dict[SplitType, BaseSplitStrategy] = {
            SplitType.EQUALLY: self._equally,
            SplitType.PARTS: self._parts,
            SplitType.SHARES: self._shares,
        }
        self._active_form: BaseSplitStrategy = self._equally

    def init(self, user_ids: Iterable[Hashable]) -> None:
        """Register the group roster with every strategy"""
        user_ids = list(user_ids)
        for form in self._forms.values():
            form.init(user_ids)

    def reset(self) -> None:
        """Reset every strategy and make the equal split active"""
        for form in self._forms.values():
            form.reset()
        self._active_form = self._equally

    def get_form(self, split_type: Union[SplitType, str]) -> BaseSplitStrategy:
        """
        Get the strategy registered for a split type.

        Raises:
            ValidationError: If the split type is invalid
        """
        try:
            split_type = SplitType(split_type)
        except ValueError:
            valid_types = ", ".join(t.value for t in SplitType)
            raise ValidationError(
                f"Invalid split type: {split_type!r}. Expected one of: {valid_types}"
            ) from None
        return self._forms[split_type]

    @property
    def active_form(self) -> BaseSplitStrategy:
        return self._active_form

    @active_form.setter
    def active_form(self, form: BaseSplitStrategy) -> None:
        if not any(form is registered for registered in self._forms.values()):
            raise InvariantViolation("Invalid form: the provided split form is not registered")
        self._active_form = form

    @property
    def equally(self) -> EqualSplitStrategy:
        return self._equally

    @property
    def parts(self) -> PartsSplitStrategy:
        return self._parts

    @property
    def shares(self) -> SharesSplitStrategy:
        return self._shares


__all__ = [
    "BaseSplitStrategy",
    "EqualSplitStrategy",
    "PartsSplitStrategy",
    "SharesSplitStrategy",
    "SplitRegistry",
]
