"""Expense draft: the state behind the add/edit expense form"""
import datetime
import random
from typing import Any, Hashable, Optional

from splitt.config import Settings, get_settings
from splitt.core.exceptions import ValidationError
from splitt.models.enums import ExpenseFormType, HiddenFormType
from splitt.models.paid_by import EntryIdAllocator, PayerLedger
from splitt.services.split_strategies import BaseSplitStrategy, SplitRegistry
from splitt.utils.validators import (describe, is_non_empty_str_or_none,
                                     is_non_negative_int, is_positive_int)


class ExpenseDraft:
    """
    Aggregate of everything entered for one expense.

    Setters reject out-of-domain values with ValidationError before any
    state changes. ``is_valid`` is only refreshed by
    :meth:`validate_for_submission`.
    """

    def __init__(
        self,
        form_type: ExpenseFormType = ExpenseFormType.ADD,
        settings: Optional[Settings] = None,
        id_allocator: Optional[EntryIdAllocator] = None,
        rng: Optional[random.Random] = None,
    ):
        self._settings = settings or get_settings()
        self.form_type = form_type
        self._title: Optional[str] = None
        self._amount = 0
        self._is_amount_below_min = False
        self._date: Optional[datetime.date] = None
        self._emoji: Optional[str] = None
        self._note: Optional[str] = None
        self._active_hidden_form: Optional[HiddenFormType] = None
        self._paid_by = PayerLedger(id_allocator)
        self._split = SplitRegistry(rng)
        self._is_valid = False

    def __repr__(self) -> str:
        return (
            f"<ExpenseDraft(form_type={self._form_type.value}, title={self._title}, "
            f"amount={self._amount})>"
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def form_type(self) -> ExpenseFormType:
        return self._form_type

    @form_type.setter
    def form_type(self, value: Any) -> None:
        try:
            self._form_type = ExpenseFormType(value)
        except ValueError:
            valid_types = ", ".join(t.value for t in ExpenseFormType)
            raise ValidationError(
                f"Invalid expense form type: {describe(value)}. Expected one of: {valid_types}"
            ) from None

    @property
    def active_hidden_form(self) -> Optional[HiddenFormType]:
        return self._active_hidden_form

    @active_hidden_form.setter
    def active_hidden_form(self, value: Any) -> None:
        if value is None:
            self._active_hidden_form = None
            return
        try:
            self._active_hidden_form = HiddenFormType(value)
        except ValueError:
            valid_types = ", ".join(t.value for t in HiddenFormType)
            raise ValidationError(
                f"Invalid form type: {describe(value)}. Expected one of: {valid_types}"
            ) from None

    @property
    def title(self) -> Optional[str]:
        return self._title

    @title.setter
    def title(self, value: Optional[str]) -> None:
        self._validate_string(value, "title", self._settings.title_limit)
        self._title = value

    @property
    def amount(self) -> int:
        return self._amount

    @amount.setter
    def amount(self, value: int) -> None:
        if not is_non_negative_int(value):
            raise ValidationError(
                f"Invalid amount: expected a whole positive number or zero. Received: {describe(value)}"
            )
        self._amount = value

    @property
    def is_amount_below_min(self) -> bool:
        """Whether the entered amount was non-zero but below the minimum"""
        return self._is_amount_below_min

    @is_amount_below_min.setter
    def is_amount_below_min(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise ValidationError(
                f"Invalid flag for 'is_amount_below_min'. Expected a boolean. Received: {describe(value)}"
            )
        self._is_amount_below_min = value

    @property
    def date(self) -> Optional[datetime.date]:
        return self._date

    @date.setter
    def date(self, value: datetime.date) -> None:
        if not isinstance(value, datetime.date):
            raise ValidationError(f"Invalid date: expected a date value. Received: {describe(value)}")
        self._date = value

    @property
    def emoji(self) -> Optional[str]:
        return self._emoji

    @emoji.setter
    def emoji(self, value: Optional[str]) -> None:
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"Emoji must be a string or None. Received: {describe(value)}")
        self._emoji = value

    @property
    def note(self) -> Optional[str]:
        return self._note

    @note.setter
    def note(self, value: Optional[str]) -> None:
        self._validate_string(value, "note", self._settings.note_limit)
        self._note = value

    @property
    def paid_by(self) -> PayerLedger:
        return self._paid_by

    @property
    def split(self) -> SplitRegistry:
        return self._split

    def get_active_split(self) -> BaseSplitStrategy:
        return self._split.active_form

    @property
    def is_valid(self) -> bool:
        """Submit-readiness as of the last validate_for_submission() call"""
        return self._is_valid

    # Lifecycle

    def init(self, current_user_id: Hashable, member_ids) -> None:
        """Create the default payer entry and register the group roster"""
        self._paid_by.init(current_user_id)
        self._split.init(member_ids)

    def reset(self, current_user_id: Optional[Hashable] = None) -> None:
        """
        Clear the form for the next expense.

        The Paid By state is rebuilt around ``current_user_id`` when given,
        otherwise its entries are kept and its totals follow the zero amount.
        """
        self._title = None
        self._amount = 0
        self._is_amount_below_min = False
        self._date = None
        self._emoji = self._settings.default_emoji
        self._note = None
        self._active_hidden_form = None
        if current_user_id is not None:
            self._paid_by.reset(current_user_id)
        else:
            self._paid_by.update_after_expense_amount_change(0)
        self._split.reset()
        self._is_valid = False

    # Validation

    def validate_for_submission(self) -> bool:
        """Recompute and return ``is_valid``"""
        self._is_valid = (
            self._title is not None
            and is_positive_int(self._amount)
            and self._paid_by.is_valid
            and self._split.active_form.is_valid
        )
        return self._is_valid

    @staticmethod
    def _validate_string(value: Any, field: str, limit: int) -> None:
        if not is_non_empty_str_or_none(value):
            raise ValidationError(
                f"Invalid {field}. Expected a non-empty string or None. Received: {describe(value)}"
            )
        if value is not None and len(value) > limit:
            raise ValidationError(
                f"Invalid {field} length. Expected a maximum of {limit} characters, "
                f"received {len(value)}",
                details={"field": field, "limit": limit},
            )
