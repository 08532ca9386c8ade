"""Expense form business logic"""
import datetime
import logging
import random
from typing import Hashable, Iterable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from splitt.config import Settings, get_settings
from splitt.core.exceptions import ValidationError
from splitt.models.enums import ExpenseFormType, HiddenFormType, SplitType
from splitt.models.expense import ExpenseDraft
from splitt.models.paid_by import EntryIdAllocator
from splitt.schemas.expense import ExpenseSubmission
from splitt.schemas.paid_by import (AddEntryResult, ExpenseAmountChangeResult,
                                    RemoveEntryResult, UpdateAmountResult,
                                    UpdateUserResult)
from splitt.services.split_strategies import SharesSplitStrategy
from splitt.utils.amount_utils import is_below_min

logger = logging.getLogger(__name__)


class ExpenseService:
    """
    Service for expense form operations.

    Every update revalidates the draft for submission, so ``draft.is_valid``
    is current when the call returns.
    """

    @staticmethod
    def create_draft(
        current_user_id: Hashable,
        member_ids: Iterable[Hashable],
        form_type: ExpenseFormType = ExpenseFormType.ADD,
        settings: Optional[Settings] = None,
        id_allocator: Optional[EntryIdAllocator] = None,
        rng: Optional[random.Random] = None,
    ) -> ExpenseDraft:
        """
        Create an initialized draft for a group.

        Args:
            current_user_id: User owning the default Paid By entry
            member_ids: Group roster
            form_type: ADD or EDIT
            settings: Settings, defaults to the cached instance
            id_allocator: Paid By entry ID source shared across drafts
            rng: Random source for rounding tie-breaks

        Returns:
            Draft with the default payer entry and every member selected
            for the equal split
        """
        settings = settings or get_settings()
        member_ids = list(member_ids)
        if current_user_id not in member_ids:
            raise ValidationError(f"Current user {current_user_id} is not a group member")

        draft = ExpenseDraft(form_type, settings=settings, id_allocator=id_allocator, rng=rng)
        draft.emoji = settings.default_emoji
        draft.init(current_user_id, member_ids)
        logger.debug("Created %s expense draft for %d members", form_type.value, len(member_ids))
        return draft

    # Main form

    @staticmethod
    def update_title(draft: ExpenseDraft, title: Optional[str]) -> bool:
        draft.title = title
        return draft.validate_for_submission()

    @staticmethod
    def update_note(draft: ExpenseDraft, note: Optional[str]) -> None:
        draft.note = note

    @staticmethod
    def update_emoji(draft: ExpenseDraft, emoji: Optional[str]) -> None:
        draft.emoji = emoji

    @staticmethod
    def update_date(draft: ExpenseDraft, value: datetime.date) -> None:
        draft.date = value

    @staticmethod
    def update_amount(
        draft: ExpenseDraft, amount: int, is_below_min_amount: Optional[bool] = None
    ) -> ExpenseAmountChangeResult:
        """
        Set the expense amount and propagate it to Paid By and the active split.

        Args:
            draft: Expense draft
            amount: New amount in minor currency units
            is_below_min_amount: Below-minimum flag from input parsing,
                computed from settings when omitted

        Returns:
            The Paid By state after the change
        """
        if not isinstance(is_below_min_amount, (bool, type(None))):
            raise ValidationError("is_below_min_amount must be a boolean")
        draft.amount = amount
        if is_below_min_amount is None:
            is_below_min_amount = is_below_min(amount, draft.settings)
        draft.is_amount_below_min = is_below_min_amount

        paid_by_result = draft.paid_by.update_after_expense_amount_change(amount)
        draft.get_active_split().update(expense_amount=amount)
        draft.validate_for_submission()
        logger.debug("Expense amount updated to %s", amount)
        return paid_by_result

    @staticmethod
    def set_hidden_form(draft: ExpenseDraft, form: Optional[HiddenFormType]) -> None:
        draft.active_hidden_form = form

    # Paid By

    @staticmethod
    def add_payer_entry(draft: ExpenseDraft) -> AddEntryResult:
        return draft.paid_by.add_entry()

    @staticmethod
    def remove_payer_entry(draft: ExpenseDraft, entry_id: int) -> RemoveEntryResult:
        result = draft.paid_by.remove_entry(entry_id, draft.amount)
        if result.is_removed:
            draft.validate_for_submission()
        return result

    @staticmethod
    def update_payer(draft: ExpenseDraft, entry_id: int, user_id: Hashable) -> UpdateUserResult:
        result = draft.paid_by.update_user(entry_id, user_id)
        draft.validate_for_submission()
        return result

    @staticmethod
    def update_payer_amount(draft: ExpenseDraft, entry_id: int, amount: int) -> UpdateAmountResult:
        result = draft.paid_by.update_amount(entry_id, amount, draft.amount)
        draft.validate_for_submission()
        return result

    # Split

    @staticmethod
    def update_split_type(draft: ExpenseDraft, split_type: Union[SplitType, str]) -> bool:
        """
        Activate another split strategy.

        The target strategy is recalculated for the current amount before it
        becomes active.

        Returns:
            False if the strategy was already active, True otherwise
        """
        split_form = draft.split.get_form(split_type)
        if split_form is draft.get_active_split():
            return False

        split_form.recalculate(draft.amount)
        draft.split.active_form = split_form
        draft.validate_for_submission()
        logger.debug("Split type changed to %s", split_form.split_type.value)
        return True

    @staticmethod
    def update_split(draft: ExpenseDraft, user_id: Hashable, value: Optional[int] = None):
        """
        Apply a split edit for a user in the active strategy.

        ``value`` is ignored by the equal split (the user is toggled), is an
        amount for the parts split and a percentage for the shares split.
        """
        result = draft.get_active_split().update(
            expense_amount=draft.amount, user_id=user_id, value=value
        )
        draft.validate_for_submission()
        return result

    # Reset and submission

    @staticmethod
    def reset_draft(draft: ExpenseDraft, current_user_id: Optional[Hashable] = None) -> None:
        """Reset the draft; ADD drafts need the current user for the default payer"""
        if draft.form_type == ExpenseFormType.ADD and current_user_id is None:
            raise ValidationError("current_user_id is required to reset an ADD expense form")
        draft.reset(current_user_id)

    @staticmethod
    def prepare_submission(draft: ExpenseDraft) -> ExpenseSubmission:
        """
        Build the submission snapshot of a draft.

        Raises:
            ValidationError: If the draft is not ready for submission
        """
        if not draft.validate_for_submission():
            raise ValidationError(
                "Expense is not ready for submission",
                details={
                    "title": draft.title is not None,
                    "amount": draft.amount > 0,
                    "paid_by": draft.paid_by.is_valid,
                    "split": draft.get_active_split().is_valid,
                },
            )

        ledger = draft.paid_by
        if ledger.has_single_entry():
            paid_by = {ledger.get_default_entry().user_id: draft.amount}
        else:
            paid_by = {
                entry.user_id: entry.amount
                for entry in ledger.entries.values()
                if entry.amount > 0
            }

        active_split = draft.get_active_split()
        split_shares = None
        if isinstance(active_split, SharesSplitStrategy):
            split_shares = active_split.get_split_shares()

        try:
            return ExpenseSubmission(
                form_type=draft.form_type,
                title=draft.title,
                amount=draft.amount,
                expense_date=draft.date,
                emoji=draft.emoji,
                note=draft.note,
                split_type=active_split.split_type,
                paid_by=paid_by,
                split_amounts=active_split.get_split_amounts(),
                split_shares=split_shares,
            )
        except PydanticValidationError as e:
            raise ValidationError("Invalid expense submission", details=e.errors()) from e
