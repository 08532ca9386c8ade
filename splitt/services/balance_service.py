"""Balance calculation logic"""

import logging
from typing import Any, Dict, Hashable

from splitt.models.enums import BalanceStatusType
from splitt.models.expense import ExpenseDraft
from splitt.models.paid_by import PayerEntry
from splitt.schemas.balance import ExpenseBalance

logger = logging.getLogger(__name__)


class BalanceService:
    """Service for the current user's balance in the expense being edited"""

    @staticmethod
    def get_balance(draft: ExpenseDraft, current_user_id: Hashable) -> ExpenseBalance:
        """
        Get the status for the balance note of the expense form.

        Checks run in a fixed order and the first failing one decides the
        status: amount below minimum, amount zero, Paid By invalid, active
        split invalid. Otherwise the balance is what the user paid minus
        what the user owes.

        Args:
            draft: Expense draft
            current_user_id: Current user's ID

        Returns:
            ExpenseBalance with a status, and an amount when resolved
        """
        if draft.is_amount_below_min:
            return ExpenseBalance(status=BalanceStatusType.AMOUNT_BELOW_MIN)

        if draft.amount == 0:
            return ExpenseBalance(status=BalanceStatusType.AMOUNT_ZERO)

        if not draft.paid_by.is_valid:
            return ExpenseBalance(status=BalanceStatusType.CHECK_PAID_BY)

        active_split = draft.get_active_split()
        if not active_split.is_valid:
            return ExpenseBalance(status=BalanceStatusType.CHECK_SPLIT)

        paid = BalanceService._get_user_paid_amount(draft.paid_by.entries, current_user_id)
        owed = BalanceService._get_user_split_amount(
            active_split.get_split_amounts(), current_user_id
        )
        logger.debug("User %s paid %s and owes %s", current_user_id, paid, owed)
        return ExpenseBalance.resolved(paid - owed)

    @staticmethod
    def _get_user_paid_amount(entries: Dict[int, PayerEntry], user_id: Hashable) -> int:
        """Amount of the user's Paid By entry, 0 if the user has none"""
        user_entry = next(
            (entry for entry in entries.values() if entry.user_id == user_id), None
        )
        return user_entry.amount if user_entry else 0

    @staticmethod
    def _get_user_split_amount(split_amounts: Dict[Any, int], user_id: Hashable) -> int:
        return split_amounts.get(user_id, 0)
