"""Paid By presentation logic"""

from typing import Hashable

from splitt.models.enums import PayerType
from splitt.models.paid_by import PayerLedger
from splitt.schemas.paid_by import PayerSummary


class PaidByService:
    """Service summarizing who paid an expense"""

    @staticmethod
    def get_payer_summary(ledger: PayerLedger, current_user_id: Hashable) -> PayerSummary:
        """
        Classify the payers for the Paid By button.

        Args:
            ledger: Paid By state
            current_user_id: Current user's ID

        Returns:
            PayerSummary: EMPTY with no payers, COPAYMENT with several,
            otherwise CURRENT_USER or OTHER_USER with the payer's ID
        """
        payers = ledger.payers_in_entries
        if not payers:
            return PayerSummary(type=PayerType.EMPTY)
        if len(payers) > 1:
            return PayerSummary(type=PayerType.COPAYMENT)

        (payer_id,) = payers
        if payer_id == current_user_id:
            return PayerSummary(type=PayerType.CURRENT_USER, payer_id=payer_id)
        return PayerSummary(type=PayerType.OTHER_USER, payer_id=payer_id)
