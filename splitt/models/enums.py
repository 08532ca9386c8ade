"""Enumerations shared by the expense state and its services"""
import enum


class SplitType(str, enum.Enum):
    """Enum for split types"""
    EQUALLY = "EQUALLY"
    PARTS = "PARTS"
    SHARES = "SHARES"


class ExpenseFormType(str, enum.Enum):
    """Whether the draft creates a new expense or edits an existing one"""
    ADD = "ADD"
    EDIT = "EDIT"


class HiddenFormType(str, enum.Enum):
    """Auxiliary sub-forms that can be opened over the main expense form"""
    PAID_BY = "PAID_BY"
    SPLIT = "SPLIT"
    NOTE = "NOTE"
    EMOJI = "EMOJI"
    DATE = "DATE"


class PayerType(str, enum.Enum):
    """Who covered the expense, as shown on the Paid By button"""
    EMPTY = "EMPTY"
    CURRENT_USER = "CURRENT_USER"
    OTHER_USER = "OTHER_USER"
    COPAYMENT = "COPAYMENT"


class BalanceStatusType(str, enum.Enum):
    """Status of the current user's balance note"""
    AMOUNT_BELOW_MIN = "AMOUNT_BELOW_MIN"
    AMOUNT_ZERO = "AMOUNT_ZERO"
    CHECK_PAID_BY = "CHECK_PAID_BY"
    CHECK_SPLIT = "CHECK_SPLIT"
    RESOLVED = "RESOLVED"
