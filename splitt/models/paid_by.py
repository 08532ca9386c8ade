"""Paid By state: payer entries, their recycling pool and the ledger totals"""
import itertools
import logging
from typing import Any, Dict, FrozenSet, Hashable, Optional

from splitt.core.exceptions import (DuplicateUserError, EntryNotFoundError,
                                    InvariantViolation, ValidationError)
from splitt.schemas.paid_by import (AddEntryResult, ExpenseAmountChangeResult,
                                    RemoveEntryResult, UpdateAmountResult,
                                    UpdateUserResult)
from splitt.utils.validators import describe, is_non_negative_int, is_positive_int

logger = logging.getLogger(__name__)


class EntryIdAllocator:
    """Issues unique, monotonically increasing Paid By entry IDs"""

    def __init__(self, start: int = 1):
        if not is_positive_int(start):
            raise ValidationError(f"start must be a positive integer. Received: {describe(start)}")
        self._counter = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)


class PayerEntry:
    """One payer's contribution to the expense"""

    def __init__(self, entry_id: int):
        if not is_positive_int(entry_id):
            raise ValidationError(
                f"entry_id must be a positive integer. Received: {describe(entry_id)}"
            )
        self._entry_id = entry_id
        self._user_id: Optional[Hashable] = None
        self._amount = 0
        self._is_default = False

    def __repr__(self) -> str:
        return (
            f"<PayerEntry(entry_id={self._entry_id}, user_id={self._user_id}, "
            f"amount={self._amount}, is_default={self._is_default})>"
        )

    @property
    def entry_id(self) -> int:
        return self._entry_id

    @property
    def user_id(self) -> Optional[Hashable]:
        return self._user_id

    @user_id.setter
    def user_id(self, value: Optional[Hashable]) -> None:
        self._user_id = value

    @property
    def amount(self) -> int:
        return self._amount

    @amount.setter
    def amount(self, value: int) -> None:
        if not is_non_negative_int(value):
            raise ValidationError(
                f"amount must be a non-negative integer. Received: {describe(value)}"
            )
        self._amount = value

    @property
    def is_default(self) -> bool:
        return self._is_default

    @is_default.setter
    def is_default(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise ValidationError(f"is_default must be a boolean. Received: {describe(value)}")
        self._is_default = value

    def clear(self) -> None:
        """Unassign the user and zero the amount"""
        self._user_id = None
        self._amount = 0


class PayerLedger:
    """
    Active Paid By entries plus a pool of cleared entries kept for reuse.

    The ledger keeps ``remainder == expense_amount - total`` after every
    mutation. While a single entry is active it is the whole payment, so
    ``total`` is pinned to the expense amount. A user appears in at most one
    active entry.

    Callers must serialize mutations; the ledger does no locking.
    """

    def __init__(self, id_allocator: Optional[EntryIdAllocator] = None):
        self._id_allocator = id_allocator or EntryIdAllocator()
        self._entries: Dict[int, PayerEntry] = {}
        self._pool: Dict[int, PayerEntry] = {}
        self._default_entry_id: Optional[int] = None
        self._users_in_entries: set = set()
        self._payers_in_entries: set = set()
        self._total = 0
        self._remainder = 0
        self._is_valid = False
        self._is_initialized = False

    # Initialization

    def init(self, current_user_id: Hashable) -> None:
        """
        Create the default entry for the current user.

        Args:
            current_user_id: ID of the user the default entry belongs to

        Raises:
            InvariantViolation: If the ledger is already initialized
        """
        if self._is_initialized:
            raise InvariantViolation("Paid By state is already initialized")
        self._load_default_entry(current_user_id)
        self._is_initialized = True

    def reset(self, current_user_id: Hashable) -> None:
        """Pool every non-default entry and reassign the default entry"""
        self._validate_user_id(current_user_id)
        for entry_id in [e for e in self._entries if e != self._default_entry_id]:
            self._pool_entry(self._entries.pop(entry_id))
        self._users_in_entries.clear()
        self._payers_in_entries.clear()
        self._total = 0
        self._remainder = 0

        if self._default_entry_id is None:
            self._load_default_entry(current_user_id)
            self._is_initialized = True
        else:
            default_entry = self.get_default_entry()
            default_entry.clear()
            default_entry.user_id = current_user_id
            self._users_in_entries.add(current_user_id)
        self._validate()
        logger.debug("Paid By state reset for user %s", current_user_id)

    def _load_default_entry(self, current_user_id: Hashable) -> None:
        self._validate_user_id(current_user_id)
        default_entry = PayerEntry(self._id_allocator.next_id())
        default_entry.user_id = current_user_id
        default_entry.is_default = True
        self._entries[default_entry.entry_id] = default_entry
        self._default_entry_id = default_entry.entry_id
        self._users_in_entries.add(current_user_id)
        self._validate()

    # Getters

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    @property
    def entries(self) -> Dict[int, PayerEntry]:
        """Active entries by ID, in insertion order (a copy)"""
        return dict(self._entries)

    @property
    def pool(self) -> Dict[int, PayerEntry]:
        """Cleared entries waiting for reuse (a copy)"""
        return dict(self._pool)

    @property
    def default_entry_id(self) -> Optional[int]:
        return self._default_entry_id

    @property
    def users_in_entries(self) -> FrozenSet[Any]:
        return frozenset(self._users_in_entries)

    @property
    def payers_in_entries(self) -> FrozenSet[Any]:
        """Users whose entry has an amount greater than zero"""
        return frozenset(self._payers_in_entries)

    @property
    def total(self) -> int:
        return self._total

    @property
    def remainder(self) -> int:
        return self._remainder

    def has_single_entry(self) -> bool:
        return len(self._entries) == 1

    def get_default_entry(self) -> Optional[PayerEntry]:
        if self._default_entry_id is None:
            return None
        return self._entries.get(self._default_entry_id)

    def get_entry(self, entry_id: int) -> PayerEntry:
        """
        Get an active entry.

        Raises:
            EntryNotFoundError: If no active entry has this ID
        """
        entry = self._entries.get(entry_id)
        if entry is None:
            raise EntryNotFoundError(f"No entry found for ID {entry_id}")
        return entry

    # Public methods

    def add_entry(self) -> AddEntryResult:
        """
        Add an entry, reusing a pooled one when available.

        Adding the second entry affects the default entry: it stops being
        implicitly the whole payment.
        """
        is_new_entry = not self._pool
        is_default_entry_affected = self.has_single_entry()
        if is_new_entry:
            entry = PayerEntry(self._id_allocator.next_id())
        else:
            entry = self._pool.pop(next(iter(self._pool)))
        self._entries[entry.entry_id] = entry
        # total + remainder is always the expense amount
        self._calculate(self._total + self._remainder)
        self._validate()
        logger.debug("Added Paid By entry %s (new=%s)", entry.entry_id, is_new_entry)

        return AddEntryResult(
            entry_id=entry.entry_id,
            is_new_entry=is_new_entry,
            entries_count=len(self._entries),
            is_default_entry_affected=is_default_entry_affected,
            default_entry_id=self._default_entry_id if is_default_entry_affected else None,
        )

    def remove_entry(self, entry_id: int, expense_amount: int) -> RemoveEntryResult:
        """
        Move an entry to the pool.

        Unknown, default and sole entries are not removed and the state is
        left untouched. If a single entry remains, it takes over the whole
        expense amount.

        Args:
            entry_id: ID of the entry to remove
            expense_amount: Current expense amount

        Returns:
            RemoveEntryResult with ``is_removed`` set accordingly
        """
        self._validate_amount(expense_amount, "expense_amount")
        entry = self._entries.get(entry_id)
        if not self._is_entry_removable(entry, entry_id):
            return RemoveEntryResult(
                is_removed=False,
                total=self._total,
                remainder=self._remainder,
                is_valid=self._is_valid,
            )

        user_id = entry.user_id
        is_recalculated = entry.amount > 0

        del self._entries[entry_id]
        self._pool_entry(entry)
        if user_id is not None:
            self._delete_user(user_id)

        is_default_entry_affected = self.has_single_entry()
        if is_default_entry_affected:
            self._update_default_entry_amount(expense_amount)

        self._calculate(expense_amount)
        self._validate()
        logger.debug("Removed Paid By entry %s", entry_id)

        return RemoveEntryResult(
            is_removed=True,
            is_default_entry_affected=is_default_entry_affected,
            is_recalculated=is_recalculated,
            removed_user_id=user_id,
            default_entry_id=self._default_entry_id if is_default_entry_affected else None,
            total=self._total,
            remainder=self._remainder,
            is_valid=self._is_valid,
        )

    def update_user(self, entry_id: int, user_id: Hashable) -> UpdateUserResult:
        """
        Assign a user to an entry.

        Raises:
            ValidationError: If user_id is None
            EntryNotFoundError: If the entry does not exist
            DuplicateUserError: If the user already owns an active entry
        """
        self._validate_user_id(user_id)
        entry = self.get_entry(entry_id)
        if user_id in self._users_in_entries:
            raise DuplicateUserError(
                f"Unable to add user. User ID {user_id} already present",
                details={"entry_id": entry_id, "user_id": user_id},
            )

        previous_user_id = entry.user_id
        if previous_user_id is not None:
            self._delete_user(previous_user_id)
        entry.user_id = user_id
        self._add_user(user_id, entry.amount)
        self._validate()

        return UpdateUserResult(
            added_user_id=user_id,
            removed_user_id=previous_user_id,
            is_valid=self._is_valid,
        )

    def update_amount(self, entry_id: int, amount: int, expense_amount: int) -> UpdateAmountResult:
        """
        Set the amount of an entry and recalculate the totals.

        Raises:
            ValidationError: If an amount is not a non-negative integer
            EntryNotFoundError: If the entry does not exist
        """
        self._validate_amount(amount, "amount")
        self._validate_amount(expense_amount, "expense_amount")
        entry = self.get_entry(entry_id)

        entry.amount = amount
        self._sync_payer(entry)
        self._calculate(expense_amount)
        self._validate()

        return UpdateAmountResult(
            amount=amount,
            total=self._total,
            remainder=self._remainder,
            is_valid=self._is_valid,
        )

    def update_after_expense_amount_change(self, expense_amount: int) -> ExpenseAmountChangeResult:
        """
        Bring the ledger in line with a new expense amount.

        A sole entry is updated to the new amount automatically; with several
        entries only the totals change.
        """
        self._validate_amount(expense_amount, "expense_amount")
        has_single_entry = self.has_single_entry()
        if has_single_entry:
            self._update_default_entry_amount(expense_amount)

        self._calculate(expense_amount)
        self._validate()
        default_entry = self.get_default_entry()

        return ExpenseAmountChangeResult(
            has_single_entry=has_single_entry,
            total=self._total,
            remainder=self._remainder,
            is_valid=self._is_valid,
            default_entry_amount=default_entry.amount if default_entry else 0,
        )

    # Inner logic

    def _is_entry_removable(self, entry: Optional[PayerEntry], entry_id: int) -> bool:
        if entry is None:
            logger.warning("No active entry found for ID %s", entry_id)
            return False
        if entry.is_default or self.has_single_entry():
            logger.warning("Unable to remove entry %s: default or sole entry", entry_id)
            return False
        return True

    def _pool_entry(self, entry: PayerEntry) -> None:
        entry.clear()
        self._pool[entry.entry_id] = entry

    def _update_default_entry_amount(self, amount: int) -> None:
        default_entry = self.get_default_entry()
        default_entry.amount = amount
        self._sync_payer(default_entry)

    def _calculate(self, expense_amount: int) -> None:
        if self.has_single_entry():
            self._total = expense_amount
            self._remainder = 0
            return

        self._total = sum(entry.amount for entry in self._entries.values())
        self._remainder = expense_amount - self._total

    def _add_user(self, user_id: Hashable, amount: int) -> None:
        self._users_in_entries.add(user_id)
        if amount > 0:
            self._payers_in_entries.add(user_id)

    def _delete_user(self, user_id: Hashable) -> None:
        self._users_in_entries.discard(user_id)
        self._payers_in_entries.discard(user_id)

    def _sync_payer(self, entry: PayerEntry) -> None:
        """A user is a payer iff their entry amount is positive"""
        if entry.user_id is None:
            return
        if entry.amount > 0:
            self._payers_in_entries.add(entry.user_id)
        else:
            self._payers_in_entries.discard(entry.user_id)

    # Validation

    def _validate(self) -> None:
        if self._remainder != 0 or not self._payers_in_entries:
            self._is_valid = False
            return

        self._is_valid = not any(
            entry.amount > 0 and entry.user_id is None for entry in self._entries.values()
        )

    @staticmethod
    def _validate_amount(value: Any, field: str) -> None:
        if not is_non_negative_int(value):
            raise ValidationError(
                f"{field} must be a non-negative integer. Received: {describe(value)}"
            )

    @staticmethod
    def _validate_user_id(user_id: Any) -> None:
        if user_id is None:
            raise ValidationError("user_id is required")
