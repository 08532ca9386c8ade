"""Test the expense draft aggregate"""

import datetime

import pytest

from splitt.config import Settings
from splitt.core.exceptions import ValidationError
from splitt.models.enums import ExpenseFormType, HiddenFormType, SplitType
from splitt.models.expense import ExpenseDraft
from splitt.services.expense_service import ExpenseService


class TestDraftFields:
    """Test validated draft fields"""

    def test_defaults(self, draft, settings):
        """A fresh draft has no title, a zero amount and the default emoji"""
        assert draft.form_type == ExpenseFormType.ADD
        assert draft.title is None
        assert draft.amount == 0
        assert draft.emoji == settings.default_emoji
        assert draft.active_hidden_form is None
        assert draft.is_valid is False

    def test_form_type_accepts_value(self, settings):
        draft = ExpenseDraft("EDIT", settings=settings)
        assert draft.form_type == ExpenseFormType.EDIT

    def test_invalid_form_type(self, settings):
        with pytest.raises(ValidationError):
            ExpenseDraft("DELETE", settings=settings)

    def test_title_limit(self, draft, settings):
        """Titles up to the limit are accepted, longer ones rejected"""
        draft.title = "a" * settings.title_limit
        with pytest.raises(ValidationError) as exc_info:
            draft.title = "a" * (settings.title_limit + 1)
        assert exc_info.value.details == {"field": "title", "limit": settings.title_limit}
        assert draft.title == "a" * settings.title_limit

    def test_custom_note_limit(self):
        draft = ExpenseDraft(settings=Settings(_env_file=None, note_limit=5))
        draft.note = "short"
        with pytest.raises(ValidationError):
            draft.note = "longer"

    @pytest.mark.parametrize("value", ["", 42, ["Dinner"]])
    def test_invalid_title(self, draft, value):
        with pytest.raises(ValidationError):
            draft.title = value

    def test_title_can_be_cleared(self, draft):
        draft.title = "Dinner"
        draft.title = None
        assert draft.title is None

    @pytest.mark.parametrize("value", [-1, 1.5, "100", True, None])
    def test_invalid_amount(self, draft, value):
        with pytest.raises(ValidationError):
            draft.amount = value

    def test_invalid_below_min_flag(self, draft):
        with pytest.raises(ValidationError):
            draft.is_amount_below_min = 1

    def test_date(self, draft):
        draft.date = datetime.date(2024, 3, 1)
        assert draft.date == datetime.date(2024, 3, 1)

    def test_invalid_date(self, draft):
        with pytest.raises(ValidationError):
            draft.date = "2024-03-01"

    def test_invalid_emoji(self, draft):
        with pytest.raises(ValidationError):
            draft.emoji = 1

    def test_hidden_form(self, draft):
        """Hidden forms accept enum values and can be closed with None"""
        draft.active_hidden_form = "SPLIT"
        assert draft.active_hidden_form == HiddenFormType.SPLIT
        draft.active_hidden_form = None
        assert draft.active_hidden_form is None

    def test_invalid_hidden_form(self, draft):
        with pytest.raises(ValidationError):
            draft.active_hidden_form = "COMMENTS"


class TestValidateForSubmission:
    """Test submit readiness"""

    def test_requires_title(self, draft):
        ExpenseService.update_amount(draft, 900)
        assert draft.validate_for_submission() is False

        draft.title = "Groceries"
        assert draft.validate_for_submission() is True

    def test_requires_positive_amount(self, draft):
        draft.title = "Groceries"
        assert draft.validate_for_submission() is False

    def test_is_valid_reflects_last_validation(self, draft):
        """is_valid is not refreshed by plain setters"""
        ExpenseService.update_amount(draft, 900)
        draft.title = "Groceries"
        assert draft.is_valid is False
        draft.validate_for_submission()
        assert draft.is_valid is True

    def test_requires_valid_active_split(self, draft):
        draft.title = "Groceries"
        ExpenseService.update_amount(draft, 900)
        ExpenseService.update_split_type(draft, SplitType.PARTS)
        assert draft.is_valid is False


class TestReset:
    """Test draft reset"""

    def test_reset_clears_fields(self, draft, current_user_id, other_user_id, settings):
        draft.title = "Groceries"
        draft.note = "Weekly shop"
        draft.date = datetime.date(2024, 3, 1)
        draft.emoji = "\U0001F6D2"
        draft.active_hidden_form = HiddenFormType.NOTE
        ExpenseService.update_amount(draft, 900)
        ExpenseService.update_split(draft, other_user_id)
        draft.validate_for_submission()

        draft.reset(current_user_id)

        assert draft.title is None
        assert draft.note is None
        assert draft.date is None
        assert draft.amount == 0
        assert draft.emoji == settings.default_emoji
        assert draft.active_hidden_form is None
        assert draft.is_valid is False
        assert draft.split.active_form is draft.split.equally
        assert other_user_id in draft.split.equally.selected_users

    def test_reset_rebuilds_paid_by(self, draft, current_user_id, other_user_id):
        default_entry_id = draft.paid_by.default_entry_id
        draft.paid_by.add_entry()

        draft.reset(other_user_id)

        assert draft.paid_by.has_single_entry()
        assert draft.paid_by.default_entry_id == default_entry_id
        assert draft.paid_by.get_default_entry().user_id == other_user_id

    @pytest.fixture
    def edit_draft(self, current_user_id, member_ids, settings):
        return ExpenseService.create_draft(
            current_user_id, member_ids, form_type=ExpenseFormType.EDIT, settings=settings
        )

    def test_reset_without_user_keeps_paid_by(self, edit_draft):
        """Entries survive, the sole entry follows the zero amount"""
        ExpenseService.update_amount(edit_draft, 1000)

        edit_draft.reset()

        ledger = edit_draft.paid_by
        assert ledger.has_single_entry()
        assert ledger.get_default_entry().amount == 0
        assert ledger.total == 0
        assert ledger.remainder == 0
        assert not ledger.is_valid

    def test_reset_without_user_keeps_entries(self, edit_draft):
        ExpenseService.update_amount(edit_draft, 1000)
        edit_draft.paid_by.add_entry()

        edit_draft.reset()

        ledger = edit_draft.paid_by
        assert len(ledger.entries) == 2
        assert ledger.remainder == edit_draft.amount - ledger.total

    def test_add_entry_after_reset_uses_zero_amount(self, edit_draft):
        """Entries added after a reset are balanced against the new amount"""
        ExpenseService.update_amount(edit_draft, 1000)
        edit_draft.reset()

        result = edit_draft.paid_by.add_entry()

        assert result.entries_count == 2
        assert edit_draft.paid_by.total == 0
        assert edit_draft.paid_by.remainder == 0
