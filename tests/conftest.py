"""Pytest fixtures and configuration"""

import random
from uuid import uuid4

import pytest

from splitt.config import Settings
from splitt.models.paid_by import EntryIdAllocator, PayerLedger
from splitt.services.expense_service import ExpenseService


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file"""
    return Settings(_env_file=None)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for rounding tie-breaks"""
    return random.Random(42)


@pytest.fixture
def current_user_id():
    """Current user ID"""
    return uuid4()


@pytest.fixture
def other_user_id():
    """Second group member"""
    return uuid4()


@pytest.fixture
def third_user_id():
    """Third group member"""
    return uuid4()


@pytest.fixture
def member_ids(current_user_id, other_user_id, third_user_id):
    """Group roster"""
    return [current_user_id, other_user_id, third_user_id]


@pytest.fixture
def ledger(current_user_id) -> PayerLedger:
    """Initialized Paid By ledger with the current user's default entry"""
    ledger = PayerLedger(EntryIdAllocator())
    ledger.init(current_user_id)
    return ledger


@pytest.fixture
def draft(current_user_id, member_ids, settings, rng):
    """Initialized ADD expense draft for a three-member group"""
    return ExpenseService.create_draft(
        current_user_id, member_ids, settings=settings, rng=rng
    )
