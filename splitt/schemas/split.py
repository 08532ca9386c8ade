"""Split update results"""
from typing import Any, Dict, Set

from pydantic import BaseModel

from splitt.models.enums import SplitType


class EqualSplitResult(BaseModel):
    """State of the equal split after an update"""
    split_type: SplitType = SplitType.EQUALLY
    split_amounts: Dict[Any, int]
    selected_users: Set[Any]
    is_valid: bool


class PartsSplitResult(BaseModel):
    """State of the parts split after an update"""
    split_type: SplitType = SplitType.PARTS
    split_amounts: Dict[Any, int]
    total: int
    remainder: int
    is_valid: bool


class SharesSplitResult(BaseModel):
    """State of the shares split after an update"""
    split_type: SplitType = SplitType.SHARES
    split_amounts: Dict[Any, int]
    split_shares: Dict[Any, int]
    total_amount: int
    total_share: int
    remainder_amount: int
    remainder_share: int
    is_valid: bool
