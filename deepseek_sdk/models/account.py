"""Model catalogue and account balance."""
from decimal import Decimal
from enum import Enum
from typing import List, Literal

from .common import WireModel


class ModelInfo(WireModel):
    id: str
    object: Literal["model"] = "model"
    owned_by: str


class ModelList(WireModel):
    """Result of ``GET /models``."""
    object: str = "list"
    data: List[ModelInfo]


class Currency(str, Enum):
    CNY = "CNY"
    USD = "USD"


class BalanceInfo(WireModel):
    """Balance in one currency; amounts are decimal strings on the wire."""
    currency: Currency
    total_balance: str
    granted_balance: str
    topped_up_balance: str

    @property
    def total(self) -> Decimal:
        return Decimal(self.total_balance)


class UserBalance(WireModel):
    """Result of ``GET /user/balance``."""
    is_available: bool
    balance_infos: List[BalanceInfo]
