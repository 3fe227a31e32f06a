from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Union

Amount = Union[int, float, Decimal]


class DebtKind(str, Enum):
    OWED_TO_ME = "piutang"
    I_OWE = "hutang"


class ActivityType(str, Enum):
    PAYMENT = "payment"
    NEW_DEBT = "new_debt"
    SETTLED = "settled"


@dataclass(slots=True)
class UserIdentity:
    id: str
    name: str


@dataclass(slots=True)
class DebtRecord:
    owner_user_id: str
    kind: DebtKind
    counterparty_name: str
    amount: Amount
    settled: bool = False


@dataclass(slots=True)
class GroupTransaction:
    from_user_id: str
    to_user_id: str
    amount: Amount
    paid: bool = False


@dataclass(slots=True)
class UserBalance:
    user_id: str
    user_name: str
    balance: Decimal = Decimal(0)


@dataclass(slots=True, frozen=True)
class SettlementTransaction:
    from_user_id: str
    from_user_name: str
    to_user_id: str
    to_user_name: str
    amount: int


@dataclass(slots=True, frozen=True)
class Activity:
    id: str
    timestamp: datetime
    type: ActivityType
    from_user_id: str
    from_name: str
    to_user_id: str
    to_name: str
    amount: Amount
    description: str


def to_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # floats go through str so 0.1 stays 0.1
    return Decimal(str(value))
