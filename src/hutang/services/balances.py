from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from hutang.models import DebtKind, DebtRecord, GroupTransaction, UserBalance, UserIdentity, to_decimal


@dataclass(slots=True)
class DebtStatistics:
    total_hutang: Decimal
    total_piutang: Decimal
    count_hutang: int
    count_piutang: int
    balance: Decimal


def compute_balances(records: Iterable[DebtRecord], users: Sequence[UserIdentity]) -> list[UserBalance]:
    """Reduce debt records into one net balance per roster user.

    Piutang adds to the owner's balance, hutang subtracts from it. Settled
    records and records owned by users outside the roster are ignored.
    """
    balances: dict[str, UserBalance] = {}
    for user in users:
        balances[user.id] = UserBalance(user_id=user.id, user_name=user.name, balance=Decimal(0))

    for record in records:
        if record.settled:
            continue

        entry = balances.get(record.owner_user_id)
        if entry is None:
            continue

        amount = to_decimal(record.amount)
        if record.kind == DebtKind.OWED_TO_ME:
            entry.balance += amount
        else:
            entry.balance -= amount

    return list(balances.values())


def compute_group_balances(
    transactions: Iterable[GroupTransaction], members: Sequence[UserIdentity]
) -> list[UserBalance]:
    """Net balance per group member from payer/payee group transactions.

    The payer (``from_user_id``) is debited and the payee credited. Paid
    transactions are ignored, as is either side that is not a member.
    """
    balances: dict[str, UserBalance] = {}
    for member in members:
        balances[member.id] = UserBalance(user_id=member.id, user_name=member.name, balance=Decimal(0))

    for transaction in transactions:
        if transaction.paid:
            continue

        amount = to_decimal(transaction.amount)
        payer = balances.get(transaction.from_user_id)
        if payer is not None:
            payer.balance -= amount
        payee = balances.get(transaction.to_user_id)
        if payee is not None:
            payee.balance += amount

    return list(balances.values())


def debt_statistics(records: Iterable[DebtRecord], user_id: str) -> DebtStatistics:
    total_hutang = Decimal(0)
    total_piutang = Decimal(0)
    count_hutang = 0
    count_piutang = 0

    for record in records:
        if record.owner_user_id != user_id or record.settled:
            continue
        amount = to_decimal(record.amount)
        if record.kind == DebtKind.OWED_TO_ME:
            total_piutang += amount
            count_piutang += 1
        else:
            total_hutang += amount
            count_hutang += 1

    return DebtStatistics(
        total_hutang=total_hutang,
        total_piutang=total_piutang,
        count_hutang=count_hutang,
        count_piutang=count_piutang,
        balance=total_piutang - total_hutang,
    )
