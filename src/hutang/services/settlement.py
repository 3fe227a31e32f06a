from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Sequence

from hutang.config import get_settings
from hutang.logging import get_logger
from hutang.models import Amount, DebtRecord, SettlementTransaction, UserBalance, UserIdentity, to_decimal
from hutang.services.balances import compute_balances

log = get_logger(__name__)


@dataclass(slots=True)
class SettlementPlan:
    transactions: List[SettlementTransaction]
    residual: Decimal


@dataclass(slots=True)
class DebtGraph:
    balances: List[UserBalance]
    transactions: List[SettlementTransaction]
    total_transactions: int
    total_amount: int
    residual: Decimal


def _round_whole(amount: Decimal) -> int:
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def settle(balances: Iterable[UserBalance], epsilon: Optional[Amount] = None) -> SettlementPlan:
    """Match creditors against debtors with a greedy two-pointer walk.

    Creditors are visited largest first and debtors most negative first. Each
    step settles min(credit, debt) between the pair under the cursors and
    advances whichever side reached zero. Balances still open when one side
    runs out are reported as ``residual`` instead of raising.
    """
    if epsilon is None:
        epsilon = get_settings().settle_epsilon
    epsilon = to_decimal(epsilon)
    if epsilon <= 0:
        raise ValueError("epsilon must be positive")

    # working copies, the caller's balances are never touched
    creditors: list[tuple[UserBalance, Decimal]] = []
    debtors: list[tuple[UserBalance, Decimal]] = []

    for entry in balances:
        balance = to_decimal(entry.balance)
        if balance > epsilon:
            creditors.append((entry, balance))
        elif balance < -epsilon:
            debtors.append((entry, balance))

    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1])

    transactions: list[SettlementTransaction] = []
    i, j = 0, 0

    while i < len(creditors) and j < len(debtors):
        creditor, cred_amount = creditors[i]
        debtor, debt_amount = debtors[j]

        amount = min(cred_amount, abs(debt_amount))

        if amount > epsilon:
            rounded = _round_whole(amount)
            if rounded > 0:
                transactions.append(
                    SettlementTransaction(
                        from_user_id=debtor.user_id,
                        from_user_name=debtor.user_name,
                        to_user_id=creditor.user_id,
                        to_user_name=creditor.user_name,
                        amount=rounded,
                    )
                )
            cred_amount -= amount
            debt_amount += amount

        creditors[i] = (creditor, cred_amount)
        debtors[j] = (debtor, debt_amount)

        if abs(cred_amount) <= epsilon:
            i += 1
        if abs(debt_amount) <= epsilon:
            j += 1

    residual = sum((amount for _, amount in creditors[i:]), Decimal(0))
    residual += sum((amount for _, amount in debtors[j:]), Decimal(0))

    log.debug(
        "settlement.optimize",
        creditors=len(creditors),
        debtors=len(debtors),
        transactions=len(transactions),
    )
    if abs(residual) > epsilon:
        log.warning("settlement.residual", residual=str(residual))

    return SettlementPlan(transactions=transactions, residual=residual)


def optimize(balances: Iterable[UserBalance], epsilon: Optional[Amount] = None) -> List[SettlementTransaction]:
    return settle(balances, epsilon).transactions


def optimize_debt_graph(records: Iterable[DebtRecord], users: Sequence[UserIdentity]) -> DebtGraph:
    balances = compute_balances(records, users)
    plan = settle(balances)

    return DebtGraph(
        balances=balances,
        transactions=plan.transactions,
        total_transactions=len(plan.transactions),
        total_amount=sum(t.amount for t in plan.transactions),
        residual=plan.residual,
    )
