from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from hutang.logging import get_logger
from hutang.models import Amount, DebtKind, DebtRecord, SettlementTransaction, UserIdentity
from hutang.services.balances import compute_balances
from hutang.services.settlement import optimize

log = get_logger(__name__)

SIMULATION_NAME = "Simulation"


@dataclass(slots=True)
class UserObligations:
    should_pay: List[SettlementTransaction] = field(default_factory=list)
    will_receive: List[SettlementTransaction] = field(default_factory=list)


@dataclass(slots=True)
class PaymentSimulation:
    before: List[SettlementTransaction]
    after: List[SettlementTransaction]
    impact: str


def find_direct_transaction(
    from_user_id: str,
    to_user_id: str,
    transactions: Iterable[SettlementTransaction],
) -> Optional[SettlementTransaction]:
    for transaction in transactions:
        if transaction.from_user_id == from_user_id and transaction.to_user_id == to_user_id:
            return transaction
    return None


def get_user_obligations(user_id: str, transactions: Iterable[SettlementTransaction]) -> UserObligations:
    obligations = UserObligations()
    for transaction in transactions:
        if transaction.from_user_id == user_id:
            obligations.should_pay.append(transaction)
        if transaction.to_user_id == user_id:
            obligations.will_receive.append(transaction)
    return obligations


def describe_impact(before: int, after: int) -> str:
    if before > after:
        return f"reduces {before - after} transactions"
    if before == after:
        return "no change"
    return "increases transactions"


def simulate_additional_payment(
    records: Sequence[DebtRecord],
    users: Sequence[UserIdentity],
    from_user_id: str,
    to_user_id: str,
    amount: Amount,
) -> PaymentSimulation:
    """Compare the settlement before and after a hypothetical payment.

    The payment is modelled as two synthetic open records: a piutang of
    ``amount`` owned by the payer and a hutang of ``amount`` owned by the
    payee. ``records`` itself is left as it was.
    """
    before = optimize(compute_balances(records, users))

    simulated = list(records)
    simulated.append(
        DebtRecord(
            owner_user_id=from_user_id,
            kind=DebtKind.OWED_TO_ME,
            counterparty_name=SIMULATION_NAME,
            amount=amount,
        )
    )
    simulated.append(
        DebtRecord(
            owner_user_id=to_user_id,
            kind=DebtKind.I_OWE,
            counterparty_name=SIMULATION_NAME,
            amount=amount,
        )
    )

    after = optimize(compute_balances(simulated, users))
    impact = describe_impact(len(before), len(after))

    log.info(
        "simulation.run",
        from_user_id=from_user_id,
        to_user_id=to_user_id,
        before=len(before),
        after=len(after),
        impact=impact,
    )
    return PaymentSimulation(before=before, after=after, impact=impact)
