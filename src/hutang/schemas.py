from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from hutang.models import DebtKind, DebtRecord, SettlementTransaction, UserBalance, UserIdentity
from hutang.services.queries import PaymentSimulation, UserObligations
from hutang.services.settlement import DebtGraph


def _json_number(value: Decimal) -> Union[int, float]:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DebtIn(_Schema):
    user_id: str = Field(..., alias="userId")
    type: DebtKind
    amount: Decimal
    is_paid: bool = Field(False, alias="isPaid")
    name: str = ""

    def to_record(self) -> DebtRecord:
        return DebtRecord(
            owner_user_id=self.user_id,
            kind=self.type,
            counterparty_name=self.name,
            amount=self.amount,
            settled=self.is_paid,
        )


class UserIn(_Schema):
    id: str
    name: str

    def to_identity(self) -> UserIdentity:
        return UserIdentity(id=self.id, name=self.name)


class DebtDocument(_Schema):
    all_debts: List[DebtIn] = Field(default_factory=list, alias="allDebts")
    all_users: List[UserIn] = Field(default_factory=list, alias="allUsers")

    def records(self) -> list[DebtRecord]:
        return [debt.to_record() for debt in self.all_debts]

    def users(self) -> list[UserIdentity]:
        return [user.to_identity() for user in self.all_users]


class BalanceOut(_Schema):
    user_id: str = Field(..., alias="userId")
    user_name: str = Field(..., alias="userName")
    balance: Decimal

    @field_serializer("balance")
    def _serialize_balance(self, value: Decimal) -> Union[int, float]:
        return _json_number(value)

    @classmethod
    def from_balance(cls, entry: UserBalance) -> "BalanceOut":
        return cls(user_id=entry.user_id, user_name=entry.user_name, balance=entry.balance)


class SettlementOut(_Schema):
    from_user_id: str = Field(..., alias="from")
    from_user_name: str = Field(..., alias="fromName")
    to_user_id: str = Field(..., alias="to")
    to_user_name: str = Field(..., alias="toName")
    amount: int = Field(..., gt=0)

    @classmethod
    def from_transaction(cls, transaction: SettlementTransaction) -> "SettlementOut":
        return cls(
            from_user_id=transaction.from_user_id,
            from_user_name=transaction.from_user_name,
            to_user_id=transaction.to_user_id,
            to_user_name=transaction.to_user_name,
            amount=transaction.amount,
        )


class SettlementReport(_Schema):
    balances: List[BalanceOut]
    settlements: List[SettlementOut]
    total_transactions: int = Field(..., alias="totalTransactions")
    total_amount: int = Field(..., alias="totalAmount")
    residual: Decimal

    @field_serializer("residual")
    def _serialize_residual(self, value: Decimal) -> Union[int, float]:
        return _json_number(value)

    @classmethod
    def from_graph(cls, graph: DebtGraph) -> "SettlementReport":
        return cls(
            balances=[BalanceOut.from_balance(b) for b in graph.balances],
            settlements=[SettlementOut.from_transaction(t) for t in graph.transactions],
            total_transactions=graph.total_transactions,
            total_amount=graph.total_amount,
            residual=graph.residual,
        )


class SimulationOut(_Schema):
    before: List[SettlementOut]
    after: List[SettlementOut]
    impact: str

    @classmethod
    def from_simulation(cls, simulation: PaymentSimulation) -> "SimulationOut":
        return cls(
            before=[SettlementOut.from_transaction(t) for t in simulation.before],
            after=[SettlementOut.from_transaction(t) for t in simulation.after],
            impact=simulation.impact,
        )


class ObligationsOut(_Schema):
    should_pay: List[SettlementOut] = Field(..., alias="shouldPay")
    will_receive: List[SettlementOut] = Field(..., alias="willReceive")

    @classmethod
    def from_obligations(cls, obligations: UserObligations) -> "ObligationsOut":
        return cls(
            should_pay=[SettlementOut.from_transaction(t) for t in obligations.should_pay],
            will_receive=[SettlementOut.from_transaction(t) for t in obligations.will_receive],
        )


class PathOut(_Schema):
    path: Optional[SettlementOut] = None
