from decimal import Decimal

from hutang.models import DebtKind, DebtRecord, GroupTransaction, UserIdentity
from hutang.services.balances import compute_balances, compute_group_balances, debt_statistics
from hutang.services.settlement import optimize

USERS = [UserIdentity(id="u1", name="Alice"), UserIdentity(id="u2", name="Bob"), UserIdentity(id="u3", name="Cici")]


def _record(owner, kind, amount, settled=False, name="someone"):
    return DebtRecord(owner_user_id=owner, kind=kind, counterparty_name=name, amount=amount, settled=settled)


def test_compute_balances_mixed():
    records = [
        _record("u1", DebtKind.OWED_TO_ME, 150000),
        _record("u1", DebtKind.I_OWE, 20000),
        _record("u2", DebtKind.I_OWE, 130000),
    ]

    balances = compute_balances(records, USERS)

    assert [(b.user_id, b.user_name, b.balance) for b in balances] == [
        ("u1", "Alice", 130000),
        ("u2", "Bob", -130000),
        ("u3", "Cici", 0),
    ]


def test_settled_records_are_excluded():
    records = [
        _record("u1", DebtKind.OWED_TO_ME, 50000, settled=True),
        _record("u1", DebtKind.OWED_TO_ME, 10000),
    ]

    balances = compute_balances(records, USERS)

    assert balances[0].balance == 10000


def test_unknown_owner_is_skipped():
    records = [_record("ghost", DebtKind.OWED_TO_ME, 999), _record("u2", DebtKind.I_OWE, 10)]

    balances = compute_balances(records, USERS)

    assert [b.user_id for b in balances] == ["u1", "u2", "u3"]
    assert [b.balance for b in balances] == [0, -10, 0]


def test_empty_roster():
    assert compute_balances([_record("u1", DebtKind.I_OWE, 10)], []) == []


def test_negative_amounts_are_accumulated():
    balances = compute_balances([_record("u1", DebtKind.OWED_TO_ME, -300)], USERS)
    assert balances[0].balance == -300


def test_float_amounts_stay_exact():
    records = [_record("u1", DebtKind.OWED_TO_ME, 0.1) for _ in range(3)]

    balances = compute_balances(records, USERS)

    assert balances[0].balance == Decimal("0.3")


def test_compute_balances_is_repeatable():
    records = [_record("u1", DebtKind.OWED_TO_ME, 700), _record("u3", DebtKind.I_OWE, 700)]

    assert compute_balances(records, USERS) == compute_balances(records, USERS)


def test_debt_statistics():
    records = [
        _record("u1", DebtKind.I_OWE, 20000),
        _record("u1", DebtKind.I_OWE, 5000),
        _record("u1", DebtKind.OWED_TO_ME, 75000),
        _record("u1", DebtKind.OWED_TO_ME, 1000, settled=True),
        _record("u2", DebtKind.OWED_TO_ME, 40000),
    ]

    stats = debt_statistics(records, "u1")

    assert stats.total_hutang == 25000
    assert stats.total_piutang == 75000
    assert stats.count_hutang == 2
    assert stats.count_piutang == 1
    assert stats.balance == 50000


def test_debt_statistics_without_records():
    stats = debt_statistics([], "u1")
    assert (stats.total_hutang, stats.total_piutang, stats.balance) == (0, 0, 0)
    assert stats.count_hutang == stats.count_piutang == 0


def test_duplicate_roster_ids_collapse():
    users = [UserIdentity(id="u1", name="Alice"), UserIdentity(id="u2", name="Bob"), UserIdentity(id="u1", name="Ali")]

    balances = compute_balances([_record("u1", DebtKind.OWED_TO_ME, 100)], users)

    assert [(b.user_id, b.user_name, b.balance) for b in balances] == [("u1", "Ali", 100), ("u2", "Bob", 0)]


def test_compute_group_balances():
    transactions = [
        GroupTransaction(from_user_id="u2", to_user_id="u1", amount=30000),
        GroupTransaction(from_user_id="u3", to_user_id="u1", amount=20000),
        GroupTransaction(from_user_id="u3", to_user_id="u2", amount=5000),
        GroupTransaction(from_user_id="u2", to_user_id="u3", amount=70000, paid=True),
    ]

    balances = compute_group_balances(transactions, USERS)

    assert [(b.user_id, b.user_name, b.balance) for b in balances] == [
        ("u1", "Alice", 50000),
        ("u2", "Bob", -25000),
        ("u3", "Cici", -25000),
    ]


def test_group_balances_skip_non_members():
    transactions = [
        GroupTransaction(from_user_id="outsider", to_user_id="u1", amount=400),
        GroupTransaction(from_user_id="u2", to_user_id="outsider", amount=100),
    ]

    balances = compute_group_balances(transactions, USERS)

    assert [b.user_id for b in balances] == ["u1", "u2", "u3"]
    assert [b.balance for b in balances] == [400, -100, 0]


def test_group_balances_feed_the_optimizer():
    transactions = [
        GroupTransaction(from_user_id="u2", to_user_id="u1", amount=30000),
        GroupTransaction(from_user_id="u3", to_user_id="u2", amount=30000),
    ]

    settlements = optimize(compute_group_balances(transactions, USERS))

    assert [(t.from_user_id, t.to_user_id, t.amount) for t in settlements] == [("u3", "u1", 30000)]
