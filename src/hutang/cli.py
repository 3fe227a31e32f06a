from __future__ import annotations

import argparse
import json
import sys
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from pydantic import BaseModel, ValidationError

from hutang.config import get_settings
from hutang.logging import configure_logging, get_logger
from hutang.schemas import DebtDocument, ObligationsOut, PathOut, SettlementOut, SettlementReport, SimulationOut
from hutang.services.balances import compute_balances
from hutang.services.queries import find_direct_transaction, get_user_obligations, simulate_additional_payment
from hutang.services.settlement import optimize, optimize_debt_graph

EXIT_INVALID_INPUT = 2


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hutang", description="Settle hutang/piutang with as few payments as possible")
    commands = parser.add_subparsers(dest="command", required=True)

    def add_command(name: str, help_text: str) -> argparse.ArgumentParser:
        command = commands.add_parser(name, help=help_text)
        command.add_argument("file", nargs="?", default="-", help="JSON document with allDebts/allUsers, '-' for stdin")
        return command

    add_command("optimize", "print balances and settlement transactions")

    simulate = add_command("simulate", "compare settlements before and after an extra payment")
    simulate.add_argument("--from", dest="from_user_id", required=True)
    simulate.add_argument("--to", dest="to_user_id", required=True)
    simulate.add_argument("--amount", type=_decimal, required=True)

    path = add_command("path", "look up a direct settlement between two users")
    path.add_argument("--from", dest="from_user_id", required=True)
    path.add_argument("--to", dest="to_user_id", required=True)

    obligations = add_command("obligations", "list what a user pays and receives")
    obligations.add_argument("--user", dest="user_id", required=True)

    return parser


def _read_document(source: str) -> DebtDocument:
    if source == "-":
        raw = sys.stdin.read()
    else:
        with open(source, encoding="utf-8") as fh:
            raw = fh.read()
    return DebtDocument.model_validate(json.loads(raw))


def _run(args: argparse.Namespace, document: DebtDocument) -> BaseModel:
    records = document.records()
    users = document.users()

    if args.command == "optimize":
        return SettlementReport.from_graph(optimize_debt_graph(records, users))

    if args.command == "simulate":
        simulation = simulate_additional_payment(records, users, args.from_user_id, args.to_user_id, args.amount)
        return SimulationOut.from_simulation(simulation)

    transactions = optimize(compute_balances(records, users))
    if args.command == "path":
        found = find_direct_transaction(args.from_user_id, args.to_user_id, transactions)
        return PathOut(path=SettlementOut.from_transaction(found) if found else None)

    return ObligationsOut.from_obligations(get_user_obligations(args.user_id, transactions))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)
    log = get_logger(__name__)

    try:
        document = _read_document(args.file)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        log.error("cli.invalid_input", source=args.file, error=str(exc))
        print(f"hutang: invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    result = _run(args, document)
    print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
