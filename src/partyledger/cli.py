from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from partyledger.config import get_settings
from partyledger.logging import configure_logging, get_logger
from partyledger.models import Ledger
from partyledger.services.balances import compute_balances
from partyledger.services.money import format_cents
from partyledger.services.report import build_share_message, format_balances
from partyledger.services.settlement import simplify_debts
from partyledger.services.sharelink import decode_share_token, encode_share_token, ledger_from_payload

EXIT_BAD_INPUT = 2


def load_ledger_file(path: Path) -> Optional[Ledger]:
    log = get_logger(__name__)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        log.error("cli.ledger.unreadable", path=str(path), error=str(exc))
        return None
    return ledger_from_payload(raw)


def _resolve_ledger(args: argparse.Namespace) -> Optional[Ledger]:
    if args.token:
        return decode_share_token(args.token)
    if args.ledger_file:
        return load_ledger_file(Path(args.ledger_file))
    get_logger(__name__).error("cli.ledger.missing")
    return None


def _cmd_report(ledger: Ledger) -> str:
    return build_share_message(ledger)


def _cmd_balances(ledger: Ledger) -> str:
    return format_balances(ledger)


def _cmd_simplify(ledger: Ledger) -> str:
    report = compute_balances(ledger.participants, ledger.expenses)
    transfers = simplify_debts(report.net_balances())
    if not transfers:
        return "Ninguém precisa mandar nada"

    def name_of(participant_id: str) -> str:
        participant = ledger.participant(participant_id)
        return participant.name if participant else participant_id

    return "\n".join(
        f"{name_of(t.from_id)} -> {name_of(t.to_id)}: {format_cents(t.cents)}" for t in transfers
    )


def _cmd_share(ledger: Ledger) -> str:
    return encode_share_token(ledger)


COMMANDS = {
    "report": _cmd_report,
    "balances": _cmd_balances,
    "simplify": _cmd_simplify,
    "share": _cmd_share,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="partyledger", description="Split shared party expenses in exact cents")
    parser.add_argument("command", choices=sorted(COMMANDS), help="what to print")
    parser.add_argument("ledger_file", nargs="?", help="path to a JSON file with participants and expenses")
    parser.add_argument("--token", help="share token instead of a ledger file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)
    args = build_parser().parse_args(argv)

    ledger = _resolve_ledger(args)
    if ledger is None:
        return EXIT_BAD_INPUT

    print(COMMANDS[args.command](ledger))
    return 0


if __name__ == "__main__":
    sys.exit(main())
