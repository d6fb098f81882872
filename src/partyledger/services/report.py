from __future__ import annotations

from typing import Optional

from partyledger.config import Settings, get_settings
from partyledger.models import ConsumptionGroup, Ledger, ReceiverSummary
from partyledger.services.balances import compute_balances
from partyledger.services.groups import compute_consumption_groups, group_transfers
from partyledger.services.money import format_cents
from partyledger.services.pairwise import compute_pairwise_transfers
from partyledger.services.receivers import summarize_transfers_by_receiver

SEPARATOR = "----------------"


def _format_receivers(ledger: Ledger, receivers: list[ReceiverSummary], settings: Settings) -> list[str]:
    lines: list[str] = []
    for receiver in receivers:
        to = ledger.participant(receiver.to_id)
        if to is None:
            continue
        lines.append(f"- Para {to.name}: {format_cents(receiver.total_cents, settings)}")
        if to.payment_key:
            lines.append(f"  Pix: {to.payment_key}")
        senders = sorted(receiver.incoming, key=lambda s: (-s.cents, s.from_id))
        for sender in senders:
            sender_participant = ledger.participant(sender.from_id)
            if sender_participant is None:
                continue
            lines.append(f"  - {sender_participant.name}: {format_cents(sender.cents, settings)}")
    return lines


def _format_group(ledger: Ledger, group: ConsumptionGroup, settings: Settings) -> list[str]:
    items = ", ".join(name for name in group.item_names if name)
    members = ", ".join(
        participant.name
        for participant in (ledger.participant(pid) for pid in group.consumer_ids)
        if participant is not None
    )
    lines = [f"Grupo: {items} ({members})"]

    receivers = summarize_transfers_by_receiver(group_transfers(group))
    if not receivers:
        lines.append("Mande: ninguém")
        return lines

    for receiver in receivers:
        to = ledger.participant(receiver.to_id)
        if to is None:
            continue
        tiers = " + ".join(f"{tier.count}x {format_cents(tier.cents, settings)}" for tier in receiver.tiers)
        lines.append(f"Mande para {to.name}: {format_cents(receiver.total_cents, settings)} ({tiers})")
        if to.payment_key:
            lines.append(f"Pix ({to.name}): {to.payment_key}")
    return lines


def build_share_message(ledger: Ledger, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    report = compute_balances(ledger.participants, ledger.expenses)
    transfers = compute_pairwise_transfers(ledger.participant_ids, ledger.expenses)
    groups = compute_consumption_groups(ledger.participant_ids, ledger.expenses)

    lines = [
        f"*{settings.report_title}*",
        f"Total da Festa: {format_cents(report.total_party_cents, settings)}",
        SEPARATOR,
        "*Quem manda pra quem:*",
    ]
    if transfers:
        lines.extend(_format_receivers(ledger, summarize_transfers_by_receiver(transfers), settings))
    else:
        lines.append("- Ninguém")
    lines.append("")

    if groups:
        lines.extend(["", SEPARATOR, "*Detalhado por consumo:*"])
        for group in groups:
            lines.append("")
            lines.extend(_format_group(ledger, group, settings))

    lines.extend([SEPARATOR, settings.report_footer])
    return "\n".join(lines)


def build_expense_list(ledger: Ledger, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()

    def name_of(participant_id: str) -> str:
        participant = ledger.participant(participant_id)
        return participant.name if participant else "?"

    lines = []
    for expense in ledger.expenses:
        consumers = ", ".join(name_of(pid) for pid in expense.consumer_ids)
        lines.append(
            f"- {expense.item_name}: {format_cents(expense.total_cents, settings)}"
            f" | Pagou: {name_of(expense.payer_id)} | Consumiu: {consumers}"
        )
    return "\n".join(lines)


def format_balances(ledger: Ledger, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    report = compute_balances(ledger.participants, ledger.expenses)

    lines = [f"Total da Festa: {format_cents(report.total_party_cents, settings)}"]
    for balance in report.balances:
        net = format_cents(balance.net_cents, settings)
        if balance.net_cents > 0:
            net = f"+{net}"
        lines.append(
            f"{balance.participant.name}: Pagou {format_cents(balance.paid_cents, settings)}"
            f" • Consumiu {format_cents(balance.consumed_cents, settings)} • {net}"
        )
    return "\n".join(lines)
