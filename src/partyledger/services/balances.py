from __future__ import annotations

from typing import Iterable, Sequence

from partyledger.logging import get_logger
from partyledger.models import BalanceReport, ChargeLike, Participant, ParticipantBalance
from partyledger.services.split import clamp_cents, split_between, valid_consumers

log = get_logger(__name__)


def compute_balances(participants: Sequence[Participant], expenses: Iterable[ChargeLike]) -> BalanceReport:
    paid: dict[str, int] = {p.id: 0 for p in participants}
    consumed: dict[str, int] = {p.id: 0 for p in participants}
    total_party_cents = 0

    for expense in expenses:
        amount = clamp_cents(expense.total_cents)
        # Итог вечеринки учитывает и расходы с неизвестными участниками.
        total_party_cents += amount
        if expense.payer_id not in paid:
            continue
        paid[expense.payer_id] += amount

        consumers = valid_consumers(expense.consumer_ids, consumed)
        if not consumers:
            continue

        for consumer, share in split_between(amount, consumers).items():
            consumed[consumer] += share

    balances = tuple(
        ParticipantBalance(
            participant=participant,
            paid_cents=paid[participant.id],
            consumed_cents=consumed[participant.id],
            net_cents=paid[participant.id] - consumed[participant.id],
        )
        for participant in participants
    )
    log.debug("settlement.balances.computed", participants=len(balances), total_party_cents=total_party_cents)
    return BalanceReport(total_party_cents=total_party_cents, balances=balances)
