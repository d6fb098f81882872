from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from partyledger.logging import get_logger
from partyledger.models import NetBalance, Transfer

log = get_logger(__name__)


@dataclass(slots=True)
class _Party:
    id: str
    name: str
    remaining: int


def simplify_debts(balances: Iterable[NetBalance]) -> List[Transfer]:
    creditors: list[_Party] = []
    debtors: list[_Party] = []

    for balance in balances:
        if balance.net_cents > 0:
            creditors.append(_Party(balance.id, balance.name, balance.net_cents))
        elif balance.net_cents < 0:
            debtors.append(_Party(balance.id, balance.name, -balance.net_cents))

    creditors.sort(key=lambda p: (-p.remaining, p.name))
    debtors.sort(key=lambda p: (-p.remaining, p.name))

    transfers: list[Transfer] = []
    i, j = 0, 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        transfer_amount = min(debtor.remaining, creditor.remaining)
        transfers.append(Transfer(from_id=debtor.id, to_id=creditor.id, cents=transfer_amount))

        debtor.remaining -= transfer_amount
        creditor.remaining -= transfer_amount

        if debtor.remaining == 0:
            i += 1
        if creditor.remaining == 0:
            j += 1

    log.debug(
        "settlement.simplified",
        debtors=len(debtors),
        creditors=len(creditors),
        transfers=len(transfers),
    )
    return transfers
