from __future__ import annotations

from itertools import combinations
from typing import Iterable, Sequence

from partyledger.logging import get_logger
from partyledger.models import ChargeLike, PairKey, Transfer
from partyledger.services.split import clamp_cents, split_between, valid_consumers

log = get_logger(__name__)


def accumulate_owed(participant_ids: Iterable[str], expenses: Iterable[ChargeLike]) -> dict[PairKey, int]:
    """Сколько каждый потребитель должен каждому плательщику, без взаимозачёта."""
    known = set(participant_ids)
    owed: dict[PairKey, int] = {}

    for expense in expenses:
        if expense.payer_id not in known:
            continue
        consumers = valid_consumers(expense.consumer_ids, known)
        if not consumers:
            continue

        shares = split_between(clamp_cents(expense.total_cents), consumers)
        for consumer, share in shares.items():
            if consumer == expense.payer_id:
                continue
            key = PairKey(debtor_id=consumer, creditor_id=expense.payer_id)
            owed[key] = owed.get(key, 0) + share

    return owed


def net_pairs(owed: dict[PairKey, int], participant_ids: Iterable[str]) -> list[Transfer]:
    transfers: list[Transfer] = []

    for a, b in combinations(sorted(set(participant_ids)), 2):
        ab = owed.get(PairKey(a, b), 0)
        ba = owed.get(PairKey(b, a), 0)
        if ab == ba:
            continue
        if ab > ba:
            transfers.append(Transfer(from_id=a, to_id=b, cents=ab - ba))
        else:
            transfers.append(Transfer(from_id=b, to_id=a, cents=ba - ab))

    transfers.sort(key=lambda t: (-t.cents, t.from_id, t.to_id))
    return transfers


def compute_pairwise_transfers(participant_ids: Sequence[str], expenses: Iterable[ChargeLike]) -> list[Transfer]:
    owed = accumulate_owed(participant_ids, expenses)
    transfers = net_pairs(owed, participant_ids)
    log.debug("settlement.pairwise.computed", pairs=len(owed), transfers=len(transfers))
    return transfers
