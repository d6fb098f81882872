from __future__ import annotations

from collections import Counter
from typing import Iterable

from partyledger.models import IncomingTransfer, PayerTier, ReceiverSummary, Transfer


def summarize_transfers_by_receiver(transfers: Iterable[Transfer]) -> list[ReceiverSummary]:
    by_receiver: dict[str, list[IncomingTransfer]] = {}
    for transfer in transfers:
        by_receiver.setdefault(transfer.to_id, []).append(
            IncomingTransfer(from_id=transfer.from_id, cents=transfer.cents)
        )

    summaries: list[ReceiverSummary] = []
    for to_id, incoming in by_receiver.items():
        counts = Counter(item.cents for item in incoming)
        tiers = sorted(
            (PayerTier(cents=cents, count=count) for cents, count in counts.items()),
            key=lambda tier: (-tier.cents, -tier.count),
        )
        summaries.append(
            ReceiverSummary(
                to_id=to_id,
                total_cents=sum(item.cents for item in incoming),
                incoming=tuple(incoming),
                tiers=tuple(tiers),
            )
        )

    summaries.sort(key=lambda s: (-s.total_cents, s.to_id))
    return summaries
