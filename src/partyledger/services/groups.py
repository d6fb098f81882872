from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

from partyledger.logging import get_logger
from partyledger.models import Charge, ChargeLike, ConsumptionGroup, GroupExpense, Transfer
from partyledger.services.pairwise import compute_pairwise_transfers
from partyledger.services.split import clamp_cents, valid_consumers

log = get_logger(__name__)


class NamedCharge(ChargeLike, Protocol):
    @property
    def item_name(self) -> str: ...


@dataclass(slots=True)
class _GroupBuilder:
    consumer_ids: tuple[str, ...]
    item_names: list[str] = field(default_factory=list)
    total_cents: int = 0
    expenses: list[GroupExpense] = field(default_factory=list)

    def build(self) -> ConsumptionGroup:
        return ConsumptionGroup(
            consumer_ids=self.consumer_ids,
            item_names=tuple(self.item_names),
            total_cents=self.total_cents,
            expenses=tuple(self.expenses),
        )


def compute_consumption_groups(
    participant_ids: Sequence[str],
    expenses: Iterable[NamedCharge],
) -> list[ConsumptionGroup]:
    """Группирует расходы по точному набору потребителей."""
    known = set(participant_ids)
    builders: dict[tuple[str, ...], _GroupBuilder] = {}

    for expense in expenses:
        if expense.payer_id not in known:
            continue
        consumers = tuple(valid_consumers(expense.consumer_ids, known))
        if not consumers:
            continue

        amount = clamp_cents(expense.total_cents)
        builder = builders.get(consumers)
        if builder is None:
            builder = builders[consumers] = _GroupBuilder(consumer_ids=consumers)

        builder.item_names.append(expense.item_name)
        builder.total_cents += amount
        builder.expenses.append(GroupExpense(payer_id=expense.payer_id, total_cents=amount))

    groups = [builder.build() for builder in builders.values()]
    groups.sort(key=lambda g: (-g.total_cents, len(g.consumer_ids)))
    log.debug("settlement.groups.computed", groups=len(groups))
    return groups


def group_participant_ids(group: ConsumptionGroup) -> list[str]:
    ids = list(group.consumer_ids)
    for expense in group.expenses:
        if expense.payer_id not in ids:
            ids.append(expense.payer_id)
    return ids


def group_transfers(group: ConsumptionGroup) -> list[Transfer]:
    charges = [
        Charge(payer_id=expense.payer_id, total_cents=expense.total_cents, consumer_ids=group.consumer_ids)
        for expense in group.expenses
    ]
    return compute_pairwise_transfers(group_participant_ids(group), charges)
