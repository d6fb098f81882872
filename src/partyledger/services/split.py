from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Collection, Iterable


def clamp_cents(value: int | float) -> int:
    """Приводит сумму к неотрицательному целому числу центов.

    Нецелые значения округляются половиной вверх, NaN и бесконечности дают 0.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        value = int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(0, int(value))


def split_cents(total_cents: int, parts: int) -> list[int]:
    if parts <= 0:
        return []

    base_share = total_cents // parts
    remainder = total_cents - base_share * parts
    return [base_share + 1 if idx < remainder else base_share for idx in range(parts)]


def valid_consumers(consumer_ids: Iterable[str], known_ids: Collection[str]) -> list[str]:
    # Порядок сортировки определяет, кому достаётся лишний цент.
    return sorted({consumer for consumer in consumer_ids if consumer in known_ids})


def split_between(total_cents: int, consumers: list[str]) -> dict[str, int]:
    shares = split_cents(total_cents, len(consumers))
    return {consumer: share for consumer, share in zip(consumers, shares)}
