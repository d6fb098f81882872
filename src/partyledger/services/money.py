from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from partyledger.config import Settings, get_settings


def format_cents(cents: int, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    sign = "-" if cents < 0 else ""
    units, fraction = divmod(abs(cents), 100)

    digits = f"{units:,}".replace(",", settings.thousands_separator)
    return f"{sign}{settings.currency_symbol} {digits}{settings.decimal_separator}{fraction:02d}"


def parse_amount_to_cents(raw: str, settings: Optional[Settings] = None) -> int:
    """
    Разбор суммы, введённой пользователем, в центы.

    Поддерживаемые форматы:
    - 1.234,56
    - R$ 12,5
    - 40
    """
    settings = settings or get_settings()
    normalized = re.sub(r"\s", "", raw)
    symbol = settings.currency_symbol
    if symbol and normalized.lower().startswith(symbol.lower()):
        normalized = normalized[len(symbol):]
    normalized = normalized.replace(settings.thousands_separator, "").replace(settings.decimal_separator, ".")

    if not normalized:
        return 0

    try:
        value = Decimal(normalized)
    except InvalidOperation as exc:
        raise ValueError("Valor inválido") from exc
    if not value.is_finite():
        raise ValueError("Valor inválido")

    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
