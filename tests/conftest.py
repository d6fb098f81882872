from datetime import datetime, timezone

import pytest

from partyledger.config import get_settings
from partyledger.logging import configure_logging
from partyledger.models import Expense, Ledger, Participant


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging():
    configure_logging("WARNING")


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in (
        "LOG_LEVEL",
        "LOG_JSON",
        "CURRENCY_SYMBOL",
        "THOUSANDS_SEPARATOR",
        "DECIMAL_SEPARATOR",
        "REPORT_TITLE",
        "REPORT_FOOTER",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_expense(
    payer_id: str,
    total_cents,
    consumer_ids,
    item_name: str = "item",
    expense_id: str | None = None,
) -> Expense:
    return Expense(
        id=expense_id or f"{item_name}-{payer_id}",
        item_name=item_name,
        total_cents=total_cents,
        payer_id=payer_id,
        consumer_ids=tuple(consumer_ids),
        created_at=datetime(2024, 5, 10, 18, 0, tzinfo=timezone.utc),
    )


def make_ledger(names, expenses=()) -> Ledger:
    participants = tuple(Participant(id=name, name=name) for name in names)
    return Ledger(participants=participants, expenses=tuple(expenses))
