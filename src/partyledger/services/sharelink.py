from __future__ import annotations

import base64
import binascii
import json
import math
from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from partyledger.logging import get_logger
from partyledger.models import Expense, Ledger, Participant
from partyledger.services.split import clamp_cents

log = get_logger(__name__)

SHARE_VERSION = 1


class _ShareModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShareParticipant(_ShareModel):
    id: StrictStr
    name: StrictStr
    pix_key: Optional[str] = None

    @field_validator("pix_key", mode="before")
    @classmethod
    def _drop_invalid_key(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class ShareExpense(_ShareModel):
    id: StrictStr
    item_name: StrictStr
    total_cents: StrictInt | StrictFloat
    payer_id: StrictStr
    consumer_ids: list[StrictStr] = Field(min_length=1)
    created_at: StrictInt | StrictFloat

    @field_validator("consumer_ids", mode="before")
    @classmethod
    def _keep_string_ids(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [item for item in value if isinstance(item, str)]
        return value

    @field_validator("total_cents", "created_at")
    @classmethod
    def _finite(cls, value: int | float) -> int | float:
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("value must be finite")
        return value


class SharePayload(_ShareModel):
    v: Literal[1]
    participants: list[Any]
    expenses: list[Any]


def _to_epoch_ms(moment: datetime) -> int:
    return round(moment.timestamp() * 1000)


def _from_epoch_ms(value: int | float) -> datetime:
    return datetime.fromtimestamp(max(0, round(value)) / 1000, tz=timezone.utc)


def ledger_to_payload(ledger: Ledger) -> dict[str, Any]:
    participants: list[dict[str, Any]] = []
    for p in ledger.participants:
        entry: dict[str, Any] = {"id": p.id, "name": p.name}
        if p.payment_key:
            entry["pixKey"] = p.payment_key
        participants.append(entry)

    expenses = [
        {
            "id": e.id,
            "itemName": e.item_name,
            "totalCents": e.total_cents,
            "payerId": e.payer_id,
            "consumerIds": list(e.consumer_ids),
            "createdAt": _to_epoch_ms(e.created_at),
        }
        for e in ledger.expenses
    ]
    return {"v": SHARE_VERSION, "participants": participants, "expenses": expenses}


def ledger_from_payload(raw: Any) -> Optional[Ledger]:
    """Отдельные некорректные записи отбрасываются, а не ломают весь разбор."""
    try:
        payload = SharePayload.model_validate(raw)
    except ValidationError as exc:
        log.warning("sharelink.payload.invalid", errors=exc.error_count())
        return None

    participants: list[Participant] = []
    for item in payload.participants:
        try:
            parsed = ShareParticipant.model_validate(item)
        except ValidationError:
            log.info("sharelink.participant.skipped")
            continue
        participants.append(Participant(id=parsed.id, name=parsed.name, payment_key=parsed.pix_key))

    expenses: list[Expense] = []
    for item in payload.expenses:
        try:
            parsed_expense = ShareExpense.model_validate(item)
        except ValidationError:
            log.info("sharelink.expense.skipped")
            continue
        expenses.append(
            Expense(
                id=parsed_expense.id,
                item_name=parsed_expense.item_name,
                total_cents=clamp_cents(parsed_expense.total_cents),
                payer_id=parsed_expense.payer_id,
                consumer_ids=tuple(parsed_expense.consumer_ids),
                created_at=_from_epoch_ms(parsed_expense.created_at),
            )
        )

    return Ledger(participants=tuple(participants), expenses=tuple(expenses))


def encode_share_token(ledger: Ledger) -> str:
    data = json.dumps(ledger_to_payload(ledger), ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def decode_share_token(token: str) -> Optional[Ledger]:
    padded = token.strip() + "=" * (-len(token.strip()) % 4)
    try:
        data = base64.urlsafe_b64decode(padded.encode("ascii"))
        raw = json.loads(data.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as exc:
        log.warning("sharelink.decode.failed", error=str(exc))
        return None
    return ledger_from_payload(raw)
