import base64
import json
from datetime import datetime, timezone

from conftest import make_expense

from partyledger.models import Ledger, Participant
from partyledger.services.sharelink import decode_share_token, encode_share_token, ledger_from_payload


def _token(payload) -> str:
    data = json.dumps(payload).encode("utf-8")
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def test_encode_and_decode_ledger():
    ledger = Ledger(
        participants=(Participant(id="a", name="Ana", payment_key="ana@pix"), Participant(id="b", name="Bia")),
        expenses=(make_expense("a", 1999, ["a", "b"], item_name="Picanha çã"),),
    )

    token = encode_share_token(ledger)

    assert "=" not in token and "+" not in token and "/" not in token
    assert decode_share_token(token) == ledger


def test_payload_uses_camel_case():
    ledger = Ledger(
        participants=(Participant(id="a", name="Ana"),),
        expenses=(make_expense("a", 100, ["a"]),),
    )

    token = encode_share_token(ledger)
    payload = json.loads(base64.urlsafe_b64decode(token + "=" * (-len(token) % 4)))

    assert payload["v"] == 1
    assert payload["participants"] == [{"id": "a", "name": "Ana"}]
    assert payload["expenses"][0]["itemName"] == "item"
    assert payload["expenses"][0]["createdAt"] == 1715364000000


def test_decode_rejects_garbage():
    assert decode_share_token("%%%") is None
    assert decode_share_token(_token({"v": 2, "participants": [], "expenses": []})) is None
    assert decode_share_token(_token({"v": 1, "participants": {}})) is None
    assert decode_share_token(_token([1, 2, 3])) is None


def test_decode_drops_bad_records():
    payload = {
        "v": 1,
        "participants": [
            {"id": "a", "name": "Ana", "pixKey": 42},
            {"id": 7, "name": "Sete"},
            "nope",
        ],
        "expenses": [
            {
                "id": "e1",
                "itemName": "Carne",
                "totalCents": 100.6,
                "payerId": "a",
                "consumerIds": ["a", 3, None],
                "createdAt": 1000.4,
            },
            {
                "id": "e2",
                "itemName": "Gelo",
                "totalCents": 50,
                "payerId": "a",
                "consumerIds": [1],
                "createdAt": 1000,
            },
            {"id": "e3", "itemName": "Pão", "totalCents": "10", "payerId": "a", "consumerIds": ["a"], "createdAt": 0},
        ],
    }

    ledger = ledger_from_payload(payload)

    assert ledger is not None
    assert ledger.participants == (Participant(id="a", name="Ana"),)
    assert len(ledger.expenses) == 1
    expense = ledger.expenses[0]
    assert expense.total_cents == 101
    assert expense.consumer_ids == ("a",)
    assert expense.created_at == datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)


def test_negative_totals_are_clamped():
    payload = {
        "v": 1,
        "participants": [],
        "expenses": [
            {"id": "e", "itemName": "x", "totalCents": -5, "payerId": "a", "consumerIds": ["a"], "createdAt": 0},
        ],
    }

    ledger = ledger_from_payload(payload)

    assert ledger is not None
    assert ledger.expenses[0].total_cents == 0
