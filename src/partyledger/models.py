from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import NamedTuple, Optional, Protocol, Sequence


@dataclass(slots=True)
class Participant:
    id: str
    name: str
    payment_key: Optional[str] = None


@dataclass(slots=True, frozen=True)
class Expense:
    id: str
    item_name: str
    total_cents: int
    payer_id: str
    consumer_ids: tuple[str, ...]
    created_at: datetime


@dataclass(slots=True, frozen=True)
class Ledger:
    participants: tuple[Participant, ...] = ()
    expenses: tuple[Expense, ...] = ()

    @property
    def participant_ids(self) -> list[str]:
        return [p.id for p in self.participants]

    def participant(self, participant_id: str) -> Optional[Participant]:
        for p in self.participants:
            if p.id == participant_id:
                return p
        return None


class ChargeLike(Protocol):
    """Минимальный интерфейс расхода, нужный для расчётов."""

    @property
    def payer_id(self) -> str: ...

    @property
    def total_cents(self) -> int | float: ...

    @property
    def consumer_ids(self) -> Sequence[str]: ...


@dataclass(slots=True, frozen=True)
class Charge:
    payer_id: str
    total_cents: int
    consumer_ids: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class Transfer:
    from_id: str
    to_id: str
    cents: int


class PairKey(NamedTuple):
    debtor_id: str
    creditor_id: str


@dataclass(slots=True, frozen=True)
class ParticipantBalance:
    participant: Participant
    paid_cents: int
    consumed_cents: int
    net_cents: int


@dataclass(slots=True, frozen=True)
class NetBalance:
    id: str
    name: str
    net_cents: int


@dataclass(slots=True, frozen=True)
class BalanceReport:
    total_party_cents: int
    balances: tuple[ParticipantBalance, ...]

    def net_balances(self) -> list[NetBalance]:
        return [
            NetBalance(id=b.participant.id, name=b.participant.name, net_cents=b.net_cents)
            for b in self.balances
        ]


@dataclass(slots=True, frozen=True)
class GroupExpense:
    payer_id: str
    total_cents: int


@dataclass(slots=True, frozen=True)
class ConsumptionGroup:
    consumer_ids: tuple[str, ...]
    item_names: tuple[str, ...]
    total_cents: int
    expenses: tuple[GroupExpense, ...] = field(default_factory=tuple)


@dataclass(slots=True, frozen=True)
class IncomingTransfer:
    from_id: str
    cents: int


@dataclass(slots=True, frozen=True)
class PayerTier:
    cents: int
    count: int


@dataclass(slots=True, frozen=True)
class ReceiverSummary:
    to_id: str
    total_cents: int
    incoming: tuple[IncomingTransfer, ...]
    tiers: tuple[PayerTier, ...]
