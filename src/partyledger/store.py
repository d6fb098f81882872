"""Хранилище участников и расходов PartyLedger в памяти."""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable, Optional

from partyledger.logging import get_logger
from partyledger.models import Expense, Ledger, Participant
from partyledger.services.split import clamp_cents


class LedgerValidationError(ValueError):
    pass


class ParticipantInUseError(LedgerValidationError):
    pass


class UnknownRecordError(LookupError):
    pass


def _new_id() -> str:
    return str(uuid.uuid4())


def _unique_ids(ids: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(i for i in ids if i))


class LedgerStore:
    def __init__(self) -> None:
        self._participants: list[Participant] = []
        self._expenses: list[Expense] = []
        self._log = get_logger(__name__)

    def add_participant(self, name: str, payment_key: Optional[str] = None) -> Participant:
        trimmed = name.strip()
        if not trimmed:
            raise LedgerValidationError("O nome do participante não pode ficar vazio")
        participant = Participant(id=_new_id(), name=trimmed, payment_key=(payment_key or "").strip() or None)
        self._participants.append(participant)
        self._log.info("store.participant.added", participant_id=participant.id)
        return participant

    def update_participant(
        self,
        participant_id: str,
        *,
        name: Optional[str] = None,
        payment_key: Optional[str] = None,
    ) -> Participant:
        participant = self._get_participant(participant_id)
        if name is not None:
            trimmed = name.strip()
            if not trimmed:
                raise LedgerValidationError("O nome do participante não pode ficar vazio")
            participant.name = trimmed
        if payment_key is not None:
            participant.payment_key = payment_key.strip() or None
        return participant

    def remove_participant(self, participant_id: str) -> None:
        participant = self._get_participant(participant_id)
        if self.is_referenced(participant_id):
            raise ParticipantInUseError("Participante usado em despesas não pode ser removido")
        self._participants.remove(participant)
        self._log.info("store.participant.removed", participant_id=participant_id)

    def is_referenced(self, participant_id: str) -> bool:
        return any(
            expense.payer_id == participant_id or participant_id in expense.consumer_ids
            for expense in self._expenses
        )

    def add_expense(
        self,
        item_name: str,
        total_cents: int,
        payer_id: str,
        consumer_ids: Iterable[str],
    ) -> Expense:
        expense = self._validated(
            Expense(
                id=_new_id(),
                item_name=item_name.strip(),
                total_cents=clamp_cents(total_cents),
                payer_id=payer_id,
                consumer_ids=_unique_ids(consumer_ids),
                created_at=datetime.now(timezone.utc),
            )
        )
        # Новые расходы показываются первыми.
        self._expenses.insert(0, expense)
        self._log.info("store.expense.added", expense_id=expense.id, total_cents=expense.total_cents)
        return expense

    def update_expense(
        self,
        expense_id: str,
        *,
        item_name: Optional[str] = None,
        total_cents: Optional[int] = None,
        payer_id: Optional[str] = None,
        consumer_ids: Optional[Iterable[str]] = None,
    ) -> Expense:
        index, current = self._get_expense(expense_id)
        changes: dict[str, object] = {}
        if item_name is not None:
            changes["item_name"] = item_name.strip()
        if total_cents is not None:
            changes["total_cents"] = clamp_cents(total_cents)
        if payer_id is not None:
            changes["payer_id"] = payer_id
        if consumer_ids is not None:
            changes["consumer_ids"] = _unique_ids(consumer_ids)

        updated = self._validated(replace(current, **changes))
        self._expenses[index] = updated
        self._log.info("store.expense.updated", expense_id=expense_id)
        return updated

    def remove_expense(self, expense_id: str) -> None:
        index, _ = self._get_expense(expense_id)
        del self._expenses[index]
        self._log.info("store.expense.removed", expense_id=expense_id)

    def reset(self) -> None:
        self._participants.clear()
        self._expenses.clear()
        self._log.info("store.reset")

    def load(self, ledger: Ledger) -> None:
        self._participants = [replace(p) for p in ledger.participants]
        self._expenses = list(ledger.expenses)
        self._log.info("store.loaded", participants=len(self._participants), expenses=len(self._expenses))

    def snapshot(self) -> Ledger:
        return Ledger(
            participants=tuple(replace(p) for p in self._participants),
            expenses=tuple(self._expenses),
        )

    def _get_participant(self, participant_id: str) -> Participant:
        for participant in self._participants:
            if participant.id == participant_id:
                return participant
        raise UnknownRecordError(f"Participante {participant_id} não encontrado")

    def _get_expense(self, expense_id: str) -> tuple[int, Expense]:
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return index, expense
        raise UnknownRecordError(f"Despesa {expense_id} não encontrada")

    @staticmethod
    def _validated(expense: Expense) -> Expense:
        if not expense.item_name:
            raise LedgerValidationError("O nome do item não pode ficar vazio")
        if expense.total_cents <= 0:
            raise LedgerValidationError("O valor da despesa deve ser positivo")
        if not expense.payer_id:
            raise LedgerValidationError("Informe quem pagou")
        if not expense.consumer_ids:
            raise LedgerValidationError("Selecione pelo menos um consumidor")
        return expense
