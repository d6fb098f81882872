"""PartyLedger: расчёт долей и переводов для общих расходов."""
