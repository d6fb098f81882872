import json

from conftest import make_expense

from partyledger.cli import EXIT_BAD_INPUT, main
from partyledger.models import Ledger, Participant
from partyledger.services.sharelink import encode_share_token, ledger_to_payload


def _ledger() -> Ledger:
    return Ledger(
        participants=(Participant(id="a", name="Ana"), Participant(id="b", name="Bia"), Participant(id="c", name="Caio")),
        expenses=(make_expense("c", 400, ["a", "b", "c"]), make_expense("b", 200, ["a"])),
    )


def test_simplify_from_file(tmp_path, capsys):
    path = tmp_path / "ledger.json"
    path.write_text(json.dumps(ledger_to_payload(_ledger())), encoding="utf-8")

    assert main(["simplify", str(path)]) == 0

    out = capsys.readouterr().out
    assert out.strip().split("\n") == ["Ana -> Caio: R$ 2,67", "Ana -> Bia: R$ 0,67"]


def test_report_from_token(capsys):
    assert main(["report", "--token", encode_share_token(_ledger())]) == 0

    assert "*Resumo da Festa*" in capsys.readouterr().out


def test_share_prints_token(tmp_path, capsys):
    path = tmp_path / "ledger.json"
    path.write_text(json.dumps(ledger_to_payload(_ledger())), encoding="utf-8")

    assert main(["share", str(path)]) == 0

    assert capsys.readouterr().out.strip() == encode_share_token(_ledger())


def test_unreadable_input(tmp_path):
    assert main(["balances", str(tmp_path / "missing.json")]) == EXIT_BAD_INPUT
    assert main(["balances", "--token", "!!!"]) == EXIT_BAD_INPUT
    assert main(["balances"]) == EXIT_BAD_INPUT
