from partyledger.config import get_settings


def test_defaults():
    settings = get_settings()
    assert settings.log_level == "INFO"
    assert settings.log_json is True
    assert settings.currency_symbol == "R$"
    assert settings.decimal_separator == ","


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("currency_symbol", "US$")
    monkeypatch.setenv("REPORT_FOOTER", "tchau")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.currency_symbol == "US$"
    assert settings.report_footer == "tchau"
