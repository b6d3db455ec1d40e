import pytest

from studynotes.config import Settings, validate_settings


def test_valid_settings(settings):
    validate_settings(settings)


@pytest.mark.parametrize("overrides,problem", [
    ({"database_url": ""}, "DATABASE_URL"),
    ({"secret_key": ""}, "SECRET_KEY"),
    ({"session_max_age_days": 0}, "SESSION_MAX_AGE_DAYS"),
    ({"session_cookie_samesite": "sometimes"}, "SESSION_COOKIE_SAMESITE"),
    ({"bcrypt_rounds": 2}, "BCRYPT_ROUNDS"),
    ({"telemetry_exporter": "jaeger"}, "TELEMETRY_EXPORTER"),
])
def test_invalid_settings(overrides, problem):
    with pytest.raises(ValueError) as exc_info:
        validate_settings(Settings(_env_file=None, **overrides))
    assert problem in str(exc_info.value)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SESSION_COOKIE_NAME", "custom.sid")
    monkeypatch.setenv("BCRYPT_ROUNDS", "5")
    loaded = Settings(_env_file=None)
    assert loaded.session_cookie_name == "custom.sid"
    assert loaded.bcrypt_rounds == 5
