# tests/test_config.py
import pytest
from pydantic import ValidationError

from app.core.config import Settings
from app.schemas.recap import RateMode, UnmatchedKeyPolicy


def test_recap_policies_default_to_census_and_name():
    settings = Settings()

    assert settings.RECAP_RATE_MODE == RateMode.CENSUS
    assert settings.RECAP_UNMATCHED_KEY_POLICY == UnmatchedKeyPolicy.NAME


def test_recap_policies_accept_lowercase_env_values(monkeypatch):
    monkeypatch.setenv("RECAP_RATE_MODE", "auto")
    monkeypatch.setenv("RECAP_UNMATCHED_KEY_POLICY", " name_category_group ")

    settings = Settings()

    assert settings.RECAP_RATE_MODE == RateMode.AUTO
    assert settings.RECAP_UNMATCHED_KEY_POLICY == UnmatchedKeyPolicy.NAME_CATEGORY_GROUP


@pytest.mark.parametrize(
    "name, value",
    [
        ("RECAP_RATE_MODE", "census2"),
        ("RECAP_UNMATCHED_KEY_POLICY", "EMAIL"),
    ],
)
def test_unknown_recap_policy_is_rejected_at_load(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings()
