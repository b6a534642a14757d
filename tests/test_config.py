import pytest

from config import optional_positive_int


def test_unset_history_limit_means_unbounded(monkeypatch):
    monkeypatch.delenv("HISTORY_LIMIT", raising=False)
    assert optional_positive_int("HISTORY_LIMIT") is None


def test_history_limit_is_parsed(monkeypatch):
    monkeypatch.setenv("HISTORY_LIMIT", "25")
    assert optional_positive_int("HISTORY_LIMIT") == 25


@pytest.mark.parametrize("raw", ["0", "-3", "many"])
def test_invalid_history_limit_fails_at_load(monkeypatch, raw):
    monkeypatch.setenv("HISTORY_LIMIT", raw)
    with pytest.raises(ValueError):
        optional_positive_int("HISTORY_LIMIT")
