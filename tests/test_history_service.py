from datetime import datetime

import pytest

from models.session_models import CommandHistoryEntry
from services.history_service import HistoryLog


def _entry(n):
    return CommandHistoryEntry(id=str(n), command=f"cmd {n}", result="ok", timestamp=datetime.now())


def test_prepend_keeps_newest_first():
    log = HistoryLog()
    for n in range(3):
        log.prepend(_entry(n))

    assert [e.id for e in log] == ["2", "1", "0"]


def test_clear_empties_log():
    log = HistoryLog()
    log.prepend(_entry(1))
    log.clear()

    assert len(log) == 0
    assert log.entries() == ()


def test_limit_evicts_oldest():
    log = HistoryLog(limit=2)
    for n in range(4):
        log.prepend(_entry(n))

    assert [e.id for e in log.entries()] == ["3", "2"]


def test_invalid_limit():
    with pytest.raises(ValueError):
        HistoryLog(limit=0)
