import io
import os

# Commands complete immediately under test
os.environ.setdefault("COMMAND_LATENCY_SECONDS", "0")

import pytest
from openpyxl import Workbook

from services import session_service


def make_xlsx(rows):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


SALES_ROWS = [["Name", "Sales"], ["Alice", 10], ["Bob", "n/a"]]


@pytest.fixture
def sales_xlsx():
    return make_xlsx(SALES_ROWS)


@pytest.fixture(autouse=True)
def clear_sessions():
    session_service._SESSIONS.clear()
    yield
    session_service._SESSIONS.clear()
