import pytest
from fastapi.testclient import TestClient

from conftest import make_xlsx
from main import app

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture
def client():
    return TestClient(app)


def _upload(client, content, name="sales.xlsx", session_id=None):
    data = {"session_id": session_id} if session_id else {}
    return client.post("/upload/excel", files={"file": (name, content, XLSX_MIME)}, data=data)


def test_root(client):
    assert client.get("/").status_code == 200


def test_upload_creates_loaded_session(client, sales_xlsx):
    resp = _upload(client, sales_xlsx)

    assert resp.status_code == 200
    body = resp.json()
    assert body["session"]["phase"] == "loaded"
    assert body["session"]["headers"] == ["Name", "Sales"]
    assert body["session"]["n_rows"] == 2
    assert body["notification"]["title"] == "File loaded"


def test_upload_into_existing_session(client, sales_xlsx):
    session_id = client.post("/session").json()["session_id"]

    resp = _upload(client, sales_xlsx, session_id=session_id)

    assert resp.status_code == 200
    assert resp.json()["session"]["session_id"] == session_id

    second = _upload(client, sales_xlsx, session_id=session_id)
    assert second.status_code == 409


def test_upload_rejects_other_extensions(client, sales_xlsx):
    session_id = client.post("/session").json()["session_id"]

    resp = _upload(client, sales_xlsx, name="report.pdf", session_id=session_id)

    assert resp.status_code == 415
    assert client.get(f"/session/{session_id}").json()["phase"] == "empty"


def test_upload_empty_sheet_is_unprocessable(client):
    assert _upload(client, make_xlsx([])).status_code == 422


def test_drop_picks_spreadsheet(client, sales_xlsx):
    files = [
        ("files", ("notes.txt", b"hello", "text/plain")),
        ("files", ("sales.xlsx", sales_xlsx, XLSX_MIME)),
    ]

    resp = client.post("/upload/drop", files=files)

    assert resp.status_code == 200
    assert resp.json()["session"]["file_name"] == "sales.xlsx"


def test_drop_without_spreadsheet(client):
    resp = client.post("/upload/drop", files=[("files", ("report.pdf", b"%PDF", "application/pdf"))])

    assert resp.status_code == 415


def test_preview_and_charts(client, sales_xlsx):
    session_id = _upload(client, sales_xlsx).json()["session"]["session_id"]

    preview = client.post("/data/preview", json={"session_id": session_id}).json()
    assert preview["headers"] == ["Name", "Sales"]
    assert preview["rows"] == [["Alice", 10], ["Bob", "n/a"]]

    spec = client.post("/data/charts", json={"session_id": session_id, "chart_type": "bar"}).json()
    assert spec["points"] == [
        {"label": "Row 1", "values": {"Sales": 10}},
        {"label": "Row 2", "values": {}},
    ]
    assert spec["series_keys"] == ["Sales"]
    assert spec["colors"] == ["#9b87f5"]
    assert spec["image_base64"] is None


def test_execute_command_and_history(client, sales_xlsx):
    session_id = _upload(client, sales_xlsx).json()["session"]["session_id"]

    first = client.post("/commands/execute", json={"session_id": session_id, "command": "среднее значение"})
    second = client.post("/commands/execute", json={"session_id": session_id, "command": "show trends"})

    assert first.status_code == 200
    assert "Name, Sales" in first.json()["entry"]["result"]
    assert first.json()["notification"]["title"] == "Command executed"

    history = client.get(f"/commands/history/{session_id}").json()
    assert [h["command"] for h in history] == ["show trends", "среднее значение"]
    assert history[0]["id"] == second.json()["entry"]["id"]


def test_execute_without_dataset(client):
    session_id = client.post("/session").json()["session_id"]

    resp = client.post("/commands/execute", json={"session_id": session_id, "command": "trends"})

    assert resp.status_code == 400


def test_close_clears_session(client, sales_xlsx):
    session_id = _upload(client, sales_xlsx).json()["session"]["session_id"]
    client.post("/commands/execute", json={"session_id": session_id, "command": "trends"})

    closed = client.post(f"/session/{session_id}/close").json()

    assert closed["phase"] == "empty"
    assert closed["file_name"] == ""
    assert closed["history_size"] == 0
    assert client.get(f"/commands/history/{session_id}").json() == []


def test_notifications_are_drained(client):
    session_id = client.post("/session").json()["session_id"]

    assert client.get(f"/session/{session_id}/notifications").json() == []


def test_unknown_session(client):
    assert client.get("/session/nope").status_code == 404
    assert client.post("/data/preview", json={"session_id": "nope"}).status_code == 404


def test_delete_session_removes_it(client, sales_xlsx):
    session_id = _upload(client, sales_xlsx).json()["session"]["session_id"]

    assert client.delete(f"/session/{session_id}").status_code == 204
    assert client.get(f"/session/{session_id}").status_code == 404
    assert client.delete(f"/session/{session_id}").status_code == 404
