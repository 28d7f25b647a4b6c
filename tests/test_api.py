import io

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from hr_api.main import app
from hr_dashboard.workbook import build_template_workbook


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def employees(ten_employees):
    return [e.to_record() for e in ten_employees]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_sample(client):
    body = client.get("/employees/sample", params={"count": 5}).json()
    assert body["count"] == 5
    assert len(body["employees"]) == 5


def test_sample_rejects_zero(client):
    assert client.get("/employees/sample", params={"count": 0}).status_code == 422


def test_template_download(client):
    resp = client.get("/template")
    assert resp.status_code == 200
    assert "attachment" in resp.headers["content-disposition"]
    df = pd.read_excel(io.BytesIO(resp.content))
    assert len(df) == 1


def test_upload_template(client):
    files = {"file": ("staff.xlsx", build_template_workbook(), "application/octet-stream")}
    body = client.post("/employees/upload", files=files).json()
    assert body["count"] == 1
    assert body["employees"][0]["salary"] == 50_000_000


def test_upload_wrong_type(client):
    resp = client.post("/employees/upload", files={"file": ("staff.csv", b"a,b", "text/csv")})
    assert resp.status_code == 400
    assert resp.json()["type"] == "UnsupportedFileTypeError"


def test_upload_corrupt(client):
    resp = client.post("/employees/upload", files={"file": ("staff.xlsx", b"garbage", "application/octet-stream")})
    assert resp.status_code == 422
    assert resp.json()["type"] == "WorkbookParseError"


def test_filter_options(client, employees):
    body = client.post("/filters/options", json={"employees": employees}).json()
    assert body["total"] == 10
    assert body["options"]["department"] == ["مالی", "فنی و اجرایی"]


def test_overview_view(client, employees):
    resp = client.post("/views/overview", json={"employees": employees, "filters": {"department": ["مالی"]}})
    assert resp.status_code == 200
    body = resp.json()
    assert body["kpis"]["headcount"] == 6
    assert body["shown"] == 6
    assert body["total"] == 10


def test_view_options_are_forwarded(client, employees):
    body = client.post(
        "/views/birthdays", json={"employees": employees, "options": {"selected_month": "مهر"}}
    ).json()
    assert len(body["employees"]) == 4


def test_unknown_view(client, employees):
    assert client.post("/views/finance", json={"employees": employees}).status_code == 404


@pytest.mark.parametrize(
    "view,options",
    [
        ("birthdays", {"selected_month": "May"}),
        ("map", {"selected_region": 99}),
        ("profile", {"employee_id": "nobody"}),
        ("salary", {"unexpected": 1}),
    ],
)
def test_bad_view_options(client, employees, view, options):
    resp = client.post(f"/views/{view}", json={"employees": employees, "options": options})
    assert resp.status_code == 400


def test_every_view_handles_empty_data(client):
    for view in ("overview", "birthdays", "salary", "map", "profile", "overtime"):
        assert client.post(f"/views/{view}", json={"employees": []}).status_code == 200
