# tests/test_recaps_api.py
from datetime import date, datetime, timezone
from http import HTTPStatus

from app.api.routes import recaps as recaps_module
from app.schemas.attendance import AttendanceRecord, CensusParticipant
from app.schemas.recap import RateMode
from app.services.recap_aggregator import aggregate_monthly_recap


def _install_fake_recap(monkeypatch, calls: list):
    """
    Replace the DB-backed recap service with an in-memory aggregation.
    """
    census = [
        CensusParticipant(id="p1", name="Ahmad", group="Cakra", category="GPN A"),
        CensusParticipant(id="p2", name="Budi", group="Limo", category="GPN B"),
    ]

    async def fake_get_monthly_form_recap(db, form, month, rate_mode=None, unmatched_key_policy=None):
        calls.append({"form": form, "month": month, "rate_mode": rate_mode})
        records = [
            AttendanceRecord(
                id="r1",
                form_id=form.form_id,
                participant_id="p1",
                status="PRESENT",
                timestamp=datetime(month.year, month.month, 3, 19, tzinfo=timezone.utc),
            ),
            AttendanceRecord(
                id="r2",
                form_id=form.form_id,
                participant_id="p2",
                status="EXCUSED",
                timestamp=datetime(month.year, month.month, 3, 19, tzinfo=timezone.utc),
            ),
        ]
        return aggregate_monthly_recap(records, month, census, rate_mode=rate_mode or RateMode.CENSUS)

    monkeypatch.setattr(recaps_module, "get_monthly_form_recap", fake_get_monthly_form_recap)


def test_monthly_recap_returns_camel_case_payload(monkeypatch, client):
    calls: list = []
    _install_fake_recap(monkeypatch, calls)

    resp = client.get("/recaps/profmud/monthly?month=2025-11")
    assert resp.status_code == HTTPStatus.OK

    data = resp.json()
    assert data["monthKey"] == "2025-11"
    assert data["totals"]["totalPresent"] == 1
    assert data["totals"]["totalExcused"] == 1
    assert abs(data["totals"]["attendanceRate"] - 0.5) < 1e-9
    assert data["participants"][0]["participantId"] == "p2"

    assert calls[0]["month"] == date(2025, 11, 1)
    assert calls[0]["form"].key == "profmud"
    assert calls[0]["rate_mode"] is None


def test_monthly_recap_passes_rate_mode(monkeypatch, client):
    calls: list = []
    _install_fake_recap(monkeypatch, calls)

    resp = client.get("/recaps/ar/monthly?month=2025-11&rate_mode=SUBMISSION")
    assert resp.status_code == HTTPStatus.OK
    assert calls[0]["rate_mode"] == RateMode.SUBMISSION
    assert resp.json()["totals"]["rateMode"] == "SUBMISSION"


def test_monthly_recap_defaults_to_current_month(monkeypatch, client):
    calls: list = []
    _install_fake_recap(monkeypatch, calls)

    resp = client.get("/recaps/profmud/monthly")
    assert resp.status_code == HTTPStatus.OK
    assert calls[0]["month"].day == 1


def test_monthly_recap_unknown_form_404(client):
    resp = client.get("/recaps/unknown/monthly?month=2025-11")
    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert "not found" in resp.json()["detail"].lower()


def test_monthly_recap_malformed_month_422(client):
    resp = client.get("/recaps/profmud/monthly?month=2025-13")
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_monthly_recap_invalid_rate_mode_422(client):
    resp = client.get("/recaps/profmud/monthly?month=2025-11&rate_mode=WEEKLY")
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_group_breakdown(monkeypatch, client):
    _install_fake_recap(monkeypatch, [])

    resp = client.get("/recaps/profmud/groups?month=2025-11")
    assert resp.status_code == HTTPStatus.OK

    rows = resp.json()
    assert [r["group"] for r in rows] == ["Cakra", "Limo"]
    assert rows[0]["census"] == 1
    assert rows[0]["presentCount"] == 1
    assert rows[1]["attendanceRate"] == 0.0


def test_follow_up_list(monkeypatch, client):
    _install_fake_recap(monkeypatch, [])

    resp = client.get("/recaps/profmud/follow-up?month=2025-11&limit=1")
    assert resp.status_code == HTTPStatus.OK

    data = resp.json()
    assert data["totalMeetings"] == 1
    assert data["remaining"] == 1
    assert len(data["entries"]) == 1
    assert data["entries"][0]["participantId"] == "p2"
    assert data["entries"][0]["severity"] == "CRITICAL"


def test_follow_up_uses_configured_default_limit(monkeypatch, client):
    _install_fake_recap(monkeypatch, [])

    resp = client.get("/recaps/profmud/follow-up?month=2025-11")
    assert resp.status_code == HTTPStatus.OK
    assert len(resp.json()["entries"]) == 2
