import json
from types import SimpleNamespace

import pytest
import requests

from academy.adapters.registry.hrd.client import (
    DEFAULT_TIMEOUT_SECONDS,
    HrdAttendanceRegistry,
    parse_log_entry,
    parse_month_payload,
)
from academy.domain.attendance.errors import RegistryFetchError


def hrd_item(student_id="S1", name="김철수", day="20260105", code="01", status="출석", lpsil="0900", levrom="1800"):
    return {
        "trneeCstmrId": student_id,
        "cstmrNm": name,
        "atendDe": day,
        "atendSttusCd": code,
        "atendSttusNm": status,
        "lpsilTime": lpsil,
        "levromTime": levrom,
    }


def hrd_body(atab_list):
    """실제 응답처럼 returnJSON 안에 JSON 문자열을 한 번 더 싼다."""
    return json.dumps({"returnJSON": json.dumps({"atabList": atab_list})})


class FakeResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []
        self.closed = False

    def get(self, url, params=None, headers=None, timeout=None):
        self.requests.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def make_registry(session):
    return HrdAttendanceRegistry(
        base_url="https://registry.test/attendance",
        auth_key="secret",
        session=session,
    )


class TestParseLogEntry:
    def test_maps_registry_fields(self):
        entry = parse_log_entry(hrd_item(code=" 01 "))

        assert entry.student_id == "S1"
        assert entry.student_name == "김철수"
        assert entry.date == "20260105"
        assert entry.status_code == "01"
        assert entry.check_in_time == "0900"
        assert entry.check_out_time == "1800"

    def test_missing_student_or_date(self):
        assert parse_log_entry(hrd_item(student_id="")) is None
        assert parse_log_entry(hrd_item(day=None)) is None
        assert parse_log_entry("not a dict") is None


class TestParseMonthPayload:
    def test_list(self):
        entries = parse_month_payload(hrd_body([hrd_item(), hrd_item(student_id="S2")]))
        assert [e.student_id for e in entries] == ["S1", "S2"]

    def test_single_object(self):
        entries = parse_month_payload(hrd_body(hrd_item()))
        assert len(entries) == 1

    def test_html_is_empty(self):
        assert parse_month_payload("<html><body>점검중</body></html>") == []

    def test_empty_return_json(self):
        assert parse_month_payload(json.dumps({"returnJSON": ""})) == []
        assert parse_month_payload(hrd_body([])) == []

    def test_invalid_items_are_dropped(self):
        entries = parse_month_payload(hrd_body([hrd_item(), {"cstmrNm": "이름만"}]))
        assert len(entries) == 1

    def test_broken_json_raises(self):
        with pytest.raises(ValueError):
            parse_month_payload("{not json")


class TestHrdAttendanceRegistry:
    def test_requires_url_and_key(self):
        with pytest.raises(ValueError):
            HrdAttendanceRegistry(base_url="", auth_key="secret")
        with pytest.raises(ValueError):
            HrdAttendanceRegistry(base_url="https://registry.test", auth_key="")

    def test_fetch_month_request(self):
        session = FakeSession(FakeResponse(hrd_body([hrd_item()])))

        entries = make_registry(session).fetch_month("AIG20250000001", "3", "202601")

        assert len(entries) == 1
        sent = session.requests[0]
        assert sent["url"] == "https://registry.test/attendance"
        assert sent["params"] == {
            "returnType": "JSON",
            "authKey": "secret",
            "srchTrprId": "AIG20250000001",
            "srchTrprDegr": "3",
            "outType": "2",
            "srchTorgId": "student_detail",
            "atendMo": "202601",
        }
        assert sent["headers"]["User-Agent"] == "Mozilla/5.0"
        assert sent["timeout"] == DEFAULT_TIMEOUT_SECONDS

    def test_html_body_is_empty(self):
        session = FakeSession(FakeResponse("<html><body>점검중</body></html>"))
        assert make_registry(session).fetch_month("C", "1", "202601") == []

    def test_network_error_raises(self, caplog):
        session = FakeSession(error=requests.ConnectionError("refused"))

        with pytest.raises(RegistryFetchError) as exc_info:
            make_registry(session).fetch_month("C", "1", "202601")

        assert exc_info.value.year_month == "202601"
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)
        assert "HRD attendance fetch error" in caplog.text

    def test_http_error_raises(self):
        session = FakeSession(FakeResponse("", status_code=500))
        with pytest.raises(RegistryFetchError):
            make_registry(session).fetch_month("C", "1", "202601")

    def test_malformed_body_raises(self, caplog):
        session = FakeSession(FakeResponse("{broken"))

        with pytest.raises(RegistryFetchError):
            make_registry(session).fetch_month("C", "1", "202601")
        assert "malformed response" in caplog.text

    def test_close(self):
        session = FakeSession()
        make_registry(session).close()
        assert session.closed

    def test_from_settings(self):
        settings = SimpleNamespace(
            HRD_ATTENDANCE_URL="https://registry.test/attendance",
            HRD_AUTH_KEY="secret",
            HRD_HTTP_TIMEOUT_SECONDS=3,
        )
        registry = HrdAttendanceRegistry.from_settings(settings)
        try:
            assert registry._timeout == 3.0
        finally:
            registry.close()
