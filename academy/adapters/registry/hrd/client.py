# PATH: academy/adapters/registry/hrd/client.py
#
# PURPOSE:
# - 외부 훈련기관 출결 registry(HRD) 월별 조회 전용 HTTP client
# - AttendanceRegistryPort 구현
#
# RESPONSE:
# - body는 JSON, 그 안의 returnJSON이 다시 JSON 문자열
# - returnJSON.atabList 는 list 또는 단일 object
# - HTML(점검 페이지 등)이 오면 데이터 없음
#
# DESIGN:
# - timeout 명시, retry 없음
# - HTML/빈 본문 → 빈 리스트
# - 깨진 응답/네트워크 오류 → WARNING 로그 후 RegistryFetchError (use case가 failed_months로 기록)

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from academy.domain.attendance.entities import AttendanceLogEntry
from academy.domain.attendance.errors import RegistryFetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def parse_log_entry(raw: Dict[str, Any]) -> Optional[AttendanceLogEntry]:
    """registry 항목 1건 → AttendanceLogEntry. 학생 ID/날짜 없으면 None."""
    if not isinstance(raw, dict):
        return None
    student_id = _text(raw.get("trneeCstmrId"))
    date_key = _text(raw.get("atendDe"))
    if not student_id or not date_key:
        return None
    return AttendanceLogEntry(
        student_id=student_id,
        student_name=_text(raw.get("cstmrNm")),
        date=date_key,
        status_code=_text(raw.get("atendSttusCd")),
        status_name=_text(raw.get("atendSttusNm")),
        check_in_time=raw.get("lpsilTime"),
        check_out_time=raw.get("levromTime"),
    )


def parse_month_payload(text: str) -> List[AttendanceLogEntry]:
    """
    응답 본문 → 로그 리스트.
    ValueError(JSON 오류)는 호출자가 처리.
    """
    if not text or text.strip().startswith("<"):
        return []

    data = json.loads(text)
    if not isinstance(data, dict) or not data.get("returnJSON"):
        return []

    inner = data["returnJSON"]
    real = json.loads(inner) if isinstance(inner, str) else inner
    if not isinstance(real, dict):
        return []

    items = real.get("atabList")
    if not items:
        return []
    if not isinstance(items, list):
        items = [items]

    entries = []
    for item in items:
        entry = parse_log_entry(item)
        if entry is not None:
            entries.append(entry)
    return entries


class HrdAttendanceRegistry:
    """
    AttendanceRegistryPort 구현.
    요청마다 (과정코드, 회차, YYYYMM) 1회 GET.
    """

    def __init__(
        self,
        *,
        base_url: str,
        auth_key: str,
        timeout_seconds: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        if not auth_key:
            raise ValueError("auth_key is required")

        self._base_url = str(base_url)
        self._auth_key = str(auth_key)
        self._timeout = float(timeout_seconds or DEFAULT_TIMEOUT_SECONDS)
        self._headers = {"User-Agent": "Mozilla/5.0"}

        # keep-alive (월 단위 요청이 여러 건)
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings) -> "HrdAttendanceRegistry":
        return cls(
            base_url=getattr(settings, "HRD_ATTENDANCE_URL", ""),
            auth_key=getattr(settings, "HRD_AUTH_KEY", ""),
            timeout_seconds=getattr(settings, "HRD_HTTP_TIMEOUT_SECONDS", None),
        )

    def close(self) -> None:
        self._session.close()

    def _params(self, course_code: str, round_no: str, year_month: str) -> Dict[str, str]:
        return {
            "returnType": "JSON",
            "authKey": self._auth_key,
            "srchTrprId": str(course_code),
            "srchTrprDegr": str(round_no),
            "outType": "2",
            "srchTorgId": "student_detail",
            "atendMo": str(year_month),
        }

    def fetch_month(self, course_code: str, round_no: str, year_month: str) -> List[AttendanceLogEntry]:
        """
        Raises: RegistryFetchError (네트워크/HTTP 오류, JSON 깨짐)
        HTML/빈 본문은 오류가 아니라 데이터 없음.
        """
        try:
            resp = self._session.get(
                self._base_url,
                params=self._params(course_code, round_no, year_month),
                headers=self._headers,
                timeout=self._timeout,
            )
            resp.raise_for_status()
            return parse_month_payload(resp.text)
        except requests.RequestException as e:
            logger.warning(
                "HRD attendance fetch error | course=%s round=%s month=%s error=%s",
                course_code, round_no, year_month, e,
            )
            raise RegistryFetchError(course_code, round_no, year_month, e) from e
        except ValueError as e:
            logger.warning(
                "HRD attendance malformed response | course=%s round=%s month=%s error=%s",
                course_code, round_no, year_month, e,
            )
            raise RegistryFetchError(course_code, round_no, year_month, e) from e
