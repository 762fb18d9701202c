"""
도메인 공통: 파싱/Use Case 결과 타입 (외부 라이브러리 없음)

Ok  — 정상 값
Err — 건너뛴 입력/실패 사유 (예외 대신 값으로 전달)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    message: str
    code: str = "error"
    source: str = ""

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
