"""
유틸리티 함수 모듈
"""
import re
import time
from datetime import datetime
from typing import Any, List, Optional

# 부호 있는 64비트 정수 범위
TIMESTAMP_MIN_MS = -(2 ** 63)
TIMESTAMP_MAX_MS = 2 ** 63 - 1


def is_blank(value: Optional[str]) -> bool:
    """
    공백 문자열 여부

    Args:
        value: 검사할 값 (None 허용)

    Returns:
        None 이거나 공백만 있으면 True
    """
    return value is None or not str(value).strip()


def split_terms(items_string: Optional[str]) -> List[str]:
    """
    쉼표로 구분된 문자열을 항목 리스트로 분리

    각 항목은 앞뒤 공백을 제거하고 빈 항목은 버린다.
    순서는 유지하며 중복은 제거하지 않는다.

    Args:
        items_string: 쉼표 구분 문자열

    Returns:
        항목 리스트
    """
    if not items_string:
        return []
    return [item.strip() for item in items_string.split(',') if item.strip()]


def unique_in_order(values: List[Any]) -> List[Any]:
    """처음 등장한 순서를 유지한 중복 제거"""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def current_timestamp_ms() -> int:
    """현재 시각 (epoch 밀리초)"""
    return int(time.time() * 1000)


def is_valid_timestamp(value: Any) -> bool:
    """BigInteger 컬럼에 저장 가능한 epoch 밀리초인지 확인"""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and TIMESTAMP_MIN_MS <= value <= TIMESTAMP_MAX_MS
    )


def parse_timestamp(value: Any) -> int:
    """
    타임스탬프 파싱

    epoch 밀리초(정수 또는 숫자 문자열)와 ISO-8601 문자열을 지원한다.

    Args:
        value: 원본 값

    Returns:
        epoch 밀리초

    Raises:
        ValueError: 해석할 수 없는 값
    """
    try:
        timestamp = _to_epoch_ms(value)
    except OverflowError as e:
        raise ValueError(f"타임스탬프 범위를 벗어났습니다: {value!r}") from e

    if not is_valid_timestamp(timestamp):
        raise ValueError(f"타임스탬프 범위를 벗어났습니다: {value!r}")
    return timestamp


def _to_epoch_ms(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"타임스탬프 형식이 아닙니다: {value!r}")
    if isinstance(value, (int, float)):
        # int(inf) 는 OverflowError, int(nan) 은 ValueError
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if re.fullmatch(r'-?\d+', text):
            return int(text)
        if re.fullmatch(r'-?\d+\.\d+', text):
            return int(float(text))
        if text:
            # "Z" 접미사는 fromisoformat 이 구버전에서 지원하지 않음
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            return int(parsed.timestamp() * 1000)
    raise ValueError(f"타임스탬프 형식이 아닙니다: {value!r}")


def format_timestamp(timestamp_ms: int) -> str:
    """
    타임스탬프를 목록 표시용 문자열로 변환 (예: Jan 5, 2024, 09:30 AM)

    Args:
        timestamp_ms: epoch 밀리초

    Returns:
        포맷된 날짜 문자열 (로컬 시간)
    """
    date = datetime.fromtimestamp(timestamp_ms / 1000)
    return f"{date.strftime('%b')} {date.day}, {date.year}, {date.strftime('%I:%M %p')}"


def to_bool(value: Any) -> bool:
    """
    가져오기 데이터의 불리언 값 해석

    Raises:
        ValueError: 해석할 수 없는 값
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in ("true", "1", "yes", "y"):
        return True
    if text in ("false", "0", "no", "n", ""):
        return False
    raise ValueError(f"불리언 형식이 아닙니다: {value!r}")
