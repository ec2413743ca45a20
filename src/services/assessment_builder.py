"""
통합 평가 생성 모듈
여러 서브 코멘트 단위를 하나의 평가 기록으로 합친다.
"""
from typing import Any, Dict, Iterable, List, Optional
from src.services.comment_generator import generate_sub_comment
from src.types import AssessmentDict, SubCommentData
from src.utils.constants import (
    NOTES_SEPARATOR,
    Relatedness,
    SUB_COMMENT_SEPARATOR,
    TERMS_SEPARATOR,
)
from src.utils.helpers import current_timestamp_ms, is_blank, unique_in_order
from src.utils.logger import get_logger

logger = get_logger(__name__)


def _clean_text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def normalize_sub_comment(raw: Dict[str, Any]) -> SubCommentData:
    """
    서브 코멘트 입력값 정규화 (문자열 trim, 근거 목록 보정)

    Args:
        raw: 폼에서 수집한 서브 코멘트

    Returns:
        SubCommentData
    """
    return SubCommentData(
        product_names=_clean_text(raw.get("product_names")),
        events=_clean_text(raw.get("events")),
        relatedness=_clean_text(raw.get("relatedness")),
        free_text=_clean_text(raw.get("free_text")),
        additional_notes=_clean_text(raw.get("additional_notes")),
        justifications=[str(key) for key in (raw.get("justifications") or [])],
    )


def collect_valid_sub_comments(units: Iterable[Dict[str, Any]]) -> List[SubCommentData]:
    """
    제품명, 이벤트, 판정이 모두 채워진 서브 코멘트만 수집

    미완성 단위는 오류 없이 제외한다.

    Args:
        units: 서브 코멘트 목록 (입력 순서 유지)

    Returns:
        유효한 서브 코멘트 목록
    """
    valid = []
    for raw in units:
        unit = normalize_sub_comment(raw)
        if unit["product_names"] and unit["events"] and unit["relatedness"]:
            valid.append(unit)
    return valid


def aggregate_relatedness(units: List[SubCommentData]) -> str:
    """모든 단위의 판정이 같으면 그 값, 다르면 multiple"""
    values = unique_in_order([unit["relatedness"] for unit in units])
    return values[0] if len(values) == 1 else Relatedness.MULTIPLE.value


def generate_combined_comment(
    case_type: str,
    is_license_partner: bool,
    units: Iterable[Dict[str, Any]],
    follow_up_consent: bool = False
) -> Optional[str]:
    """
    서브 코멘트별 코멘트를 빈 줄로 연결

    Returns:
        통합 코멘트 또는 None (케이스 유형 미선택 또는 유효 단위 없음)
    """
    valid_units = collect_valid_sub_comments(units)
    if is_blank(case_type) or not valid_units:
        return None

    return SUB_COMMENT_SEPARATOR.join(
        generate_sub_comment(case_type, is_license_partner, unit, follow_up_consent)
        for unit in valid_units
    )


def build_combined_assessment(
    case_id: str,
    case_type: str,
    is_license_partner: bool,
    follow_up_consent: bool,
    units: Iterable[Dict[str, Any]],
    timestamp: Optional[int] = None
) -> Optional[AssessmentDict]:
    """
    서브 코멘트 단위를 합쳐 저장 가능한 평가 기록 생성

    Args:
        case_id: 케이스 ID
        case_type: 케이스 유형
        is_license_partner: 라이선스 파트너 여부
        follow_up_consent: 추적 조사 동의 여부
        units: 서브 코멘트 목록
        timestamp: 생성 시각 (epoch 밀리초, None이면 현재 시각)

    Returns:
        평가 기록 (id 제외) 또는 None (검증 실패)
    """
    if is_blank(case_type):
        logger.debug("케이스 유형 미선택 - 통합 평가 생성 중단")
        return None

    valid_units = collect_valid_sub_comments(units)
    if not valid_units:
        logger.debug("유효한 서브 코멘트 없음 - 통합 평가 생성 중단")
        return None

    comments = [
        generate_sub_comment(case_type, is_license_partner, unit, follow_up_consent)
        for unit in valid_units
    ]

    return AssessmentDict(
        case_id=_clean_text(case_id),
        case_type=case_type,
        is_license_partner=bool(is_license_partner),
        follow_up_consent=bool(follow_up_consent),
        product_names=TERMS_SEPARATOR.join(unit["product_names"] for unit in valid_units),
        events=TERMS_SEPARATOR.join(unit["events"] for unit in valid_units),
        relatedness=aggregate_relatedness(valid_units),
        justifications=unique_in_order(
            [key for unit in valid_units for key in unit["justifications"]]
        ),
        additional_notes=NOTES_SEPARATOR.join(
            unit["additional_notes"] for unit in valid_units if unit["additional_notes"]
        ),
        free_text_comment="",
        generated_comment=SUB_COMMENT_SEPARATOR.join(comments),
        timestamp=timestamp if timestamp is not None else current_timestamp_ms(),
        sub_comments=valid_units,
    )


def generate_sub_comment_preview(
    case_type: str,
    is_license_partner: bool,
    unit: Dict[str, Any],
    follow_up_consent: bool = False
) -> Optional[str]:
    """
    입력 중인 서브 코멘트 하나의 미리보기

    Returns:
        코멘트 또는 None (케이스 유형이나 필수 항목 누락)
    """
    valid_units = collect_valid_sub_comments([unit])
    if is_blank(case_type) or not valid_units:
        return None
    return generate_sub_comment(case_type, is_license_partner, valid_units[0], follow_up_consent)


def hydrate_sub_comments(record: AssessmentDict) -> List[SubCommentData]:
    """
    이전 평가 기록을 편집 가능한 서브 코멘트 목록으로 복원

    서브 코멘트가 없는 구 버전 기록은 평면 필드로 단위 하나를 만든다.

    Args:
        record: 평가 기록

    Returns:
        서브 코멘트 목록
    """
    sub_comments = record.get("sub_comments")
    if sub_comments:
        return [normalize_sub_comment(unit) for unit in sub_comments]

    return [SubCommentData(
        product_names=record.get("product_names") or "",
        events=record.get("events") or "",
        relatedness=record.get("relatedness") or "",
        free_text=record.get("free_text_comment") or "",
        additional_notes=record.get("additional_notes") or "",
        justifications=list(record.get("justifications") or []),
    )]
