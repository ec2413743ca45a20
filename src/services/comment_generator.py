"""
코멘트 생성 모듈
케이스 유형, 판정, 제품/이벤트 목록, 근거 문구, 자유 입력을 조합해
표준 인과관계 코멘트 문장을 만든다.
"""
from typing import Iterable, List, Optional
from config.settings import settings
from config.comment_templates import (
    FOLLOW_UP_STATUS_TEXT,
    get_base_template,
    get_justification_text,
)
from src.types import AssessmentDict, SubCommentData
from src.utils.constants import (
    CASE_TYPE_LABELS,
    INVALID_SELECTION_MESSAGE,
    JUSTIFIABLE_RELATEDNESS,
    LICENSE_PARTNER_LABEL_PREFIX,
    RELATEDNESS_LABELS,
    SUB_COMMENT_SEPARATOR,
)
from src.utils.helpers import is_blank, split_terms


def format_list_for_sentence(items_string: Optional[str]) -> str:
    """
    쉼표 구분 문자열을 자연어 나열로 변환

    Examples:
        "" -> ""
        "A" -> "A"
        "A,B" -> "A and B"
        "A, B ,C" -> "A, B, and C"

    Args:
        items_string: 쉼표 구분 문자열

    Returns:
        나열 문장
    """
    items = split_terms(items_string)

    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"

    return f"{', '.join(items[:-1])}, and {items[-1]}"


def resolve_company_name(is_license_partner: bool) -> str:
    """LP 여부에 따른 회사명 치환값"""
    return settings.company_name if is_license_partner else settings.generic_company_name


def build_justification_text(
    relatedness: str,
    justifications: Optional[Iterable[str]],
    follow_up_consent: bool = False
) -> str:
    """
    선택된 근거 키의 문구를 공백으로 연결

    판정(positive/negative)에 허용되지 않은 키는 건너뛴다.

    Args:
        relatedness: 판정 값
        justifications: 선택된 근거 키 (선택 순서 유지)
        follow_up_consent: 추적 조사 동의 여부

    Returns:
        근거 문구 (없으면 빈 문자열)
    """
    if relatedness not in JUSTIFIABLE_RELATEDNESS or not justifications:
        return ""

    clauses: List[str] = []
    for key in justifications:
        clause = get_justification_text(relatedness, key)
        if clause is None:
            continue
        clauses.append(clause.replace("{followUpStatus}", FOLLOW_UP_STATUS_TEXT[bool(follow_up_consent)]))

    return " ".join(clauses)


def generate_comment(
    case_type: str,
    is_license_partner: bool,
    product_names: str,
    events: str,
    relatedness: str,
    justifications: Optional[Iterable[str]] = None,
    additional_notes: Optional[str] = None,
    free_text_comment: Optional[str] = None,
    follow_up_consent: bool = False
) -> str:
    """
    단일 코멘트 생성

    케이스 유형/판정 조합에 템플릿이 없으면 예외 대신
    INVALID_SELECTION_MESSAGE 를 반환하므로 호출 측에서
    is_error_comment() 로 확인해야 한다.

    Args:
        case_type: 케이스 유형 (pms, clinicalTrial, spontaneous)
        is_license_partner: 라이선스 파트너 여부
        product_names: 쉼표 구분 제품명
        events: 쉼표 구분 이벤트명
        relatedness: 판정
        justifications: 근거 키 목록
        additional_notes: 마지막에 덧붙일 메모
        free_text_comment: 값이 있으면 템플릿 대신 그대로 사용
        follow_up_consent: 추적 조사 동의 여부

    Returns:
        코멘트 문자열
    """
    template = get_base_template(case_type, relatedness)
    if template is None:
        return INVALID_SELECTION_MESSAGE

    if not is_blank(free_text_comment):
        return free_text_comment.strip()

    comment = (
        template
        .replace("{companyName}", resolve_company_name(is_license_partner))
        .replace("{productNames}", format_list_for_sentence(product_names))
        .replace("{events}", format_list_for_sentence(events))
    )

    justification_text = build_justification_text(relatedness, justifications, follow_up_consent)
    if justification_text:
        comment += f" {justification_text}"

    if not is_blank(additional_notes):
        comment += f" {additional_notes.strip()}"

    return comment


def is_error_comment(comment: Optional[str]) -> bool:
    """generate_comment() 결과가 오류 값인지 확인"""
    return comment == INVALID_SELECTION_MESSAGE


def generate_sub_comment(
    case_type: str,
    is_license_partner: bool,
    unit: SubCommentData,
    follow_up_consent: bool = False
) -> str:
    """서브 코멘트 단위 하나의 코멘트 생성"""
    return generate_comment(
        case_type,
        is_license_partner,
        unit.get("product_names", ""),
        unit.get("events", ""),
        unit.get("relatedness", ""),
        unit.get("justifications") or [],
        unit.get("additional_notes", ""),
        unit.get("free_text", ""),
        follow_up_consent,
    )


def regenerate_comment(record: AssessmentDict) -> str:
    """
    저장된 평가 기록의 입력값으로 코멘트를 다시 생성

    서브 코멘트가 있으면 단위별로 생성해 빈 줄로 연결하고,
    없으면 (구 버전 단일 기록) 평면 필드로 생성한다.

    Args:
        record: 평가 기록

    Returns:
        코멘트 문자열
    """
    case_type = record.get("case_type", "")
    is_license_partner = bool(record.get("is_license_partner"))
    follow_up_consent = bool(record.get("follow_up_consent"))
    sub_comments = record.get("sub_comments")

    if sub_comments:
        return SUB_COMMENT_SEPARATOR.join(
            generate_sub_comment(case_type, is_license_partner, unit, follow_up_consent)
            for unit in sub_comments
        )

    return generate_comment(
        case_type,
        is_license_partner,
        record.get("product_names", ""),
        record.get("events", ""),
        record.get("relatedness", ""),
        record.get("justifications") or [],
        record.get("additional_notes", ""),
        record.get("free_text_comment", ""),
        follow_up_consent,
    )


def format_case_type(case_type: str, is_license_partner: bool = False) -> str:
    """케이스 유형 표시 라벨 (LP 는 "LP - " 접두사)"""
    label = CASE_TYPE_LABELS.get(case_type, case_type)
    return f"{LICENSE_PARTNER_LABEL_PREFIX}{label}" if is_license_partner else label


def format_relatedness(relatedness: str) -> str:
    """판정 표시 라벨"""
    if relatedness in RELATEDNESS_LABELS:
        return RELATEDNESS_LABELS[relatedness]
    return " ".join(word[:1].upper() + word[1:] for word in relatedness.split("_"))
