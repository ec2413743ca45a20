"""
평가 기록 조회/필터 모듈
목록 화면의 검색, 판정 필터, 정렬, 페이지 처리와
케이스별 최신 기록 조회를 담당한다. (저장소와 무관한 순수 함수)
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from config.settings import settings
from src.services.comment_generator import format_case_type
from src.types import AssessmentDict


@dataclass
class RecordPage:
    """목록 화면에 보이는 범위"""
    items: List[AssessmentDict] = field(default_factory=list)
    total: int = 0
    visible_pages: int = 1
    page_size: int = 20

    @property
    def has_more(self) -> bool:
        """더 보기 가능 여부"""
        return len(self.items) < self.total


def matches_search(record: AssessmentDict, search_term: str) -> bool:
    """케이스 ID, 제품명, 이벤트, 케이스 유형 라벨 부분 일치 (대소문자 무시)"""
    term = search_term.lower()
    candidates = [
        record.get("case_id") or "",
        record.get("product_names") or "",
        record.get("events") or "",
        format_case_type(record.get("case_type") or ""),
    ]
    return any(term in candidate.lower() for candidate in candidates)


def sort_newest_first(records: List[AssessmentDict]) -> List[AssessmentDict]:
    """타임스탬프 내림차순 정렬"""
    return sorted(records, key=lambda record: record.get("timestamp") or 0, reverse=True)


def filter_assessments(
    records: List[AssessmentDict],
    search_term: Optional[str] = None,
    relatedness: Optional[str] = None
) -> List[AssessmentDict]:
    """
    검색어/판정 필터 적용 후 최신순 정렬

    Args:
        records: 전체 평가 기록
        search_term: 검색어 (비어 있으면 미적용)
        relatedness: 판정 (비어 있으면 미적용, 값이 있으면 정확히 일치)

    Returns:
        필터링된 평가 기록 (최신순)
    """
    result = records
    if search_term:
        result = [record for record in result if matches_search(record, search_term)]
    if relatedness:
        result = [record for record in result if record.get("relatedness") == relatedness]
    return sort_newest_first(result)


def paginate(
    records: List[AssessmentDict],
    visible_pages: int = 1,
    page_size: Optional[int] = None
) -> RecordPage:
    """
    이미 필터링된 목록에서 보이는 범위 계산

    "더 보기"는 호출 측이 visible_pages 를 1 늘려 다시 호출한다.
    목록을 다시 조회하지 않는다.

    Args:
        records: 필터링된 평가 기록
        visible_pages: 보이는 페이지 수 (1 이상)
        page_size: 페이지 크기 (None이면 settings.page_size)

    Returns:
        RecordPage
    """
    size = page_size or settings.page_size
    pages = max(1, visible_pages)
    return RecordPage(
        items=records[:pages * size],
        total=len(records),
        visible_pages=pages,
        page_size=size,
    )


def _case_id_sort_key(case_id: str):
    # 대소문자 무시 비교 후 원문 비교로 순서 고정
    return (case_id.casefold(), case_id)


def latest_per_case(records: List[AssessmentDict]) -> List[AssessmentDict]:
    """
    케이스 ID별 가장 최근 기록만 남기고 케이스 ID 순으로 정렬

    Args:
        records: 전체 평가 기록

    Returns:
        케이스별 최신 기록
    """
    latest: Dict[str, AssessmentDict] = {}
    for record in records:
        case_id = record.get("case_id") or ""
        existing = latest.get(case_id)
        if existing is None or (record.get("timestamp") or 0) > (existing.get("timestamp") or 0):
            latest[case_id] = record

    return sorted(latest.values(), key=lambda record: _case_id_sort_key(record.get("case_id") or ""))


def search_case_ids(records: List[AssessmentDict], query: Optional[str] = None) -> List[AssessmentDict]:
    """케이스별 최신 기록 중 케이스 ID 부분 일치 (자동완성용)"""
    cases = latest_per_case(records)
    if not query:
        return cases
    lower_query = query.lower()
    return [record for record in cases if lower_query in (record.get("case_id") or "").lower()]
