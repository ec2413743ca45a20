"""
공통 타입 정의
"""
from typing import TypedDict, Optional, List


class SubCommentData(TypedDict, total=False):
    """서브 코멘트 단위 (제품/이벤트/판정/근거 묶음)"""
    product_names: str
    events: str
    relatedness: str
    free_text: str
    additional_notes: str
    justifications: List[str]


class AssessmentDict(TypedDict, total=False):
    """평가 기록 딕셔너리 타입"""
    id: int
    case_id: str
    case_type: str
    is_license_partner: bool
    follow_up_consent: bool
    product_names: str
    events: str
    relatedness: str
    justifications: List[str]
    additional_notes: str
    free_text_comment: str
    generated_comment: str
    timestamp: int
    sub_comments: Optional[List[SubCommentData]]
