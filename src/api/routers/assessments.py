"""
평가 기록 관련 API 라우터
"""
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response
from config.comment_templates import COMMENT_TEMPLATES, get_allowed_justifications, get_base_template
from pydantic import BaseModel, Field
from typing import List, Optional
from src.api.deps import get_assessment_store
from src.services import record_query
from src.services.assessment_builder import (
    build_combined_assessment,
    generate_sub_comment_preview,
    hydrate_sub_comments,
)
from src.services.assessment_store import AssessmentStore
from src.services.comment_generator import format_case_type, format_relatedness
from src.services.import_export import (
    export_assessments_csv,
    export_assessments_json,
    import_assessments_csv,
    import_assessments_json,
)
from src.utils.constants import ExportFormat, JUSTIFIABLE_RELATEDNESS
from src.utils.exceptions import AssessmentNotFoundError, ValidationError
from src.utils.helpers import format_timestamp
from src.utils.response import success_response, list_response
from src.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/assessments", tags=["assessments"])


# Request 모델
class SubCommentRequest(BaseModel):
    product_names: str = ""
    events: str = ""
    relatedness: str = ""
    free_text: str = ""
    additional_notes: str = ""
    justifications: List[str] = Field(default_factory=list)


class AssessmentRequest(BaseModel):
    case_id: str = ""
    case_type: str = ""
    is_license_partner: bool = False
    follow_up_consent: bool = False
    sub_comments: List[SubCommentRequest] = Field(default_factory=list)


class SubCommentPreviewRequest(BaseModel):
    case_type: str = ""
    is_license_partner: bool = False
    follow_up_consent: bool = False
    sub_comment: SubCommentRequest


def _build_or_raise(request: AssessmentRequest):
    """통합 평가 생성, 검증 실패 시 ValidationError"""
    if not request.case_type:
        raise ValidationError("케이스 유형을 선택해 주세요.", "case_type")

    record = build_combined_assessment(
        case_id=request.case_id,
        case_type=request.case_type,
        is_license_partner=request.is_license_partner,
        follow_up_consent=request.follow_up_consent,
        units=[unit.model_dump() for unit in request.sub_comments],
    )
    if record is None:
        raise ValidationError("최소 한 개의 코멘트 섹션을 입력해 주세요.", "sub_comments")
    if any(get_base_template(record["case_type"], unit["relatedness"]) is None for unit in record["sub_comments"]):
        raise ValidationError("케이스 유형과 판정 조합이 올바르지 않습니다.", "relatedness")
    return record


def _with_labels(record: dict) -> dict:
    """목록/상세 표시용 라벨 추가"""
    labeled = dict(record)
    labeled["case_type_label"] = format_case_type(record.get("case_type", ""), record.get("is_license_partner", False))
    labeled["relatedness_label"] = format_relatedness(record.get("relatedness", ""))
    labeled["date_label"] = format_timestamp(record.get("timestamp") or 0)
    return labeled


@router.post("/preview")
async def preview_assessment(request: AssessmentRequest):
    """저장하지 않고 통합 코멘트 생성"""
    record = _build_or_raise(request)
    return success_response(record)


@router.post("/preview/sub-comment")
async def preview_sub_comment(request: SubCommentPreviewRequest):
    """서브 코멘트 하나의 미리보기 (미완성이면 null)"""
    comment = generate_sub_comment_preview(
        request.case_type,
        request.is_license_partner,
        request.sub_comment.model_dump(),
        request.follow_up_consent,
    )
    return success_response({"comment": comment})


@router.post("")
async def create_assessment(
    request: AssessmentRequest,
    store: AssessmentStore = Depends(get_assessment_store)
):
    """통합 평가 생성 후 저장"""
    record = _build_or_raise(request)
    assessment_id = store.create(record)
    return success_response(
        {"id": assessment_id, "generated_comment": record["generated_comment"]},
        "평가가 저장되었습니다."
    )


@router.get("")
async def list_assessments(
    search: str = "",
    relatedness: str = "",
    pages: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    store: AssessmentStore = Depends(get_assessment_store)
):
    """검색/필터/페이지 적용 목록"""
    filtered = record_query.filter_assessments(store.list_all(), search, relatedness)
    page = record_query.paginate(filtered, pages, page_size)
    return list_response(
        [_with_labels(record) for record in page.items],
        page.total,
        visible_pages=page.visible_pages,
        page_size=page.page_size,
        has_more=page.has_more,
    )


@router.get("/options")
async def get_form_options():
    """폼 선택지: 케이스 유형별 판정, 판정별 근거 키"""
    case_types = [
        {
            "value": case_type.value,
            "label": format_case_type(case_type.value),
            "relatedness": [
                {"value": relatedness.value, "label": format_relatedness(relatedness.value)}
                for relatedness in templates
            ],
        }
        for case_type, templates in COMMENT_TEMPLATES.items()
    ]
    justifications = {
        relatedness: get_allowed_justifications(relatedness)
        for relatedness in JUSTIFIABLE_RELATEDNESS
    }
    return success_response({"case_types": case_types, "justifications": justifications})


@router.get("/latest")
async def list_latest_per_case(store: AssessmentStore = Depends(get_assessment_store)):
    """케이스별 최신 평가 기록"""
    cases = store.list_latest_per_case()
    return list_response(cases, len(cases))


@router.get("/case-ids")
async def search_case_ids(q: str = "", store: AssessmentStore = Depends(get_assessment_store)):
    """케이스 ID 자동완성"""
    cases = store.search_case_ids(q)
    return list_response(cases, len(cases))


@router.get("/export")
async def export_assessments(
    format: ExportFormat = ExportFormat.CSV,
    store: AssessmentStore = Depends(get_assessment_store)
):
    """전체 평가 기록 내보내기"""
    records = store.list_all()
    if format == ExportFormat.JSON:
        content, media_type = export_assessments_json(records), "application/json"
    else:
        content, media_type = export_assessments_csv(records), "text/csv"

    logger.info(f"평가 기록 내보내기: {len(records)}건 ({format.value})")
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="assessments.{format.value}"'}
    )


@router.post("/import")
async def import_assessments(
    request: Request,
    format: ExportFormat = ExportFormat.CSV,
    store: AssessmentStore = Depends(get_assessment_store)
):
    """CSV/JSON 평가 기록 가져오기 (잘못된 행은 건너뜀)"""
    text = (await request.body()).decode("utf-8")
    if format == ExportFormat.JSON:
        result = import_assessments_json(text, store)
    else:
        result = import_assessments_csv(text, store)
    return success_response(
        {"imported": result.imported, "skipped": result.skipped},
        result.message
    )


@router.get("/{assessment_id}")
async def get_assessment(assessment_id: int, store: AssessmentStore = Depends(get_assessment_store)):
    """평가 기록 상세"""
    record = store.get_by_id(assessment_id)
    if record is None:
        raise AssessmentNotFoundError(assessment_id)
    return success_response(_with_labels(record))


@router.get("/{assessment_id}/form")
async def get_assessment_form(assessment_id: int, store: AssessmentStore = Depends(get_assessment_store)):
    """이전 평가로 폼 채우기 (서브 코멘트 복원)"""
    record = store.get_by_id(assessment_id)
    if record is None:
        raise AssessmentNotFoundError(assessment_id)
    return success_response({
        "case_id": record["case_id"],
        "case_type": record["case_type"],
        "is_license_partner": record["is_license_partner"],
        "follow_up_consent": record["follow_up_consent"],
        "sub_comments": hydrate_sub_comments(record),
    })


@router.delete("/{assessment_id}")
async def delete_assessment(assessment_id: int, store: AssessmentStore = Depends(get_assessment_store)):
    """평가 기록 삭제"""
    if not store.delete(assessment_id):
        raise AssessmentNotFoundError(assessment_id)
    return success_response({"id": assessment_id}, "평가가 삭제되었습니다.")
