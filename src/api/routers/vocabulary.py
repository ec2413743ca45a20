"""
용어 사전(제품명/이벤트명) API 라우터
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from src.api.deps import get_vocabulary_store
from src.services.import_export import (
    export_vocabulary_csv,
    export_vocabulary_json,
    import_vocabulary_csv,
    import_vocabulary_json,
)
from src.services.vocabulary_store import VocabularyStore
from src.utils.constants import ExportFormat
from src.utils.response import success_response, list_response

router = APIRouter(prefix="/vocabulary", tags=["vocabulary"])


@router.get("/{kind}")
async def search_vocabulary(q: str = "", vocabulary: VocabularyStore = Depends(get_vocabulary_store)):
    """자동완성 후보 검색 (빈 검색어는 전체)"""
    names = vocabulary.search(q)
    return list_response(names, len(names))


@router.get("/{kind}/export")
async def export_vocabulary(
    format: ExportFormat = ExportFormat.CSV,
    vocabulary: VocabularyStore = Depends(get_vocabulary_store)
):
    """용어 사전 내보내기"""
    names = vocabulary.list_all_sorted()
    if format == ExportFormat.JSON:
        content, media_type = export_vocabulary_json(names), "application/json"
    else:
        content, media_type = export_vocabulary_csv(names), "text/csv"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{vocabulary.kind}s.{format.value}"'}
    )


@router.post("/{kind}/import")
async def import_vocabulary(
    request: Request,
    format: ExportFormat = ExportFormat.CSV,
    vocabulary: VocabularyStore = Depends(get_vocabulary_store)
):
    """용어 사전 가져오기"""
    text = (await request.body()).decode("utf-8")
    if format == ExportFormat.JSON:
        result = import_vocabulary_json(text, vocabulary)
    else:
        result = import_vocabulary_csv(text, vocabulary)
    return success_response(
        {"imported": result.imported, "skipped": result.skipped},
        result.message
    )
