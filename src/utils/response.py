"""
공통 응답 포맷 함수
"""
from typing import Any, Optional, Dict, List


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """
    성공 응답 생성

    Args:
        data: 응답 데이터
        message: 응답 메시지 (예: 가져오기 결과 안내)

    Returns:
        성공 응답 딕셔너리
    """
    response = {
        "success": True,
        "data": data,
        "error": None
    }

    if message:
        response["message"] = message

    return response


def list_response(items: List[Any], total: int, **extra: Any) -> Dict[str, Any]:
    """
    목록 응답 생성

    Args:
        items: 현재 보이는 항목
        total: 필터 적용 후 전체 개수
        extra: 페이지 정보 등 추가 필드

    Returns:
        성공 응답 딕셔너리
    """
    data = {"items": items, "total": total}
    data.update(extra)
    return success_response(data)


def error_response(
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    에러 응답 생성

    Args:
        code: 에러 코드
        message: 에러 메시지
        details: 추가 상세 정보

    Returns:
        에러 응답 딕셔너리
    """
    return {
        "success": False,
        "data": None,
        "error": {
            "code": code,
            "message": message,
            "details": details
        }
    }
