"""
응답 포맷 함수 단위 테스트
"""
from src.utils.response import success_response, error_response, list_response


def test_success_response():
    """성공 응답 테스트"""
    response = success_response({"id": 1}, "저장 완료")
    assert response["success"] is True
    assert response["data"] == {"id": 1}
    assert response["error"] is None
    assert response["message"] == "저장 완료"


def test_success_response_without_message():
    """메시지 없는 성공 응답 테스트"""
    response = success_response({"id": 1})
    assert response["success"] is True
    assert "message" not in response


def test_list_response():
    """목록 응답 테스트"""
    response = list_response(["a", "b"], 5, has_more=True)
    assert response["data"]["items"] == ["a", "b"]
    assert response["data"]["total"] == 5
    assert response["data"]["has_more"] is True


def test_error_response():
    """에러 응답 테스트"""
    response = error_response("VALIDATION_ERROR", "검증 실패", {"field": "case_type"})
    assert response["success"] is False
    assert response["data"] is None
    assert response["error"]["code"] == "VALIDATION_ERROR"
    assert response["error"]["details"] == {"field": "case_type"}
