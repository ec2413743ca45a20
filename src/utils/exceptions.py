"""
커스텀 예외 클래스 정의
"""


class AssessmentAppError(Exception):
    """기본 예외 클래스"""
    pass


class AssessmentNotFoundError(AssessmentAppError):
    """평가 기록을 찾을 수 없을 때 발생하는 예외"""
    def __init__(self, assessment_id: int):
        self.assessment_id = assessment_id
        super().__init__(f"평가 기록을 찾을 수 없습니다: {assessment_id}")


class InvalidInputError(AssessmentAppError):
    """잘못된 입력일 때 발생하는 예외"""
    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(f"잘못된 입력: {message}")


class DatabaseError(AssessmentAppError):
    """데이터베이스 오류 시 발생하는 예외"""
    def __init__(self, message: str):
        super().__init__(f"데이터베이스 오류: {message}")


class ValidationError(AssessmentAppError):
    """검증 실패 시 발생하는 예외"""
    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(f"검증 실패: {message}")


class ImportParseError(AssessmentAppError):
    """가져오기 행 파싱 실패 시 발생하는 예외"""
    def __init__(self, message: str, row: int = None):
        self.row = row
        super().__init__(f"가져오기 파싱 오류: {message}")
