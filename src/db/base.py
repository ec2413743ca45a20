"""
데이터베이스 Base 클래스
"""
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class BaseModel(Base):
    """기본 모델 클래스"""
    __abstract__ = True

    def to_dict(self):
        """모델을 딕셔너리로 변환"""
        return {
            column.name: getattr(self, column.name)
            for column in self.__table__.columns
        }
