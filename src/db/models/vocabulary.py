"""
Product / Event 용어 사전 모델
"""
from sqlalchemy import Column, String
from src.db.base import BaseModel


class Product(BaseModel):
    """제품명 사전 테이블 (이름이 유일 키)"""
    __tablename__ = "product"

    name = Column(String(255), primary_key=True)


class Event(BaseModel):
    """이벤트명 사전 테이블 (이름이 유일 키)"""
    __tablename__ = "event"

    name = Column(String(255), primary_key=True)
