"""Database Models 모듈"""

from src.db.models.assessment import Assessment
from src.db.models.vocabulary import Product, Event

__all__ = [
    "Assessment",
    "Product",
    "Event",
]
