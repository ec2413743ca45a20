"""
애플리케이션 설정 관리 모듈
"""
from pydantic_settings import BaseSettings
from typing import List
from dotenv import load_dotenv

# 환경 변수 로드
load_dotenv(encoding='utf-8')


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # Database
    database_url: str = "sqlite:///./assessments.db"
    database_echo: bool = False

    # Comment Templates
    company_name: str = "Similares"
    generic_company_name: str = "The company"

    # Record Listing
    page_size: int = 20

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_file_path: str = "./logs/app.log"

    # Environment
    environment: str = "development"

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:8080"

    @property
    def cors_origins_list(self) -> List[str]:
        """CORS Origins를 리스트로 변환"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# 전역 설정 인스턴스
settings = Settings()
