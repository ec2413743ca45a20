"""
로깅 유틸리티 모듈
"""
import logging
import logging.config
import time
import functools
from pathlib import Path
from typing import Callable, Any, List
import yaml
from config.settings import settings

DEFAULT_LOGGING_CONFIG = Path(__file__).parent.parent.parent / "config" / "logging.yaml"


def setup_logging(config_path: str = None, log_to_file: bool = False) -> None:
    """
    로깅 설정 초기화

    Args:
        config_path: 로깅 설정 파일 경로 (None이면 config/logging.yaml)
        log_to_file: settings.log_file_path 파일 핸들러 추가 여부
    """
    config_file = Path(config_path) if config_path else DEFAULT_LOGGING_CONFIG

    if config_file.exists():
        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
            logging.config.dictConfig(config)
        logging.getLogger().setLevel(getattr(logging, settings.log_level.upper()))
    else:
        # 기본 로깅 설정
        logging.basicConfig(
            level=getattr(logging, settings.log_level.upper()),
            format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    if log_to_file:
        log_path = Path(settings.log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding='utf-8')
        handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        for name in _file_logger_names():
            logging.getLogger(name).addHandler(handler)


def _file_logger_names() -> List[str]:
    """파일 핸들러를 붙일 로거 이름 목록"""
    # src 로거는 propagate=False 이므로 별도로 붙인다
    return ["", "src"]


def get_logger(name: str) -> logging.Logger:
    """
    로거 획득

    Args:
        name: 로거 이름

    Returns:
        Logger 인스턴스
    """
    return logging.getLogger(name)


def log_execution_time(logger: logging.Logger = None):
    """
    함수 실행 시간 측정 데코레이터

    Args:
        logger: 로거 인스턴스 (None이면 함수 모듈명으로 로거 생성)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            log = logger if logger is not None else get_logger(func.__module__)

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                execution_time = time.time() - start_time
                log.info(
                    f"{func.__name__} 실행 완료 - 실행 시간: {execution_time:.3f}초"
                )
                return result
            except Exception as e:
                execution_time = time.time() - start_time
                log.error(
                    f"{func.__name__} 실행 실패 - 실행 시간: {execution_time:.3f}초 - 오류: {str(e)}"
                )
                raise

        return wrapper
    return decorator
