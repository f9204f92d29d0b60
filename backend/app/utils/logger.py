import logging
import sys
from typing import Optional
from app.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    콘솔 로거 설정 (레벨 기본값: LOG_LEVEL 설정)

    "app" 아래 모듈 로거(logging.getLogger(__name__))는 상위로 전파되어 같은 핸들러로 출력됩니다.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:  # 중복 핸들러 방지
        configured = logging.getLevelName(settings.LOG_LEVEL.upper())
        logger.setLevel(level or (configured if isinstance(configured, int) else logging.INFO))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(console_handler)

    return logger

# 기본 로거들
app_logger = setup_logger("app")
# 서비스/연동 로거는 "app" 하위라 별도 핸들러 없이 전파
post_logger = logging.getLogger("app.post")
client_logger = logging.getLogger("app.client")
