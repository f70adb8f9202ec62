"""
logging_config.py

애플리케이션 로깅 초기화.

- 표준 logging 모듈을 사용하며, 각 모듈은 logging.getLogger(__name__)으로 로거를 얻는다.
- 서버 기동 시 한 번만 호출된다 (app.main lifespan).
- 현재 실행 환경(dev / prod / test)을 배너 형태로 남긴다.

"""

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
    log_environment_banner()


def log_environment_banner() -> None:
    env = settings.ENVIRONMENT.lower()

    logger.info("=" * 50)
    if env == "prod":
        logger.info("MORAGO Backend - PRODUCTION MODE")
    elif env == "test":
        logger.info("MORAGO Backend - TEST MODE")
    else:
        logger.info("MORAGO Backend - DEVELOPMENT MODE")
        logger.info("Swagger UI available at: /docs")
    logger.info("=" * 50)
    logger.info("Environment: %s, log level: %s", env, settings.LOG_LEVEL.upper())
