# yardview/core/logging_config.py
import logging

from yardview.core.config import get_settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = None) -> None:
    """Configurar logging una sola vez (API y scripts)"""
    settings = get_settings()
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT
    )
