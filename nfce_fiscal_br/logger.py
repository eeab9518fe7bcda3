import sys
import logging

from loguru import logger


class InterceptHandler(logging.Handler):
    """Encaminha registros do logging padrão para o loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str = None):
    """Configura o loguru e roteia o logging padrão para ele."""
    if level is None:
        from nfce_fiscal_br.config import get_settings
        level = get_settings().log_level

    logger.remove()
    logger.add(sys.stdout, level=level, backtrace=True, diagnose=False)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logger.debug("Logging configurado (level={})", level)
    return logger
