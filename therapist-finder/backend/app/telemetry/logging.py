"""
Configuración de logging estructurado.
- Nivel INFO por defecto; LOG_LEVEL lo cambia.
- Formato con timestamps y nombre del logger.
- Integra con Uvicorn (hereda handlers) para no duplicar.
"""
import logging

from ..core.config import settings


def setup_logging(level: str | None = None) -> None:
    level = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    # Ajusta loggers de uvicorn para no duplicar formato
    for uv_logger in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(uv_logger).setLevel(level)
    # pymongo es muy verboso en DEBUG
    logging.getLogger("pymongo").setLevel(max(logging.getLogger().level, logging.INFO))
