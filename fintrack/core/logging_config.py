import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Базовая настройка логирования приложения"""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQL пишет сам движок при database_echo
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
