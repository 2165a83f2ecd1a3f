# storefront/utils/logging.py
import logging
import sys

from storefront.utils.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """
    Jedna konfiguracja logowania dla calej aplikacji (stdout, kompatybilne z Dockerem).
    Wywolywana raz, kolejne wywolania nic nie robia.
    """
    global _configured
    if _configured:
        return

    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # mniej szumu z bibliotek zewnetrznych
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("celery").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
