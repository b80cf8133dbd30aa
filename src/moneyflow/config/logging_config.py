"""Logging configuration."""

import logging
import sys
from typing import Optional

from moneyflow.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure application logging to stdout.

    ``level`` overrides ``Settings.log_level``. Ledger modules log under the
    ``moneyflow`` logger; SQLAlchemy is kept at WARNING so statement echo never
    floods the output.
    """
    level_name = (level or get_settings().log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger("moneyflow").setLevel(level_name)
    for name in ("sqlalchemy.engine", "sqlalchemy.pool"):
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
