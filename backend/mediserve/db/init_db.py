"""Create all tables. Run on app startup."""
import logging

from mediserve.db.base import Base
from mediserve.db.session import engine
from mediserve.models import user, pharmacy, medicine, notification, prescription  # noqa: F401 - register models

logger = logging.getLogger(__name__)


def init_db(bind=None):
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")
