"""Process entrypoint: `python -m exercise_tracker`.

Connects to the database once before serving; if that first connection
fails the process exits with status 1.
"""

import logging
import sys

import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .database import check_connection, create_db_and_tables, engine

logger = logging.getLogger("exercise_tracker")


def main() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL)
    try:
        check_connection()
        create_db_and_tables()
    except SQLAlchemyError:
        logger.exception("could not connect to database")
        engine.dispose()
        sys.exit(1)
    logger.info("connected to database, ready")
    uvicorn.run("exercise_tracker.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
