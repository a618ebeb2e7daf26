"""Process startup: open the store and make sure the schema exists."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from courseload.db.database import Database

logger = logging.getLogger(__name__)


def open_store(path: Optional[Path | str] = None) -> Database:
    """
    Open the database (with retry) and create the schema.

    ``ConnectionFailure`` and ``SchemaInitError`` propagate; startup should
    stop on either.
    """
    db = Database(path=path)
    db.open()
    db.init()
    logger.info(f"Course store ready at {db.path}")
    return db
