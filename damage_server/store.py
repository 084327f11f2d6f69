import logging
from typing import Any, Dict, List

from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError

from .assets import AssetKind
from .db import make_engine, make_session_factory
from .errors import StorageError
from .models import Base

logger = logging.getLogger(__name__)


def row_to_dict(kind: AssetKind, row) -> Dict[str, Any]:
    return {col: getattr(row, col) for col in kind.columns}


class ReportStore:
    """Append-only access to the report tables.

    One store is opened per application. Call ``ensure_schema`` once at
    startup and ``close`` at shutdown.
    """

    def __init__(self, db_uri: str, echo: bool = False):
        self.db_uri = db_uri
        self.engine = make_engine(db_uri, echo=echo)
        self.SessionLocal = make_session_factory(self.engine)

    def ensure_schema(self) -> None:
        try:
            with self.engine.begin() as conn:
                Base.metadata.create_all(bind=conn)
        except SQLAlchemyError as e:
            logger.error("Database setup error: %s", e)
            raise StorageError(str(e)) from e
        logger.info("Database initialized successfully (%s)", self.db_uri)

    def add(self, kind: AssetKind, asset_number: str, damage: str, location: str, image_path: str) -> Dict[str, Any]:
        try:
            with self.SessionLocal() as ses:
                row = kind.new_row(asset_number, damage, location, image_path)
                ses.add(row)
                ses.commit()
                ses.refresh(row)
                return row_to_dict(kind, row)
        except SQLAlchemyError as e:
            logger.error("Database insert error (%s): %s", kind.name, e)
            raise StorageError(str(e)) from e

    def list(self, kind: AssetKind) -> List[Dict[str, Any]]:
        model = kind.model
        stmt = select(model)
        if kind.discriminator is not None:
            stmt = stmt.where(model.type == kind.discriminator)
        stmt = stmt.order_by(desc(model.timestamp), desc(model.id))
        try:
            with self.SessionLocal() as ses:
                rows = ses.execute(stmt).scalars().all()
                return [row_to_dict(kind, r) for r in rows]
        except SQLAlchemyError as e:
            logger.error("Error fetching %s reports: %s", kind.name, e)
            raise StorageError(str(e)) from e

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")
