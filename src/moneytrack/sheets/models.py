"""SQLAlchemy models for database-backed sheets."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class SheetColumn(Base):
    """One header cell of a named sheet."""

    __tablename__ = "sheet_columns"

    id = Column(Integer, primary_key=True)
    sheet_name = Column(String, nullable=False)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("sheet_name", "position", name="uq_sheet_column_position"),)


class SheetRow(Base):
    """One data row of a named sheet; cells are stored in header order."""

    __tablename__ = "sheet_rows"

    id = Column(Integer, primary_key=True)
    sheet_name = Column(String, nullable=False, index=True)
    cells = Column(JSON, nullable=False)
    appended_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
