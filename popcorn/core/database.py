"""Database setup for Popcorn Movies using SQLModel."""

from sqlmodel import Field, SQLModel, create_engine
from popcorn.core.config import get_settings

settings = get_settings()

# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    connect_args={"check_same_thread": False},  # Needed for SQLite
)


class StoredValue(SQLModel, table=True):
    """One key of the persistent key-value store."""

    __tablename__ = "stored_value"

    key: str = Field(primary_key=True)
    value: str
