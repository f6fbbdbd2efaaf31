from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from library_api.config import settings

engine = create_engine(settings.database_url, echo=settings.database_echo, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


class Base(DeclarativeBase):
    """Declarative base for the author and book tables."""
