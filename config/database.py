from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from config.settings import settings

DATABASE_URL = settings.DATABASE_URL


def build_engine(url: str = DATABASE_URL, **overrides):
    """
    Create an engine for the given URL. SQLite gets a thread-tolerant
    connection, PostgreSQL gets the pooled settings.
    """
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
    else:
        options = {
            # Connection pooling settings
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_pre_ping": True,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "connect_args": {"options": "-c timezone=utc"},
        }
    options.update(overrides)
    return create_engine(url, echo=settings.DEBUG, **options)


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
