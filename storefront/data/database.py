# storefront/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from storefront.utils.settings import DATABASE_URL
from storefront.utils.retry import db_retry
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def dialect_insert(db: Session, model):
    """
    INSERT with ON CONFLICT support for the dialect the session is bound to.
    Only PostgreSQL and SQLite are supported.
    """
    name = db.get_bind().dialect.name
    if name == "postgresql":
        return postgresql.insert(model)
    if name == "sqlite":
        return sqlite.insert(model)
    raise RuntimeError(f"Upsert not supported for dialect {name}")


@db_retry()
def init_db():
    #models must be imported before create_all so they are in Base.metadata
    import storefront.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database ready, tables: {sorted(Base.metadata.tables)}")
