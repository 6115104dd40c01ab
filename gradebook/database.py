from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from gradebook.settings import settings

# Base for models
Base = declarative_base()


def build_engine(db_url: str):
    """
    Create the SQLAlchemy engine; SQLite needs check_same_thread disabled
    because FastAPI may hand the session to a worker thread.
    """
    connect_args = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(db_url, connect_args=connect_args, echo=settings.DEBUG)


engine = build_engine(settings.DB_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    # Import models so they register on Base.metadata
    from gradebook.models import gradebook  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


# Dependency to get a DB session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
