from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

JobsBase = declarative_base()


def make_session_factory(db_path):
    """
    Build an engine + session factory for the SQLite store file and
    create the jobs/decks tables if they don't exist yet.
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    # Build a proper SQLAlchemy SQLite URL
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False}
    )

    # Tables are registered on JobsBase when the models are imported
    from app.models import jobs, decks  # noqa: F401
    JobsBase.metadata.create_all(bind=engine)

    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
