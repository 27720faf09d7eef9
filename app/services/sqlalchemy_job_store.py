import json
import threading
from typing import Dict, Any, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.databases.jobs import make_session_factory
from app.models.jobs import JobModel
from app.models.decks import DeckModel
from core.logging_manager import setup_loggers
from .job_store import (
    JobStore,
    DeckStore,
    ConflictError,
    merge_patch,
    prepare_new_job,
    prepare_new_deck,
)

success_logger, fail_logger = setup_loggers(logger_name="sqlalchemy_job_store")

_JOB_COLUMNS = ("jobId", "status", "createdAt", "updatedAt")
_DECK_COLUMNS = ("id", "cards", "mcqs")


def _job_to_dict(row: JobModel) -> Dict[str, Any]:
    job = {"jobId": row.job_id}
    if row.status is not None:
        job["status"] = row.status
    job.update(json.loads(row.data or "{}"))
    job["createdAt"] = row.created_at
    job["updatedAt"] = row.updated_at
    return job


def _apply_job(row: JobModel, job: Dict[str, Any]) -> None:
    row.job_id = job["jobId"]
    row.status = job.get("status")
    row.created_at = job.get("createdAt")
    row.updated_at = job.get("updatedAt")
    row.data = json.dumps({k: v for k, v in job.items() if k not in _JOB_COLUMNS}, ensure_ascii=False)


def _deck_to_dict(row: DeckModel) -> Dict[str, Any]:
    deck = {"id": row.deck_id}
    deck.update(json.loads(row.extra or "{}"))
    deck["cards"] = json.loads(row.cards or "[]")
    deck["mcqs"] = json.loads(row.mcqs or "[]")
    return deck


class SQLAlchemyJobStore(JobStore):
    def __init__(self, db_path=None, session_factory=None):
        self.SessionLocal = session_factory or make_session_factory(db_path)
        self._lock = threading.Lock()

    def create(self, job: Dict[str, Any]) -> Dict[str, Any]:
        record = prepare_new_job(job)

        with self._lock:
            db: Session = self.SessionLocal()
            try:
                row = JobModel()
                _apply_job(row, record)
                db.add(row)
                db.commit()
            except IntegrityError:
                db.rollback()
                fail_logger.error(f"Rejected duplicate job {record['jobId']}")
                raise ConflictError("Job", record["jobId"])
            finally:
                db.close()

        success_logger.info(f"Created job {record['jobId']} ({record.get('status')})")
        return record

    def update(self, job_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            db: Session = self.SessionLocal()
            try:
                row = db.query(JobModel).filter(JobModel.job_id == job_id).first()
                if not row:
                    success_logger.info(f"Update skipped, job {job_id} not found")
                    return None

                merged = merge_patch(_job_to_dict(row), patch)
                _apply_job(row, merged)
                db.commit()
                return merged
            finally:
                db.close()

    def get(self, job_id: str) -> Optional[Dict[str, Any]]:
        db: Session = self.SessionLocal()
        try:
            row = db.query(JobModel).filter(JobModel.job_id == job_id).first()
            return _job_to_dict(row) if row else None
        finally:
            db.close()

    def list(self) -> List[Dict[str, Any]]:
        db: Session = self.SessionLocal()
        try:
            rows = db.query(JobModel).order_by(JobModel.seq.desc()).all()
            return [_job_to_dict(row) for row in rows]
        finally:
            db.close()


class SQLAlchemyDeckStore(DeckStore):
    def __init__(self, db_path=None, session_factory=None):
        self.SessionLocal = session_factory or make_session_factory(db_path)
        self._lock = threading.Lock()

    def save(self, deck: Dict[str, Any]) -> Dict[str, Any]:
        record = prepare_new_deck(deck)

        with self._lock:
            db: Session = self.SessionLocal()
            try:
                row = DeckModel(
                    deck_id=record["id"],
                    cards=json.dumps(record["cards"], ensure_ascii=False),
                    mcqs=json.dumps(record["mcqs"], ensure_ascii=False),
                    extra=json.dumps(
                        {k: v for k, v in record.items() if k not in _DECK_COLUMNS},
                        ensure_ascii=False,
                    ),
                )
                db.add(row)
                db.commit()
            except IntegrityError:
                db.rollback()
                fail_logger.error(f"Rejected duplicate deck {record['id']}")
                raise ConflictError("Deck", record["id"])
            finally:
                db.close()

        success_logger.info(
            f"Saved deck {record['id']} ({len(record['cards'])} cards, {len(record['mcqs'])} mcqs)"
        )
        return record

    def get(self, deck_id: str) -> Optional[Dict[str, Any]]:
        db: Session = self.SessionLocal()
        try:
            row = db.query(DeckModel).filter(DeckModel.deck_id == deck_id).first()
            return _deck_to_dict(row) if row else None
        finally:
            db.close()

    def list(self) -> List[Dict[str, Any]]:
        db: Session = self.SessionLocal()
        try:
            rows = db.query(DeckModel).order_by(DeckModel.seq.desc()).all()
            return [_deck_to_dict(row) for row in rows]
        finally:
            db.close()
