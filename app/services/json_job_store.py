import copy
import threading
from pathlib import Path
from typing import Dict, Any, List, Optional

from core.logging_manager import setup_loggers
from core.persistence import load_json, save_json
from .job_store import (
    JobStore,
    DeckStore,
    ConflictError,
    merge_patch,
    prepare_new_job,
    prepare_new_deck,
)

success_logger, fail_logger = setup_loggers(logger_name="json_job_store")


class _JsonCollection:
    """
    Newest-first list of records mirrored to a single JSON file.

    Mutations run under a lock and build a new list, which replaces the
    in-memory one only after it has been written to disk.
    """

    def __init__(self, path, key: str):
        self.path = Path(path)
        self.key = key
        self._lock = threading.Lock()
        records = load_json(self.path, [])
        self._records: List[Dict[str, Any]] = [r for r in records if isinstance(r, dict)]
        success_logger.info(f"Loaded {len(self._records)} records from {self.path}")

    def _index(self, record_id: str) -> int:
        for i, record in enumerate(self._records):
            if record.get(self.key) == record_id:
                return i
        return -1

    def find(self, record_id: str) -> Optional[Dict[str, Any]]:
        records = self._records
        for record in records:
            if record.get(self.key) == record_id:
                return copy.deepcopy(record)
        return None

    def all(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._records)

    def prepend(self, record: Dict[str, Any], kind: str) -> Dict[str, Any]:
        with self._lock:
            if self._index(record[self.key]) != -1:
                raise ConflictError(kind, record[self.key])
            records = [record] + self._records
            save_json(self.path, records)
            self._records = records
        return copy.deepcopy(record)

    def patch(self, record_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            idx = self._index(record_id)
            if idx == -1:
                return None
            merged = merge_patch(self._records[idx], patch)
            records = list(self._records)
            records[idx] = merged
            save_json(self.path, records)
            self._records = records
        return copy.deepcopy(merged)


class JsonJobStore(JobStore):
    def __init__(self, path):
        self._jobs = _JsonCollection(path, key="jobId")

    def create(self, job: Dict[str, Any]) -> Dict[str, Any]:
        record = prepare_new_job(job)
        try:
            stored = self._jobs.prepend(record, kind="Job")
        except ConflictError:
            fail_logger.error(f"Rejected duplicate job {record['jobId']}")
            raise
        success_logger.info(f"Created job {record['jobId']} ({record.get('status')})")
        return stored

    def update(self, job_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        merged = self._jobs.patch(job_id, patch)
        if merged is None:
            success_logger.info(f"Update skipped, job {job_id} not found")
        return merged

    def get(self, job_id: str) -> Optional[Dict[str, Any]]:
        return self._jobs.find(job_id)

    def list(self) -> List[Dict[str, Any]]:
        return self._jobs.all()


class JsonDeckStore(DeckStore):
    def __init__(self, path):
        self._decks = _JsonCollection(path, key="id")

    def save(self, deck: Dict[str, Any]) -> Dict[str, Any]:
        record = prepare_new_deck(deck)
        try:
            stored = self._decks.prepend(record, kind="Deck")
        except ConflictError:
            fail_logger.error(f"Rejected duplicate deck {record['id']}")
            raise
        success_logger.info(
            f"Saved deck {record['id']} ({len(record['cards'])} cards, {len(record['mcqs'])} mcqs)"
        )
        return stored

    def get(self, deck_id: str) -> Optional[Dict[str, Any]]:
        return self._decks.find(deck_id)

    def list(self) -> List[Dict[str, Any]]:
        return self._decks.all()
