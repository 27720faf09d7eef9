from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional
import copy
import time


class ConflictError(Exception):
    """Raised when a record with the same identifier already exists."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} '{record_id}' already exists")
        self.kind = kind
        self.record_id = record_id


def now_ms() -> int:
    return int(time.time() * 1000)


def next_updated_at(previous: Optional[int]) -> int:
    # updatedAt must strictly increase even when the clock hasn't moved
    now = now_ms()
    if isinstance(previous, (int, float)) and now <= previous:
        return int(previous) + 1
    return now


def merge_patch(record: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge: patch fields win, untouched fields are kept.
    jobId and createdAt never change once the job exists.
    """
    merged = {**record, **copy.deepcopy(patch)}
    merged["jobId"] = record["jobId"]
    if "createdAt" in record:
        merged["createdAt"] = record["createdAt"]
    merged["updatedAt"] = next_updated_at(record.get("updatedAt"))
    return merged


def prepare_new_job(job: Dict[str, Any]) -> Dict[str, Any]:
    job_id = job.get("jobId")
    if not job_id or not isinstance(job_id, str):
        raise ValueError("job.jobId is required")

    record = copy.deepcopy(job)
    record.setdefault("createdAt", now_ms())
    record.setdefault("updatedAt", record["createdAt"])
    return record


def prepare_new_deck(deck: Dict[str, Any]) -> Dict[str, Any]:
    deck_id = deck.get("id")
    if not deck_id or not isinstance(deck_id, str):
        raise ValueError("deck.id is required")

    record = copy.deepcopy(deck)
    record.setdefault("cards", [])
    record.setdefault("mcqs", [])
    return record


class JobStore(ABC):
    @abstractmethod
    def create(self, job: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def update(self, job_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def get(self, job_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def list(self) -> List[Dict[str, Any]]:
        ...


class DeckStore(ABC):
    @abstractmethod
    def save(self, deck: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def get(self, deck_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def list(self) -> List[Dict[str, Any]]:
        ...
