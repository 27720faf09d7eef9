from enum import Enum
from typing import Any, Optional

from .common import StoreModel


class JobStatus(str, Enum):
    """Job lifecycle states. The stores accept any value; workers drive the transitions."""
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


# Only the identifier is typed; stage, progress, deckId, timestamps and any
# other patch data are opaque and pass through as extra fields.
class JobSchema(StoreModel):
    job_id: str
    status: Any = None


class JobCreateSchema(StoreModel):
    # Generated when omitted
    job_id: Optional[str] = None
    status: Any = JobStatus.QUEUED.value
