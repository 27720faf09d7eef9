from sqlalchemy import Column, Integer, BigInteger, String, Text
from app.databases.jobs import JobsBase


class JobModel(JobsBase):
    __tablename__ = "jobs"

    # Insertion sequence, newest-first listing orders by it descending
    seq = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(String, unique=True, nullable=False, index=True)
    status = Column(String)
    created_at = Column(BigInteger)
    updated_at = Column(BigInteger)
    # Every other job field (stage, progress, deckId, error, ...) as a JSON object
    data = Column(Text, nullable=False, default="{}")
