from sqlalchemy import Column, Integer, String, Text
from app.databases.jobs import JobsBase


class DeckModel(JobsBase):
    __tablename__ = "decks"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    deck_id = Column(String, unique=True, nullable=False, index=True)
    cards = Column(Text, nullable=False, default="[]")
    mcqs = Column(Text, nullable=False, default="[]")
    # title, level, subject, createdAt, plan7d, ...
    extra = Column(Text, nullable=False, default="{}")
