from typing import List

from .common import StoreModel


class CardSchema(StoreModel):
    question: str
    answer: str


class ChoiceSchema(StoreModel):
    label: str
    text: str


class McqSchema(StoreModel):
    stem: str
    choices: List[ChoiceSchema] = []
    correct_label: str
    explanation: str = ""


class DeckSchema(StoreModel):
    id: str
    cards: List[CardSchema] = []
    mcqs: List[McqSchema] = []
