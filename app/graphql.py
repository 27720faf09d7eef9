import strawberry
from typing import List, Optional
from fastapi import Request
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info


def _as_str(value) -> Optional[str]:
    return str(value) if value is not None else None


def _as_float(value) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


@strawberry.type
class Card:
    question: str
    answer: str


@strawberry.type
class Choice:
    label: str
    text: str


@strawberry.type
class Mcq:
    stem: str
    choices: List[Choice]
    correct_label: str
    explanation: str


@strawberry.type
class Deck:
    id: str
    cards: List[Card]
    mcqs: List[Mcq]

    @classmethod
    def from_record(cls, deck: dict) -> "Deck":
        return cls(
            id=deck["id"],
            cards=[Card(question=c.get("question", ""), answer=c.get("answer", "")) for c in deck.get("cards", [])],
            mcqs=[
                Mcq(
                    stem=m.get("stem", ""),
                    choices=[Choice(label=c.get("label", ""), text=c.get("text", "")) for c in m.get("choices", [])],
                    correct_label=m.get("correctLabel", ""),
                    explanation=m.get("explanation", ""),
                )
                for m in deck.get("mcqs", [])
            ],
        )


@strawberry.type
class Job:
    job_id: str
    status: Optional[str]
    stage: Optional[str]
    progress: Optional[float]
    deck_id: Optional[str]
    error: Optional[str]
    # epoch milliseconds overflow GraphQL Int
    created_at: Optional[float]
    updated_at: Optional[float]

    @classmethod
    def from_record(cls, job: dict) -> "Job":
        # Job fields other than jobId are opaque; coerce what the schema can show
        return cls(
            job_id=job["jobId"],
            status=_as_str(job.get("status")),
            stage=_as_str(job.get("stage")),
            progress=_as_float(job.get("progress")),
            deck_id=_as_str(job.get("deckId")),
            error=_as_str(job.get("error")),
            created_at=_as_float(job.get("createdAt")),
            updated_at=_as_float(job.get("updatedAt")),
        )


# Read-only: mutations go through the REST routers
@strawberry.type
class Query:
    @strawberry.field
    def jobs(self, info: Info) -> List[Job]:
        return [Job.from_record(j) for j in info.context["stores"].jobs.list()]

    @strawberry.field
    def job(self, info: Info, job_id: str) -> Optional[Job]:
        job = info.context["stores"].jobs.get(job_id)
        return Job.from_record(job) if job else None

    @strawberry.field
    def deck(self, info: Info, id: str) -> Optional[Deck]:
        deck = info.context["stores"].decks.get(id)
        return Deck.from_record(deck) if deck else None


def get_context(request: Request):
    return {"stores": request.app.state.stores}


schema = strawberry.Schema(query=Query)
graphql_app = GraphQLRouter(schema, context_getter=get_context)
