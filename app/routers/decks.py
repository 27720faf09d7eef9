from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from app.schemas.decks import DeckSchema
from app.services.export import EXPORTERS
from app.services.job_manager import Stores
from app.services.job_store import ConflictError
from .dependencies import get_stores

router = APIRouter(prefix="/decks", tags=["decks"])


@router.get("/", response_model=List[DeckSchema])
def list_decks(stores: Stores = Depends(get_stores)):
    return stores.decks.list()


@router.post("/", response_model=DeckSchema, status_code=201)
def post_deck(deck: DeckSchema, stores: Stores = Depends(get_stores)):
    try:
        return stores.decks.save(deck.model_dump(by_alias=True))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/{deck_id}", response_model=DeckSchema)
def get_deck(deck_id: str, stores: Stores = Depends(get_stores)):
    deck = stores.decks.get(deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    return deck


@router.get("/{deck_id}/export")
def export_deck(
    deck_id: str,
    format: str = Query("tsv", pattern="^(tsv|json|quiz)$"),
    stores: Stores = Depends(get_stores),
):
    """
    Render a deck as Anki TSV, JSON, or quiz text.
    """
    deck = stores.decks.get(deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")

    render, media_type, extension = EXPORTERS[format]
    return Response(
        content=render(deck),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{deck_id}.{extension}"'},
    )
