"""
Plain-text renderers for a stored deck. Pure functions, no store access.
"""
import json
from typing import Dict, Any


def _clean_field(value) -> str:
    # Tabs would break the TSV columns
    return str(value or "").replace("\t", "    ").strip()


def deck_to_tsv(deck: Dict[str, Any]) -> str:
    """One ``question<TAB>answer`` line per card (Anki import format)."""
    lines = [
        f"{_clean_field(card.get('question'))}\t{_clean_field(card.get('answer'))}"
        for card in deck.get("cards", [])
    ]
    return "\n".join(lines)


def deck_to_json(deck: Dict[str, Any]) -> str:
    return json.dumps(deck, indent=2, ensure_ascii=False)


def deck_to_quiz_text(deck: Dict[str, Any]) -> str:
    blocks = []
    for i, mcq in enumerate(deck.get("mcqs", []), start=1):
        choices = "\n".join(f"{c.get('label')}. {c.get('text')}" for c in mcq.get("choices", []))
        blocks.append(
            f"Q{i}. {mcq.get('stem', '')}\n"
            f"{choices}\n"
            f"Answer: {mcq.get('correctLabel', '')}\n"
            f"Explanation: {mcq.get('explanation', '')}\n"
        )
    return "\n---\n\n".join(blocks)


# format -> (renderer, media type, file extension)
EXPORTERS = {
    "tsv": (deck_to_tsv, "text/tab-separated-values", "tsv"),
    "json": (deck_to_json, "application/json", "json"),
    "quiz": (deck_to_quiz_text, "text/plain", "txt"),
}
