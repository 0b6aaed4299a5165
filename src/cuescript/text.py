"""Decomposition of line text into addressable elements and back.

Text is split on the single character ``" "`` with empty pieces kept, so
every space in the original survives as either a separator or an empty
``space`` element. Joining the pieces on ``" "`` restores the text exactly.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from typing import Protocol
from uuid import uuid4

from cuescript.models import ElementType, IdFactory, LineElement

SEPARATOR = " "


class PositionedText(Protocol):
    """Anything with a position and text, such as a LineElement."""

    position: int
    content: str


def is_punctuation(token: str) -> bool:
    """Return True when every character of a non-empty token is punctuation."""
    return bool(token) and all(
        unicodedata.category(char).startswith("P") for char in token
    )


def classify(token: str, classify_punctuation: bool = False) -> ElementType:
    """Return the element type for one split piece."""
    if not token:
        return ElementType.SPACE
    if classify_punctuation and is_punctuation(token):
        return ElementType.PUNCTUATION
    return ElementType.WORD


def decompose(
    content: str,
    *,
    id_factory: IdFactory = uuid4,
    classify_punctuation: bool = False,
) -> list[LineElement]:
    """Split line text into ordered elements.

    Args:
        content: Raw line text
        id_factory: Source of element ids
        classify_punctuation: Type punctuation-only pieces as ``punctuation``
            instead of ``word``

    Returns:
        Elements at positions 0..n-1 in split order
    """
    return [
        LineElement(
            id=id_factory(),
            position=index,
            content=piece,
            type=classify(piece, classify_punctuation),
        )
        for index, piece in enumerate(content.split(SEPARATOR))
    ]


def reconstruct(elements: Iterable[PositionedText]) -> str:
    """Join elements back into line text in position order."""
    ordered = sorted(elements, key=lambda element: element.position)
    return SEPARATOR.join(element.content for element in ordered)
