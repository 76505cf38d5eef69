"""
Domain model for a stored movie quote.

``Quote`` is an immutable value: the store assigns ``id`` by building
a copy with :func:`dataclasses.replace`, and updates replace the whole
record.  Instances are hashable and compare by all fields, which the
intersection search relies on.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Quote:
    text: str
    character: str
    movie_title: str
    release_year: int
    id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
