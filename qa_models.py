from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List
import uuid


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Answer:
    """An answer to one question. Only ``votes`` changes after creation."""
    text: str
    created_by: str = "Anonymous"
    id: str = field(default_factory=_new_id)
    created_at: str = field(default_factory=_now)
    votes: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "votes": self.votes,
        }


@dataclass
class Question:
    """A question with its answers embedded, oldest answer first."""
    title: str
    description: str
    category: str = "General"
    created_by: str = "Anonymous"
    id: str = field(default_factory=_new_id)
    created_at: str = field(default_factory=_now)
    answers: List[Answer] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "answers": [a.to_dict() for a in self.answers],
        }
