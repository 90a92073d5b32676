"""Plain course and item records shared by the store, the engine and file transfer"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from gradegoal.utils.constants import DEFAULT_TARGET
from gradegoal.utils.helpers import clamp_percent, new_id


@dataclass(frozen=True)
class Item:
    """One gradeable component; None means the weight or score is unset"""
    id: str
    name: str = ""
    weight: Optional[float] = None
    score: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "weight": "" if self.weight is None else self.weight,
            "score": "" if self.score is None else self.score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], id_factory: Callable[[], str] = new_id) -> "Item":
        item_id = data.get("id")
        return cls(
            id=str(item_id) if item_id else id_factory(),
            name=str(data.get("name") or ""),
            weight=clamp_percent(data.get("weight")),
            score=clamp_percent(data.get("score")),
        )


@dataclass(frozen=True)
class Course:
    """A named, ordered collection of items plus a target grade"""
    id: str
    name: str = ""
    target: Optional[float] = DEFAULT_TARGET
    items: Tuple[Item, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "target": "" if self.target is None else self.target,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], id_factory: Callable[[], str] = new_id) -> "Course":
        """
        Build a course from a decoded JSON object

        Blank or non-numeric weights, scores and targets become None and
        numeric values are clamped to [0, 100]. Missing ids are generated.
        """
        course_id = data.get("id")
        raw_items = data.get("items")
        if not isinstance(raw_items, list):
            raw_items = []
        return cls(
            id=str(course_id) if course_id else id_factory(),
            name=str(data.get("name") or ""),
            target=clamp_percent(data.get("target", DEFAULT_TARGET)),
            items=tuple(
                Item.from_dict(raw, id_factory) for raw in raw_items if isinstance(raw, dict)
            ),
        )

    def find_item(self, item_id: str) -> Optional[Item]:
        return next((item for item in self.items if item.id == item_id), None)
