from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Resource:
    name: str
    href: str


@dataclass(frozen=True, slots=True)
class Course:
    id: str
    title: str = "Untitled"
    short_description: str = ""
    full_description: str = ""
    category: str = "General"
    level: str = "Beginner"
    duration: str = ""
    price: str = "Free"
    video_url: str = ""
    embed_url: str = ""
    resources: tuple[Resource, ...] = field(default_factory=tuple)

    @property
    def search_text(self) -> str:
        return " ".join([self.title, self.short_description, self.category, self.full_description]).lower()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["resources"] = ";".join(f"{r.name}|{r.href}" for r in self.resources)
        return data
