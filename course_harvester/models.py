"""Course records assembled by the pipeline and their JSON projection."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Iterable


@dataclass
class Lecture:
    name: str
    url: str
    transcript: str | None = field(default=None, repr=False)

    @property
    def video_id(self) -> str:
        return self.url.split("=", 1)[-1]

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "url": self.url, "transcript": self.transcript}


@dataclass(frozen=True)
class Week:
    week_num: int
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"weekNum": self.week_num, "content": self.content}


@dataclass(eq=False, repr=False)
class Course:
    """A course page plus the lectures resolved from its playlist."""

    name: str
    course_code: str
    credits: int = 0
    weeks: list[str] | None = None
    playlist: str | None = None
    lectures: list[Lecture] = field(default_factory=list)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def __repr__(self) -> str:
        return f"Course(course_code={self.course_code!r}, name={self.name!r})"

    def add_lectures(self, lectures: Iterable[Lecture]) -> None:
        with self._lock:
            self.lectures.extend(lectures)

    def to_dict(self) -> dict[str, Any]:
        weeks = None
        if self.weeks is not None:
            weeks = [Week(index, content).to_dict() for index, content in enumerate(self.weeks)]
        return {
            "name": self.name,
            "courseCode": self.course_code,
            "credits": self.credits,
            "playlist": self.playlist,
            "weeks": weeks,
            "lectures": [lecture.to_dict() for lecture in self.lectures],
        }


__all__ = ["Course", "Lecture", "Week"]
