"""DOM parsing helpers for the course index and course pages."""

from __future__ import annotations

import re
from dataclasses import dataclass

from selectolax.parser import HTMLParser

from ..errors import CourseParseError
from ..models import Course
from .table import parse_table, read_table

COURSE_PAGE_PATTERN = re.compile(r"course_pages/(.+)\.html")
PLAYLIST_PREFIX = "https://www.youtube.com"


@dataclass(frozen=True)
class PageSelectors:
    """CSS selectors locating course page fields."""

    metadata: str = ".text-lighter.mb-1"
    title: str = ".h2.font-weight-600.text-dark"
    weeks_table: str = ".table"
    row_links: str = ".table-hover-row"


class CourseParser:
    """Parse the course index and individual course pages."""

    def __init__(self, selectors: PageSelectors | None = None) -> None:
        self.selectors = selectors or PageSelectors()

    def parse_course_codes(self, html: str) -> list[str]:
        """Return distinct course codes linked from the index, in page order."""

        parser = HTMLParser(html)
        links = [node.attributes.get("href") for node in parser.css("a")]
        links += [node.attributes.get("data-url") for node in parser.css(self.selectors.row_links)]
        codes: list[str] = []
        seen: set[str] = set()
        for link in links:
            if not link:
                continue
            match = COURSE_PAGE_PATTERN.fullmatch(link.strip())
            if match is None:
                continue
            code = match.group(1)
            if code not in seen:
                seen.add(code)
                codes.append(code)
        return codes

    def parse_metadata(self, parser: HTMLParser) -> dict[str, str]:
        metadata: dict[str, str] = {}
        for node in parser.css(self.selectors.metadata):
            parts = node.text(separator=" ", strip=True).split(": ")
            if len(parts) == 2:
                metadata[parts[0].strip()] = parts[1].strip()
        return metadata

    def parse_course_details(self, html: str) -> Course:
        parser = HTMLParser(html)
        metadata = self.parse_metadata(parser)
        course_code = metadata.get("Course ID")
        if not course_code:
            raise CourseParseError("Course page has no 'Course ID' entry")
        credits_text = metadata.get("Course Credits")
        try:
            credits = int(credits_text) if credits_text else 0
        except ValueError as exc:
            raise CourseParseError(f"Invalid credits for {course_code}: {credits_text!r}") from exc

        title = " ".join(
            node.text(separator=" ", strip=True) for node in parser.css(self.selectors.title)
        )
        playlist = next(
            (
                href
                for href in (node.attributes.get("href") for node in parser.css("a"))
                if href and href.startswith(PLAYLIST_PREFIX)
            ),
            None,
        )
        weeks = None
        table = parser.css_first(self.selectors.weeks_table)
        if table is not None:
            rows = parse_table(read_table(table))
            weeks = [row[-1] for row in rows if row]
        return Course(
            name=title,
            course_code=course_code,
            credits=credits,
            weeks=weeks,
            playlist=playlist,
        )


__all__ = ["COURSE_PAGE_PATTERN", "CourseParser", "PageSelectors"]
