"""Harvest pipeline wiring discovery, scraping, parsing, media resolution and export."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import structlog

from .config import HarvestConfig
from .engine import (
    CourseParser,
    Fetcher,
    MediaTool,
    TaskExecutor,
    ThreadPoolManager,
    filter_successful,
    flatten_results,
    successful_values,
)
from .engine.exporter import BaseExporter
from .errors import DiscoveryError, FetchError
from .models import Course, Lecture

STAGE_SCRAPE = "Scrape Course Pages"
STAGE_DETAILS = "Extract Course Details"
STAGE_LECTURES = "Extract Lectures Details"
STAGE_SUBTITLES = "Download Subtitles"


@dataclass(slots=True)
class HarvestSummary:
    output_path: Path | None
    courses: int
    lectures: int
    transcripts: int


class HarvestPipeline:
    """Central coordinator running every stage of one harvest."""

    def __init__(
        self,
        config: HarvestConfig,
        executor: TaskExecutor,
        fetcher: Fetcher,
        media: MediaTool,
        exporter: BaseExporter,
        parser: CourseParser | None = None,
        thread_pool: ThreadPoolManager | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.executor = executor
        self.fetcher = fetcher
        self.media = media
        self.exporter = exporter
        self.parser = parser or CourseParser()
        self.thread_pool = thread_pool
        self.logger = logger or structlog.get_logger("course_harvester.orchestrator")

    # ------------------------------------------------------------------
    def discover(self) -> list[str]:
        """Fetch the course index; failing here aborts the run."""

        url = self.config.index_url
        self.logger.info("discovering_courses", url=url)
        try:
            response = self.fetcher.fetch(url)
        except FetchError as exc:
            raise DiscoveryError(f"Cannot load course index {url}: {exc.reason}") from exc
        codes = self.parser.parse_course_codes(response.text)
        if not codes:
            raise DiscoveryError(f"No course pages linked from {url}")
        return codes

    def collect_courses(self, codes: Sequence[str]) -> list[Course]:
        pages = self.executor.scrape(
            codes,
            STAGE_SCRAPE,
            lambda code: (self.config.course_page_url(code), f"courses/{code}/course.html"),
        )
        details = self.executor.execute_results(
            pages,
            STAGE_DETAILS,
            lambda _code, page: self.parser.parse_course_details(
                page.read_text(encoding="utf-8", errors="replace")
            ),
        )
        return successful_values(details, self.logger)

    def attach_transcripts(self, courses: Sequence[Course]) -> int:
        """Resolve lectures and transcripts in place; return transcripts obtained."""

        with_playlist = [course for course in courses if course.playlist]
        lectures = self.executor.execute(with_playlist, STAGE_LECTURES, self.media.list_lectures)
        transcripts = self.executor.execute_results(
            flatten_results(lectures),
            STAGE_SUBTITLES,
            self._download_subtitles,
        )
        return len(filter_successful(transcripts, self.logger))

    def run(self) -> HarvestSummary:
        codes = self.discover()
        courses = self.collect_courses(codes)
        transcripts = self.attach_transcripts(courses)
        self.exporter.export_many(course.to_dict() for course in courses)
        self.exporter.close()
        summary = HarvestSummary(
            output_path=self.exporter.path,
            courses=len(courses),
            lectures=sum(len(course.lectures) for course in courses),
            transcripts=transcripts,
        )
        self.logger.info(
            "harvest_completed",
            courses=summary.courses,
            lectures=summary.lectures,
            transcripts=summary.transcripts,
            output=str(summary.output_path),
        )
        return summary

    def close(self) -> None:
        self.fetcher.close()
        if self.thread_pool is not None:
            self.thread_pool.shutdown()

    # ------------------------------------------------------------------
    def _download_subtitles(self, task: tuple[Course, Lecture], lecture: Lecture) -> str:
        course, _ = task
        return self.media.download_subtitles(course, lecture)


__all__ = [
    "HarvestPipeline",
    "HarvestSummary",
    "STAGE_DETAILS",
    "STAGE_LECTURES",
    "STAGE_SCRAPE",
    "STAGE_SUBTITLES",
]
