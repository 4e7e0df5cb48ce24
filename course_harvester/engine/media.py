"""yt-dlp invocations resolving playlists and lecture subtitles."""

from __future__ import annotations

import random
import subprocess
import time
from pathlib import Path
from typing import Callable, Sequence

import structlog

from ..errors import MediaToolError
from ..models import Course, Lecture
from .cache import CacheStore
from .subtitles import vtt_to_text

PLAYLIST_PRINT_TEMPLATE = "%(id)s\t%(title)s"
OUTPUT_TEMPLATE = "%(id)s.%(ext)s"


def parse_playlist_listing(listing: str, video_url_prefix: str) -> list[Lecture]:
    """Turn ``id<TAB>title`` lines into lectures; a line without a tab is an error."""

    lectures: list[Lecture] = []
    for line in listing.splitlines():
        if not line.strip():
            continue
        video_id, separator, title = line.partition("\t")
        if not separator:
            raise MediaToolError(f"Malformed playlist line {line!r}", returncode=0)
        lectures.append(Lecture(name=title, url=f"{video_url_prefix}{video_id}"))
    return lectures


class MediaTool:
    """Run the external media tool with fixed command templates."""

    def __init__(
        self,
        cache: CacheStore,
        executable: str = "yt-dlp",
        video_url_prefix: str = "https://www.youtube.com/watch?v=",
        subtitle_lang: str = "en",
        delay_range: tuple[float, float] = (0.0, 0.0),
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        sleep: Callable[[float], None] = time.sleep,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.cache = cache
        self.executable = executable
        self.video_url_prefix = video_url_prefix
        self.subtitle_lang = subtitle_lang
        self.delay_range = delay_range
        self._runner = runner
        self._sleep = sleep
        self.logger = logger or structlog.get_logger("course_harvester.media")

    # ------------------------------------------------------------------
    # Command templates
    # ------------------------------------------------------------------
    def playlist_command(self, playlist_url: str) -> list[str]:
        return [self.executable, "--flat-playlist", "--print", PLAYLIST_PRINT_TEMPLATE, playlist_url]

    def subtitle_command(self, output_dir: Path, video_url: str) -> list[str]:
        return [
            self.executable,
            "--write-sub",
            "--write-auto-sub",
            "--sub-lang",
            self.subtitle_lang,
            "--skip-download",
            "-o",
            str(output_dir / OUTPUT_TEMPLATE),
            video_url,
        ]

    # ------------------------------------------------------------------
    # Task processors
    # ------------------------------------------------------------------
    def list_lectures(self, course: Course) -> list[Lecture]:
        if not course.playlist:
            raise MediaToolError(f"Course {course.course_code} has no playlist", returncode=0)
        playlist_file = self.cache.ensure_text(
            f"courses/{course.course_code}/playlist.txt",
            lambda: self._run(
                self.playlist_command(course.playlist),
                f"Error listing playlist for {course.course_code}",
            ),
        )
        lectures = parse_playlist_listing(
            playlist_file.read_text(encoding="utf-8"), self.video_url_prefix
        )
        course.add_lectures(lectures)
        return lectures

    def download_subtitles(self, course: Course, lecture: Lecture) -> str:
        lectures_dir = f"courses/{course.course_code}/lectures"
        vtt_name = f"{lecture.video_id}.{self.subtitle_lang}.vtt"

        def produce(vtt_path: Path) -> None:
            self._run(
                self.subtitle_command(vtt_path.parent, lecture.url),
                f"Error downloading subtitles for {course.name}/{lecture.name} ({lecture.url})",
            )
            if not vtt_path.exists():
                raise MediaToolError(
                    f"No {self.subtitle_lang} subtitles produced for {lecture.url}", returncode=0
                )
            self._polite_delay()

        vtt_file = self.cache.ensure(f"{lectures_dir}/{vtt_name}", produce)
        transcript_file = self.cache.ensure_text(
            f"{lectures_dir}/{lecture.video_id}.txt",
            lambda: vtt_to_text(vtt_file.read_text(encoding="utf-8")),
        )
        lecture.transcript = transcript_file.read_text(encoding="utf-8")
        return lecture.transcript

    # ------------------------------------------------------------------
    def _run(self, args: Sequence[str], message: str) -> str:
        completed = self._runner(list(args), capture_output=True, text=True, check=False)
        if completed.returncode != 0:
            output = (completed.stdout or "") + (completed.stderr or "")
            self.logger.warning(
                "media_tool_failed", command=args[1:], returncode=completed.returncode
            )
            raise MediaToolError(message, completed.returncode, output)
        return completed.stdout or ""

    def _polite_delay(self) -> None:
        low, high = self.delay_range
        if high > 0:
            self._sleep(random.uniform(low, high))


__all__ = ["MediaTool", "parse_playlist_listing"]
