"""Typer CLI entrypoint for Course-Harvester."""

from __future__ import annotations

from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .config import ConfigRepository
from .engine import CacheStore, Fetcher, MediaTool, TaskExecutor, ThreadPoolManager
from .engine.exporter import JsonDocumentExporter
from .errors import HarvestError
from .logging_conf import configure_logging
from .orchestrator import HarvestPipeline

app = typer.Typer(
    help="Harvest course pages, lecture playlists and transcripts into one JSON document.",
    add_completion=False,
    rich_markup_mode=None,
)

console = Console()


def build_pipeline(
    verbose: bool = False,
    workers: int | None = None,
    console: Console | None = None,
) -> HarvestPipeline:
    repository = ConfigRepository()
    config = repository.load()
    if workers is not None:
        config = config.model_copy(update={"max_workers": workers})
    configure_logging(verbose=verbose, log_dir=repository.locator.logs_dir)

    thread_pool = ThreadPoolManager(config.max_workers)
    cache = CacheStore(repository.cache_dir())
    fetcher = Fetcher(timeout=config.request_timeout, user_agent=config.user_agent)
    executor = TaskExecutor(
        thread_pool,
        cache=cache,
        fetcher=fetcher,
        progress_enabled=config.enable_progress_bar,
        console=console,
        bar_width=config.progress_bar_width,
        stage_workers=config.stage_workers,
    )
    media = MediaTool(
        cache,
        executable=config.yt_dlp_path,
        video_url_prefix=config.video_url_prefix,
        subtitle_lang=config.subtitle_lang,
        delay_range=config.subtitle_delay_range,
    )
    return HarvestPipeline(
        config=config,
        executor=executor,
        fetcher=fetcher,
        media=media,
        exporter=JsonDocumentExporter(repository.output_path()),
        thread_pool=thread_pool,
    )


def _fail(exc: HarvestError) -> NoReturn:
    console.print(f"[bold red]Harvest aborted:[/bold red] {escape(str(exc))}")
    raise typer.Exit(code=1)


@app.command()
def harvest(
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.", is_flag=True),
    workers: Optional[int] = typer.Option(
        None, "--workers", min=1, help="Worker pool size (defaults to host parallelism)."
    ),
) -> None:
    """Run every stage and write the result document."""

    try:
        pipeline = build_pipeline(verbose=verbose, workers=workers, console=console)
    except HarvestError as exc:
        _fail(exc)
    try:
        console.print(f"Connecting to {pipeline.config.index_url}...", highlight=False)
        summary = pipeline.run()
    except HarvestError as exc:
        _fail(exc)
    finally:
        pipeline.close()
    console.print(
        f"[green]Harvested {summary.courses} courses[/green], "
        f"{summary.lectures} lectures, {summary.transcripts} transcripts → {summary.output_path}",
        highlight=False,
    )


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
