from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

from typer.testing import CliRunner

from course_harvester.app import app
from course_harvester.errors import DiscoveryError, HarvestError
from course_harvester.orchestrator import HarvestSummary


class StubPipeline:
    def __init__(self, summary: HarvestSummary | None = None, error: Exception | None = None) -> None:
        self.config = SimpleNamespace(index_url="https://courses.example.com/ds/academics.html")
        self.summary = summary
        self.error = error
        self.closed = False

    def run(self) -> HarvestSummary:
        if self.error is not None:
            raise self.error
        return self.summary

    def close(self) -> None:
        self.closed = True


def test_harvest_reports_summary(monkeypatch) -> None:
    pipeline = StubPipeline(HarvestSummary(Path("result.json"), courses=2, lectures=3, transcripts=1))
    calls: list[tuple[bool, int | None]] = []

    def build(verbose=False, workers=None, console=None):
        calls.append((verbose, workers))
        return pipeline

    monkeypatch.setattr("course_harvester.app.build_pipeline", build)

    result = CliRunner().invoke(app, ["--verbose", "--workers", "3"])

    assert result.exit_code == 0, result.stdout
    assert "Connecting to https://courses.example.com/ds/academics.html" in result.stdout
    assert "Harvested 2 courses" in result.stdout
    assert "3 lectures, 1 transcripts" in result.stdout
    assert calls == [(True, 3)]
    assert pipeline.closed


def test_harvest_aborts_on_discovery_failure(monkeypatch) -> None:
    pipeline = StubPipeline(error=DiscoveryError("Cannot load course index"))
    monkeypatch.setattr("course_harvester.app.build_pipeline", lambda **_: pipeline)

    result = CliRunner().invoke(app, [])

    assert result.exit_code == 1
    assert "Harvest aborted: Cannot load course index" in result.stdout
    assert pipeline.closed


def test_harvest_aborts_on_configuration_error(monkeypatch) -> None:
    def build(**_):
        raise HarvestError("Invalid configuration file harvest_config.yaml")

    monkeypatch.setattr("course_harvester.app.build_pipeline", build)

    result = CliRunner().invoke(app, [])

    assert result.exit_code == 1
    assert "Harvest aborted" in result.stdout


def test_harvest_rejects_zero_workers() -> None:
    result = CliRunner().invoke(app, ["--workers", "0"])
    assert result.exit_code != 0
