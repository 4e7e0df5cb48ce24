import json

import pytest

from course_harvester.engine.exporter import JsonDocumentExporter
from course_harvester.models import Course, Lecture


def test_json_document_exporter_writes_single_array(tmp_path):
    path = tmp_path / "nested" / "result.json"
    exporter = JsonDocumentExporter(path)
    exporter.export({"name": "first"})
    exporter.export_many([{"name": "second"}, {"name": "ünicode"}])
    exporter.close()

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == [{"name": "first"}, {"name": "second"}, {"name": "ünicode"}]


def test_json_document_exporter_rejects_after_close(tmp_path):
    exporter = JsonDocumentExporter(tmp_path / "result.json")
    exporter.close()
    with pytest.raises(RuntimeError):
        exporter.export({"name": "late"})


def test_course_projection():
    course = Course(
        name="Python",
        course_code="BSCS1002",
        credits=4,
        weeks=["Variables", "Loops"],
        playlist="https://www.youtube.com/playlist?list=PL1",
    )
    course.add_lectures([Lecture(name="Intro", url="https://www.youtube.com/watch?v=abc", transcript="hi")])

    assert course.to_dict() == {
        "name": "Python",
        "courseCode": "BSCS1002",
        "credits": 4,
        "playlist": "https://www.youtube.com/playlist?list=PL1",
        "weeks": [
            {"weekNum": 0, "content": "Variables"},
            {"weekNum": 1, "content": "Loops"},
        ],
        "lectures": [
            {"name": "Intro", "url": "https://www.youtube.com/watch?v=abc", "transcript": "hi"}
        ],
    }
    assert repr(course) == "Course(course_code='BSCS1002', name='Python')"
    assert Lecture(name="x", url="https://www.youtube.com/watch?v=abc").video_id == "abc"


def test_context_manager_writes_empty_document(tmp_path):
    path = tmp_path / "empty.json"
    with JsonDocumentExporter(path) as exporter:
        assert exporter.export_many([]) == 0
    assert json.loads(path.read_text(encoding="utf-8")) == []
