"""Tests for run reports and JSONL input/output."""

import json
from pathlib import Path

import pytest

from formwork.core import Error, FieldId, FieldRange, Ok
from formwork.description import FieldError
from formwork.io import Submission, read_submissions, write_reports
from formwork.report import FormReport, RunStatus, build_report

R0 = FieldRange(FieldId("signup", 0), FieldId("signup", 1))
R1 = FieldRange(FieldId("signup", 1), FieldId("signup", 2))


class TestBuildReport:
    """Tests for build_report."""

    def test_success(self) -> None:
        """Test a successful result carries the value."""
        report = build_report("signup", Ok({"name": "Ann"}), submission_id="s1")
        assert report.status == RunStatus.SUCCESS
        assert report.value == {"name": "Ann"}
        assert report.error_count == 0
        assert report.submission_id == "s1"

    def test_failure_keeps_order_and_ranges(self) -> None:
        """Test every error is reported with its range."""
        result = Error(
            [
                (R0, FieldError(field="name", code="REQUIRED", message="Name is required")),
                (R1, "plain message"),
            ]
        )
        report = build_report("signup", result)

        assert report.status == RunStatus.FAILED
        assert report.value is None
        assert [(e.start, e.end) for e in report.errors] == [
            ("signup-f0", "signup-f1"),
            ("signup-f1", "signup-f2"),
        ]
        assert report.errors[0].code == "REQUIRED"
        assert report.errors[0].field == "name"
        assert report.errors[1].code is None
        assert report.errors[1].message == "plain message"


class TestJsonl:
    """Tests for reading submissions and writing reports."""

    def test_read_both_shapes(self, tmp_path: Path) -> None:
        """Test wrapped and bare submissions, skipping blank lines."""
        path = tmp_path / "in.jsonl"
        path.write_text(
            json.dumps({"submission_id": "a", "values": {"signup-f0": "Ann"}})
            + "\n\n"
            + json.dumps({"signup-f0": "Bob"})
            + "\n"
        )
        assert list(read_submissions(path)) == [
            Submission("a", {"signup-f0": "Ann"}),
            Submission(None, {"signup-f0": "Bob"}),
        ]

    def test_read_invalid_json(self, tmp_path: Path) -> None:
        """Test a broken line reports its number."""
        path = tmp_path / "in.jsonl"
        path.write_text('{"a": 1}\n{oops\n')
        with pytest.raises(ValueError, match="line 2"):
            list(read_submissions(path))

    def test_read_non_object(self, tmp_path: Path) -> None:
        """Test lines must be objects."""
        path = tmp_path / "in.jsonl"
        path.write_text("[1, 2]\n")
        with pytest.raises(ValueError, match="not a JSON object"):
            list(read_submissions(path))

    def test_write_reports(self, tmp_path: Path) -> None:
        """Test reports are written one per line."""
        path = tmp_path / "out.jsonl"
        reports = [
            FormReport(prefix="p", status=RunStatus.SUCCESS, value={"x": 1}),
            build_report("p", Error([(R0, "bad")])),
        ]
        assert write_reports(path, reports) == 2

        lines = [json.loads(line) for line in path.read_text().splitlines()]
        assert lines[0]["status"] == "success"
        assert lines[1]["errors"][0]["message"] == "bad"
