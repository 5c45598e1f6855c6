"""Reading submissions and writing reports as JSON lines."""

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, NamedTuple

from formwork.report import FormReport


class Submission(NamedTuple):
    """One submission read from a JSONL line."""

    submission_id: str | None
    values: dict[str, Any]


def read_submissions(path: Path | str) -> Iterator[Submission]:
    """Read submissions from a JSONL file.

    A line is either ``{"submission_id": ..., "values": {...}}`` or a bare
    object of encoded field names to submitted values.

    Args:
        path: Path to the JSONL file.

    Yields:
        Each submission, in file order.

    Raises:
        ValueError: If a line is not valid JSON or not an object.
    """
    with open(path) as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON on line {line_num}: {e}") from e
            if not isinstance(record, dict):
                raise ValueError(f"Line {line_num} is not a JSON object")
            if isinstance(record.get("values"), dict):
                yield Submission(record.get("submission_id"), record["values"])
            else:
                yield Submission(None, record)


def write_reports(path: Path | str, reports: Iterable[FormReport]) -> int:
    """Write reports to a JSONL file.

    Returns:
        Number of reports written.
    """
    count = 0
    with open(path, "w") as f:
        for report in reports:
            f.write(report.model_dump_json() + "\n")
            count += 1
    return count
