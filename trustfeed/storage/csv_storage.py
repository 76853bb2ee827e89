"""
CSV file storage: load typed records, save result rows.

load() reads UTF-8 (a leading BOM is dropped) with csv.DictReader and parses
each row into the record type (TransactionRecord, TopicRecord). The first
unparseable row, including bytes that are not UTF-8, aborts the load with
MalformedRecord. save() writes rows with pandas (no index column).
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Generic, Iterable, Sequence, TypeVar

import pandas as pd

from trustfeed.core.exceptions import IOFailure, MalformedRecord
from trustfeed.feed_logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class CSVFileStorage(Generic[T]):
    """
    One CSV file on disk.

    record_type must provide CSV_COLUMNS (required header names) and
    from_row(dict) -> record. Without a record_type, load() returns raw row dicts.
    """

    def __init__(self, filepath: Path | str, record_type: type[T] | None = None) -> None:
        self.filepath = Path(filepath)
        self.record_type = record_type

    def __repr__(self) -> str:
        kind = self.record_type.__name__ if self.record_type else "dict"
        return f"CSVFileStorage({str(self.filepath)!r}, {kind})"

    def _check_header(self, fieldnames: Sequence[str] | None) -> None:
        if self.record_type is None:
            return
        present = {(name or "").strip() for name in (fieldnames or ())}
        missing = [c for c in self.record_type.CSV_COLUMNS if c not in present]
        if missing:
            raise MalformedRecord(self.filepath, 1, f"missing columns: {', '.join(missing)}")

    def load(self) -> list[T] | list[dict[str, str]]:
        """Load every row; raises IOFailure if the file cannot be read."""
        try:
            f = open(self.filepath, newline="", encoding="utf-8-sig")
        except OSError as e:
            raise IOFailure(self.filepath, e.strerror or str(e)) from e

        out: list[Any] = []
        with f:
            reader = csv.DictReader(f)
            try:
                self._check_header(reader.fieldnames)
                for row in reader:
                    row = {(k or "").strip(): v for k, v in row.items()}
                    if self.record_type is None:
                        out.append(row)
                        continue
                    try:
                        out.append(self.record_type.from_row(row))
                    except (KeyError, ValueError, TypeError, AttributeError) as e:
                        raise MalformedRecord(self.filepath, reader.line_num, str(e)) from e
            except csv.Error as e:
                raise MalformedRecord(self.filepath, reader.line_num, str(e)) from e
            except UnicodeDecodeError as e:
                # text is decoded in buffered chunks; line is the last one fully read
                raise MalformedRecord(self.filepath, max(reader.line_num, 1), str(e)) from e
            except OSError as e:
                raise IOFailure(self.filepath, e.strerror or str(e)) from e

        logger.info(
            "records_loaded",
            path=str(self.filepath),
            record_type=self.record_type.__name__ if self.record_type else "dict",
            count=len(out),
        )
        return out

    def save(self, rows: Iterable[Sequence[Any]], columns: Sequence[str]) -> int:
        """Write rows under the given header; returns the number of rows written."""
        df = pd.DataFrame(list(rows), columns=list(columns))
        try:
            self.filepath.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(self.filepath, index=False)
        except OSError as e:
            raise IOFailure(self.filepath, e.strerror or str(e)) from e
        logger.info("records_saved", path=str(self.filepath), count=len(df))
        return len(df)
