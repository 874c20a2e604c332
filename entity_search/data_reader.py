from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any

import pandas as pd

from entity_search.interfaces import IReporter


class FileFormat(Enum):
    EXCEL = "excel"
    CSV = "csv"
    JSON_LINES = "jsonl"


class DataReader(Iterable[dict[str, Any]]):
    """Read records from a CSV, Excel or JSON Lines file into a pandas DataFrame."""

    def __init__(
        self,
        *,
        file_path: str,
        limit_rows: int | None = None,
        reporter: IReporter,
        skip_rows: int = 0,
    ) -> None:
        self._file_path = file_path
        self._limit_rows = limit_rows
        self._skip_rows = skip_rows
        self._file_format = self._parse_file_format()
        self._reporter = reporter
        self.df = self._parse_file_content()

    def __iter__(self) -> Iterator[dict[str, Any]]:
        # to_dict boxes numpy scalars into native Python types
        for record in self.df.to_dict(orient="records"):
            yield _drop_missing(record)

    def __len__(self) -> int:
        return len(self.df)

    def records(self) -> list[dict[str, Any]]:
        """All rows as dicts, without NaN/None values."""
        return list(self)

    def _parse_file_format(self) -> FileFormat:
        file_extension = self._file_path.lower().split(".")[-1]
        if file_extension in ["xlsx", "xls"]:
            return FileFormat.EXCEL
        if file_extension == "csv":
            return FileFormat.CSV
        if file_extension in ["jsonl", "ndjson"]:
            return FileFormat.JSON_LINES
        raise ValueError(
            f"Unsupported file format: {file_extension}. Supported formats: xlsx, xls, csv, jsonl",
        )

    def _parse_file_content(self, *, encoding: str = "utf-8") -> pd.DataFrame:
        skiprows = range(1, self._skip_rows + 1) if self._skip_rows > 0 else None
        try:
            if self._file_format == FileFormat.EXCEL:
                return pd.read_excel(self._file_path, nrows=self._limit_rows, skiprows=skiprows)
            if self._file_format == FileFormat.JSON_LINES:
                df = pd.read_json(self._file_path, lines=True, encoding=encoding)
                end = None if self._limit_rows is None else self._skip_rows + self._limit_rows
                return df.iloc[self._skip_rows : end].reset_index(drop=True)
            return pd.read_csv(
                self._file_path,
                nrows=self._limit_rows,
                skiprows=skiprows,
                encoding=encoding,
            )
        except UnicodeDecodeError:
            if encoding == "latin-1":
                raise
            self._reporter.on_message("UTF-8 encoding failed, trying with latin-1 encoding...")
            return self._parse_file_content(encoding="latin-1")
        except pd.errors.EmptyDataError as e:
            raise ValueError("The file appears to be empty") from e
        except Exception as e:
            raise ValueError(f"Error reading file: {e!s}") from e


def _is_valid_value(value: Any) -> bool:
    """Check if value is valid (not None/NaN).

    pd.notna() on a list returns an array, so lists are handled first.
    """
    if value is None:
        return False
    if isinstance(value, (list, tuple, dict)):
        return True
    return bool(pd.notna(value))


def _drop_missing(record: dict[str, Any]) -> dict[str, Any]:
    return {str(k): v for k, v in record.items() if _is_valid_value(v)}
