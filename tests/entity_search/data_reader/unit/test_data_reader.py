"""Unit tests for the DataReader class."""

from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from entity_search.data_reader import DataReader
from entity_search.null_reporter import NullReporter


@pytest.mark.unit
class TestDataReader:
    """Test suite covering CSV/Excel/JSON Lines parsing helpers."""

    def test_reads_csv_file_and_supports_iteration(self, tmp_path: Path) -> None:
        """DataReader should read CSV files and yield plain dict records."""
        df = pd.DataFrame({"id": [1, 2, 3], "name": ["alpha", "beta", "gamma"]})
        csv_path = tmp_path / "sample.csv"
        df.to_csv(csv_path, index=False)

        reader = DataReader(file_path=str(csv_path), reporter=NullReporter())

        assert len(reader) == 3
        assert list(reader) == [
            {"id": 1, "name": "alpha"},
            {"id": 2, "name": "beta"},
            {"id": 3, "name": "gamma"},
        ]
        assert type(reader.records()[0]["id"]) is int

    def test_missing_values_are_dropped(self, tmp_path: Path) -> None:
        csv_path = tmp_path / "gaps.csv"
        csv_path.write_text("id,name,city\n1,alpha,\n,beta,Paris\n")

        reader = DataReader(file_path=str(csv_path), reporter=NullReporter())

        assert reader.records() == [
            {"id": 1.0, "name": "alpha"},
            {"name": "beta", "city": "Paris"},
        ]

    def test_reads_json_lines_with_skip_and_limit(self, tmp_path: Path) -> None:
        jsonl_path = tmp_path / "sample.jsonl"
        jsonl_path.write_text("\n".join(f'{{"id": "p{i}", "n": {i}}}' for i in range(5)) + "\n")

        reader = DataReader(
            file_path=str(jsonl_path), skip_rows=1, limit_rows=2, reporter=NullReporter()
        )

        assert [record["id"] for record in reader] == ["p1", "p2"]

    def test_passes_limit_and_skip_to_pandas_reader(
        self,
        monkeypatch: Any,
        tmp_path: Path,
    ) -> None:
        """DataReader should forward limit/skip params to pandas.read_csv."""
        csv_path = tmp_path / "limited.csv"
        csv_path.write_text("id,name\n1,alpha\n")

        captured: dict[str, object] = {}

        def fake_read_csv(path: str, **kwargs: Any) -> pd.DataFrame:
            captured["path"] = path
            captured["kwargs"] = kwargs
            return pd.DataFrame({"id": []})

        monkeypatch.setattr(pd, "read_csv", fake_read_csv)

        DataReader(file_path=str(csv_path), limit_rows=10, skip_rows=5, reporter=NullReporter())

        assert captured["path"] == str(csv_path)
        kwargs = captured["kwargs"]
        assert kwargs["nrows"] == 10
        assert list(kwargs["skiprows"]) == [1, 2, 3, 4, 5]

    def test_falls_back_to_latin1(self, tmp_path: Path) -> None:
        csv_path = tmp_path / "latin1.csv"
        csv_path.write_bytes("id,name\n1,Andr\xe9\n".encode("latin-1"))

        reader = DataReader(file_path=str(csv_path), reporter=NullReporter())

        assert reader.records() == [{"id": 1, "name": "André"}]

    def test_unsupported_format(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unsupported file format"):
            DataReader(file_path=str(tmp_path / "data.parquet"), reporter=NullReporter())

    def test_empty_file(self, tmp_path: Path) -> None:
        csv_path = tmp_path / "empty.csv"
        csv_path.write_text("")

        with pytest.raises(ValueError, match="empty"):
            DataReader(file_path=str(csv_path), reporter=NullReporter())
