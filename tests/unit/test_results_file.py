"""Tests for the CSV results file reader."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from loadstats._internal.errors import ResultsFileError
from loadstats.report.results_file import parse_row, read_samples, thread_group_name

if TYPE_CHECKING:
    from pathlib import Path


class TestThreadGroupName:
    @pytest.mark.parametrize(
        ("thread_name", "expected"),
        [
            ("Users 1-1", "Users"),
            ("Thread Group 2-15", "Thread Group"),
            ("main", "main"),
            ("", ""),
        ],
    )
    def test_strip_counter(self, thread_name: str, expected: str):
        assert thread_group_name(thread_name) == expected


class TestParseRow:
    def test_full_row(self):
        sample = parse_row(
            {
                "timeStamp": "1700000000000",
                "elapsed": "120",
                "label": "Checkout",
                "responseCode": "500",
                "responseMessage": "Internal Error",
                "threadName": "Users 1-2",
                "success": "false",
                "failureMessage": "",
                "bytes": "512",
            }
        )
        assert sample.name == "Checkout"
        assert sample.success is False
        assert sample.response_code == "500"
        assert sample.failure_message is None
        assert sample.elapsed_ms == 120
        assert sample.timestamp_ms == 1700000000000
        assert sample.bytes_received == 512
        assert sample.thread_group == "Users"
        assert sample.is_group is False

    def test_success_is_case_insensitive(self):
        assert parse_row({"label": "a", "success": "TRUE"}).success is True

    def test_group_markers(self):
        message = "Number of samples in transaction : {}, number of failing samples : 0"
        group = parse_row({"label": "Tx", "success": "true", "responseMessage": message.format(3)})
        empty = parse_row({"label": "Tx", "success": "true", "responseMessage": message.format(0)})
        assert group.is_group is True
        assert group.is_empty_group is False
        assert empty.is_group is True
        assert empty.is_empty_group is True

    def test_bad_integer_logs_warning(
        self, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(logging.getLogger("loadstats"), "propagate", True)
        with caplog.at_level(logging.WARNING, logger="loadstats.report.results_file"):
            sample = parse_row({"label": "a", "success": "true", "elapsed": "fast"}, line=4)
        assert sample.elapsed_ms == 0
        assert "Line 4" in caplog.text


class TestReadSamples:
    def test_reads_in_file_order(self, results_csv: Path):
        samples = list(read_samples(results_csv))
        assert len(samples) == 10
        assert [s.name for s in samples[:3]] == ["Login", "Checkout", "Login"]
        assert samples[2].failure_message == "Expected token"
        assert samples[8].is_empty_group is True

    def test_custom_delimiter(self, tmp_path: Path):
        path = tmp_path / "results.tsv"
        path.write_text("label\tsuccess\nLogin\ttrue\n", encoding="utf-8")
        samples = list(read_samples(path, delimiter="\t"))
        assert samples[0].name == "Login"
        assert samples[0].success is True

    def test_missing_column(self, tmp_path: Path):
        path = tmp_path / "bad.csv"
        path.write_text("label,elapsed\nLogin,10\n", encoding="utf-8")
        with pytest.raises(ResultsFileError, match="success"):
            list(read_samples(path))

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ResultsFileError, match="Cannot open"):
            list(read_samples(tmp_path / "absent.csv"))
