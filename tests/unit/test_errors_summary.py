"""Tests for the error-signature summary."""

from __future__ import annotations

import math

import pytest

from loadstats.report.errors_summary import TITLES, ErrorsSummary
from loadstats.report.pipeline import SummaryPipeline
from loadstats.sample import ASSERTION_FAILED, Sample


def _ok(name: str = "Test") -> Sample:
    return Sample(name=name, success=True, response_code="200", response_message="OK")


def _failed(
    code: str = "500",
    message: str = "Internal Error",
    failure: str | None = None,
) -> Sample:
    return Sample(
        name="Test",
        success=False,
        response_code=code,
        response_message=message,
        failure_message=failure,
    )


def _run(samples: list[Sample], **kwargs: bool) -> list[list[object]]:
    pipeline = SummaryPipeline(ErrorsSummary(**kwargs), suppress_empty_overall=True)
    return pipeline.run(samples).rows  # type: ignore[return-value]


class TestErrorsSummary:
    def test_titles(self):
        table = SummaryPipeline(ErrorsSummary()).run([])
        assert table.titles == TITLES

    def test_error_rate_arithmetic(self):
        samples = [_ok() for _ in range(7)] + [_failed() for _ in range(3)]
        rows = _run(samples)

        assert rows[0] == ["500/Internal Error", 3, 100.0, 30.0]

    def test_total_row(self):
        samples = [_ok() for _ in range(7)] + [_failed() for _ in range(3)]
        rows = _run(samples)

        assert rows[-1][0] == "Total"
        assert rows[-1][1] == 10
        assert rows[-1][2] == pytest.approx(1000 / 3)
        assert rows[-1][3] == pytest.approx(100.0)

    def test_total_row_with_several_signatures(self):
        samples = [_ok() for _ in range(6)] + [_failed(), _failed(), _failed("404", "Not Found")]
        rows = _run(samples)

        assert rows[-1] == ["Total", 9, pytest.approx(300.0), pytest.approx(100.0)]

    def test_shares_of_several_signatures(self):
        samples = [_failed(), _failed(), _failed("404", "Not Found"), _ok()]
        rows = _run(samples)

        assert rows[0] == ["500/Internal Error", 2, pytest.approx(200 / 3), 50.0]
        assert rows[1] == ["404/Not Found", 1, pytest.approx(100 / 3), 25.0]

    def test_assertion_failure_key(self):
        rows = _run([_failed("200", "OK", failure="Expected token")])
        assert rows[0][0] == "Expected token"

    def test_assertion_failure_sentinel_when_option_disabled(self):
        rows = _run(
            [_failed("200", "OK", failure="Expected token")],
            use_assertion_message=False,
        )
        assert rows[0][0] == ASSERTION_FAILED

    def test_success_samples_emit_no_rows(self):
        rows = _run([_ok(), _ok()])
        assert rows == []

    def test_signature_first_seen_on_success_keeps_position(self):
        # "200" success and a later assertion failure share the sentinel key.
        samples = [_ok(), _failed("503", ""), _failed("200", "OK")]
        rows = _run(samples)
        assert [row[0] for row in rows] == [ASSERTION_FAILED, "503", "Total"]

    def test_unparsable_code_is_a_regular_error(self):
        rows = _run([_failed("Non HTTP response code: java.net.SocketException", "Reset")])
        assert rows[0][0] == "Non HTTP response code: java.net.SocketException/Reset"

    def test_empty_groups_do_not_count(self):
        empty = Sample(
            name="Tx",
            success=False,
            response_code="500",
            is_group=True,
            is_empty_group=True,
        )
        rows = _run([_failed(), empty])
        assert rows[0] == ["500/Internal Error", 1, 100.0, 100.0]

    def test_zero_denominator_yields_nan(self):
        summary = ErrorsSummary()
        summary.reset()
        row = summary.create_data_result("500", 0, 0)
        assert row is None

        row = summary.create_data_result(None, 0, 0)
        assert row is not None
        assert math.isnan(row[2])  # type: ignore[arg-type]
        assert math.isnan(row[3])  # type: ignore[arg-type]

    def test_error_count_resets_between_runs(self):
        summary = ErrorsSummary()
        pipeline = SummaryPipeline(summary)
        pipeline.run([_failed(), _failed()])
        rows = pipeline.run([_failed()]).rows
        assert summary.error_count == 1
        assert rows[0] == ["500/Internal Error", 1, 100.0, 100.0]
