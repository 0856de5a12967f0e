"""Shared test fixtures for the loadstats test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


# =============================================================================
# Pytest configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    for item in items:
        test_path = str(item.fspath)
        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in test_path:
            item.add_marker(pytest.mark.e2e)


# =============================================================================
# Results files
# =============================================================================

RESULTS_HEADER = (
    "timeStamp,elapsed,label,responseCode,responseMessage,threadName,"
    "dataType,success,failureMessage,bytes"
)

# 10 samples: 3 x 500 on "Checkout", 1 assertion failure on "Login",
# one transaction controller wrapping Login + Checkout, one empty controller.
RESULTS_ROWS = [
    "1700000000000,100,Login,200,OK,Users 1-1,text,true,,1024",
    "1700000000100,120,Checkout,500,Internal Error,Users 1-1,text,false,,512",
    "1700000000200,80,Login,200,OK,Users 1-2,text,false,Expected token,1024",
    "1700000000300,90,Checkout,500,Internal Error,Users 1-2,text,false,,512",
    "1700000000400,110,Search,200,OK,Browsers 1-1,text,true,,2048",
    "1700000000500,95,Checkout,500,Internal Error,Browsers 1-1,text,false,,512",
    "1700000000600,105,Search,200,OK,Browsers 1-2,text,true,,2048",
    '1700000000700,300,Purchase,200,"Number of samples in transaction : 2, number of failing samples : 1",Users 1-1,,false,,1536',  # noqa: E501
    "1700000000800,0,Empty,200,\"Number of samples in transaction : 0, number of failing samples : 0\",Users 1-1,,true,,0",  # noqa: E501
    "1700000000900,70,Search,200,OK,Browsers 1-3,text,true,,2048",
]


@pytest.fixture
def results_csv(tmp_path: Path) -> Path:
    """A small results file covering errors, assertions and controllers."""
    path = tmp_path / "results.csv"
    path.write_text("\n".join([RESULTS_HEADER, *RESULTS_ROWS]) + "\n", encoding="utf-8")
    return path
