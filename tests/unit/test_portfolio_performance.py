"""Tests for the book performance roll-up."""

from __future__ import annotations

import pytest

from portman.portfolio import AccountSnapshot, snapshot_from_record, summarise_book


class TestSummariseBook:
    def test_balance_weighted_performance(self) -> None:
        accounts = [
            AccountSnapshot("tfsa", 1000.0, 10.0),
            AccountSnapshot("rrsp", 3000.0, 2.0),
            AccountSnapshot("TFSA", 1000.0, 0.0),
        ]

        summary = summarise_book(accounts)

        assert summary.total_aum == pytest.approx(5000.0)
        assert summary.account_count == 3
        assert summary.average_performance == pytest.approx(3.2)
        assert summary.by_type == {"TFSA": (2, 2000.0), "RRSP": (1, 3000.0)}

    def test_empty_book(self) -> None:
        summary = summarise_book([])

        assert summary.total_aum == 0
        assert summary.account_count == 0
        assert summary.average_performance == 0
        assert summary.by_type == {}

    def test_zero_aum_yields_zero_performance(self) -> None:
        summary = summarise_book([AccountSnapshot("cash", 0.0, 25.0)])
        assert summary.average_performance == 0


class TestSnapshotFromRecord:
    def test_prefers_calculated_balance(self) -> None:
        snap = snapshot_from_record(
            {"type": "tfsa", "balance": "10", "calculatedBalance": "1500.50", "performance": "4.25"}
        )
        assert snap == AccountSnapshot("tfsa", 1500.5, 4.25)

    def test_missing_and_malformed_values_are_zero(self) -> None:
        snap = snapshot_from_record({"type": "resp", "balance": "n/a", "performance": None})
        assert snap.balance == 0.0
        assert snap.performance == 0.0
