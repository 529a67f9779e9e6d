from datetime import datetime, timezone
from typing import Any, Callable

import pytest
from prometheus_client import CollectorRegistry

from usagecsv.models import UsageRecord

ACCOUNT_SID = "AC" + "0" * 32


@pytest.fixture()
def registry() -> "CollectorRegistry":
    """
    fresh Prometheus registry to avoid cross-test state.
    """
    return CollectorRegistry()


@pytest.fixture()
def make_record() -> "Callable[..., UsageRecord]":
    """
    builds a UsageRecord starting at the given UTC year/month,
    with every other field overridable by keyword.
    """

    def _make(year: "int", month: "int", **overrides: "Any") -> "UsageRecord":
        fields: "dict[str, Any]" = dict(
            account_sid=ACCOUNT_SID,
            category="calls",
            description="Voice Minutes",
            start_date=datetime(year, month, 1, tzinfo=timezone.utc),
            end_date=datetime(year, month, 28, tzinfo=timezone.utc),
            count="1",
            count_unit="calls",
            usage="1",
            usage_unit="minutes",
            price="0.0085",
            price_unit="usd",
        )
        fields.update(overrides)
        return UsageRecord(**fields)

    return _make
