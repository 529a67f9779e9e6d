from typing import AsyncIterator, Protocol

from usagecsv.models import UsageRecord


class UsageSource(Protocol):
    """
    UsageSource stands as the protocol every usage
    provider must satisfy.

    A source produces a lazy, finite, forward-only sequence
    of monthly usage records for one authenticated account.
    The sequence is not restartable, and ordering is decided
    by the remote API alone.
    """

    @property
    def name(self) -> "str": ...

    def iter_monthly_records(self) -> "AsyncIterator[UsageRecord]": ...

    async def close(self) -> "None": ...
