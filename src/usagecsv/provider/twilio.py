from datetime import datetime, timezone
from typing import Any, AsyncIterator

import httpx
import structlog

from usagecsv.config import Credentials
from usagecsv.exceptions import ConfigurationError, SourceIterationError
from usagecsv.models import UsageRecord

logger = structlog.get_logger()

TWILIO_API_BASE_URL = "https://api.twilio.com"
MONTHLY_RECORDS_PATH = "/2010-04-01/Accounts/{account_sid}/Usage/Records/Monthly.json"
# largest page the Usage Records API accepts
DEFAULT_PAGE_SIZE = 1000


class TwilioUsageSource:
    """
    TwilioUsageSource implements the UsageSource protocol for the
    Twilio REST API. It authenticates with the account SID and auth
    token, then walks the monthly Usage Records list page by page,
    following next_page_uri until the API reports no further page.
    """

    def __init__(
        self,
        credentials: "Credentials",
        base_url: "str" = TWILIO_API_BASE_URL,
        page_size: "int" = DEFAULT_PAGE_SIZE,
    ) -> "None":
        _validate_credentials(credentials)
        self._account_sid = credentials.account_sid
        self._base_url = base_url.rstrip("/")
        self._page_size = page_size
        self._client: "httpx.AsyncClient" = httpx.AsyncClient(
            timeout=30.0,
            auth=(credentials.account_sid, credentials.auth_token),
            headers={"Accept": "application/json"},
        )

    @property
    def name(self) -> "str":
        return "twilio"

    async def close(self) -> "None":
        """
        closes the underlying HTTP client.
        """
        await self._client.aclose()

    async def iter_monthly_records(self) -> "AsyncIterator[UsageRecord]":
        """
        yields every monthly usage record of the account in the
        order the API returns them. Pages are fetched lazily, one
        at a time, as the consumer advances.
        """
        path = MONTHLY_RECORDS_PATH.format(account_sid=self._account_sid)
        url = f"{self._base_url}{path}?PageSize={self._page_size}"
        page_count = 0

        while url:
            data = await self._fetch_page(url)
            page_count += 1

            for entry in data.get("usage_records") or []:
                yield _parse_record(entry)

            next_page_uri = data.get("next_page_uri")
            url = f"{self._base_url}{next_page_uri}" if next_page_uri else ""

        logger.debug("usage_records_done", provider=self.name, pages=page_count)

    async def _fetch_page(self, url: "str") -> "dict[str, Any]":
        logger.debug("fetch_usage_page", provider=self.name, url=url)
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            raise SourceIterationError(
                f"Twilio API returned {exc.response.status_code} for {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceIterationError(f"Twilio API request failed: {exc}") from exc
        except ValueError as exc:
            raise SourceIterationError(f"Twilio API returned invalid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise SourceIterationError("Twilio API returned an unexpected page body")
        return data


def _validate_credentials(credentials: "Credentials") -> "None":
    if not credentials.account_sid or not credentials.auth_token:
        raise ConfigurationError(
            "Twilio credentials missing. Set TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN."
        )
    if not credentials.account_sid.startswith("AC"):
        raise ConfigurationError(
            f"Invalid Twilio account SID {credentials.account_sid!r}: must start with 'AC'"
        )


def _parse_date(value: "str | None") -> "datetime | None":
    """
    parses an ISO-8601 date or datetime into an aware UTC datetime.
    Bare dates are midnight UTC.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected an ISO-8601 string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_record(entry: "Any") -> "UsageRecord":
    if not isinstance(entry, dict):
        raise SourceIterationError(
            f"Unexpected usage record entry of type {type(entry).__name__}"
        )

    try:
        start_date = _parse_date(entry.get("start_date"))
        end_date = _parse_date(entry.get("end_date"))
    except (TypeError, ValueError) as exc:
        raise SourceIterationError(f"Unparseable usage record date: {exc}") from exc

    return UsageRecord(
        account_sid=entry.get("account_sid"),
        category=entry.get("category"),
        description=entry.get("description"),
        start_date=start_date,
        end_date=end_date,
        count=entry.get("count"),
        count_unit=entry.get("count_unit"),
        usage=entry.get("usage"),
        usage_unit=entry.get("usage_unit"),
        price=entry.get("price"),
        price_unit=entry.get("price_unit"),
    )
