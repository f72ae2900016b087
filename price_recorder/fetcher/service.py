"""
Fetcher that retrieves a single price from a source's HTTP endpoint.
"""

import asyncio
import json
import logging
import math
from typing import Any, Final

import aiohttp

from ..shared.models import (
    Failure,
    FailureKind,
    FetchOutcome,
    PathStep,
    PriceFetched,
    PriceSource,
    render_path,
)
from .settings import fetcher_settings

MAX_RENDERED_DIGITS: Final[int] = 40

# distinguishes "not given" from an explicit None that disables the timeout
_FROM_SETTINGS: Final[Any] = object()

logger = logging.getLogger(__name__)


def _clip(value: int | float) -> str:
    """Render a rejected value without dumping thousands of digits."""
    if isinstance(value, int) and abs(value) >= 10**MAX_RENDERED_DIGITS:
        return f"<{value.bit_length()}-bit integer>"
    return repr(value)


def extract_price(payload: Any, path: tuple[PathStep, ...]) -> FetchOutcome:
    """
    Walk a fixed extraction path over a decoded JSON document.

    Args:
        payload: The decoded response body
        path: Object keys (str) and array indexes (int) leading to the price

    Returns:
        PriceFetched with the price, or a PARSE Failure naming the path when a
        step is missing or the terminal value is not a usable number
    """
    missing = Failure(
        kind=FailureKind.PARSE, detail=f"missing field {render_path(path)}"
    )

    node = payload
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or not -len(node) <= step < len(node):
                return missing
        elif not isinstance(node, dict) or step not in node:
            return missing
        node = node[step]

    # bool is an int subclass but never a price
    if isinstance(node, bool) or not isinstance(node, int | float):
        return missing

    try:
        price = float(node)
    except OverflowError:
        price = math.inf

    if not math.isfinite(price) or price <= 0:
        return Failure(
            kind=FailureKind.PARSE,
            detail=f"implausible price {_clip(node)} at {render_path(path)}",
        )
    return PriceFetched(price=price)


class PriceFetcher:
    """Issues one GET per fetch and classifies what went wrong."""

    def __init__(
        self,
        user_agent: str | None = None,
        request_timeout: float | None = _FROM_SETTINGS,
    ) -> None:
        """
        Initialize the fetcher, falling back to the configured settings.

        Args:
            user_agent: User-Agent header value
            request_timeout: Total seconds allowed per request; None disables it
        """
        self.user_agent = user_agent or fetcher_settings.user_agent
        self.request_timeout: float | None = (
            fetcher_settings.request_timeout
            if request_timeout is _FROM_SETTINGS
            else request_timeout
        )

    async def fetch(self, source: PriceSource) -> FetchOutcome:
        """Fetch the current price for a source. Never raises for upstream errors."""
        body = await self._fetch_body(source.url)
        if isinstance(body, Failure):
            return body

        # ValueError also covers integers past the interpreter's digit limit
        try:
            payload = json.loads(body)
        except ValueError as e:
            return Failure(kind=FailureKind.PARSE, detail=f"json: {e} | body: {body}")

        outcome = extract_price(payload, source.extraction_path)
        if isinstance(outcome, PriceFetched):
            logger.debug(f"Fetched {source.asset} price {outcome.price}")
        return outcome

    async def _fetch_body(self, url: str) -> str | Failure:
        """GET the URL and return its body as text."""
        headers = {"User-Agent": self.user_agent}
        timeout = aiohttp.ClientTimeout(total=self.request_timeout)

        try:
            async with (
                aiohttp.ClientSession(headers=headers) as session,
                session.get(url, timeout=timeout) as response,
            ):
                response.raise_for_status()
                try:
                    return await response.text()
                except (aiohttp.ClientError, UnicodeDecodeError) as e:
                    return Failure(kind=FailureKind.NETWORK, detail=f"read body: {e}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            reason = str(e) or type(e).__name__
            return Failure(kind=FailureKind.NETWORK, detail=f"GET {url}: {reason}")
