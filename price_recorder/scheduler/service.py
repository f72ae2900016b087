"""
Scheduler that polls every price source in turn and records the results.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol

from ..fetcher.service import PriceFetcher
from ..shared.models import Failure, FetchOutcome, PriceRecord, PriceSource
from ..sources.catalog import default_sources
from ..storage.record_writer import RecordWriter
from .settings import scheduler_settings

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def fetch(self, source: PriceSource) -> FetchOutcome: ...


SourceResult = PriceRecord | Failure


class PriceScheduler:
    """Runs fetch/persist cycles over a fixed list of sources."""

    def __init__(
        self,
        sources: Sequence[PriceSource] | None = None,
        fetcher: Fetcher | None = None,
        writer: RecordWriter | None = None,
        poll_interval: float | None = None,
    ) -> None:
        """Initialize the scheduler with the default catalog and components."""
        self.sources = list(sources) if sources is not None else default_sources()
        self.fetcher = fetcher or PriceFetcher()
        self.writer = writer or RecordWriter()
        self.poll_interval = (
            poll_interval
            if poll_interval is not None
            else scheduler_settings.poll_interval
        )

    async def run_cycle(self) -> dict[str, SourceResult]:
        """
        Fetch and persist every source once, strictly in order.

        Returns:
            The written record or the failure for each asset code
        """
        results: dict[str, SourceResult] = {}
        for source in self.sources:
            results[source.asset.value] = await self._process(source)
        return results

    async def _process(self, source: PriceSource) -> SourceResult:
        outcome = await self.fetcher.fetch(source)
        if isinstance(outcome, Failure):
            logger.error(f"[{source.asset}] fetch error: {outcome}")
            return outcome

        result = self.writer.persist(source, outcome.price)
        if isinstance(result, Failure):
            logger.error(f"[{source.asset}] failed to write CSV: {result}")
            return result

        logger.info(f"{result.timestamp} | {result.asset} | ${result.price:.2f}")
        return result

    async def run(
        self, max_cycles: int | None = None, stop_event: asyncio.Event | None = None
    ) -> int:
        """
        Poll until stopped.

        With neither bound given this runs until the process is interrupted.

        Args:
            max_cycles: Stop after this many cycles
            stop_event: Stop as soon as this event is set, including mid-sleep

        Returns:
            Number of cycles completed
        """
        stop_event = stop_event or asyncio.Event()
        completed = 0

        while not stop_event.is_set():
            await self.run_cycle()
            completed += 1
            if max_cycles is not None and completed >= max_cycles:
                break
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.poll_interval)
            except asyncio.TimeoutError:
                pass

        logger.info(f"Scheduler stopped after {completed} cycle(s)")
        return completed


async def main() -> None:
    """Main entry point for the price recorder."""
    scheduler = PriceScheduler()
    print(
        "Starting Financial Data Fetcher "
        f"(every {scheduler.poll_interval:g} seconds). Press Ctrl+C to stop."
    )
    await scheduler.run()
