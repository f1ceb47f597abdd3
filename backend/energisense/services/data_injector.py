"""
Data Injector
=============

Simulates an industrial energy sensor by POSTing a random reading to the
API every few seconds.

THE DATA FLOW:
-------------
    [This Injector]
            |
            | POST /api/data/inject   {"sensorId": ..., "value": 97.31, "type": "kWh"}
            v
    [EnergiSense API] ---> [MongoDB readings]

It is a separate process and just another HTTP client of the API - the
backend does not know or care whether readings come from here or from
real meters.

HOW TO RUN:
    energisense-injector                       # every 5s, forever
    energisense-injector --interval 1 --count 10
    energisense-injector --url http://localhost:5000

FAILURES:
    A failed POST is logged and the next tick simply tries again.
    No backoff, no queue.

Author: EnergiSense Team
"""

import argparse
import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Optional

import httpx
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from energisense.config import Config
from energisense.models import DEFAULT_READING_TYPE

logger = logging.getLogger(__name__)


class DataInjector:
    """
    Sends synthetic readings to the ingestion endpoint on a timer.

    HOW TO USE:
    ----------
    injector = DataInjector(api_url="http://localhost:5000", interval=5)

    # One reading
    result = await injector.send_reading()

    # Forever (or until count readings have been attempted)
    await injector.run(count=None)
    """

    DEFAULT_SENSOR_ID = "Sensor-01 (Industrial)"

    # Simulated consumption range in kWh: [MIN_VALUE, MIN_VALUE + VALUE_SPAN)
    MIN_VALUE = 50.0
    VALUE_SPAN = 100.0

    JOB_ID = "inject_reading"

    def __init__(
        self,
        api_url: str,
        interval: float = 5,
        sensor_id: str = DEFAULT_SENSOR_ID,
        request_timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Set up the injector.

        Args:
            api_url: Base URL of the API (e.g. "http://localhost:5000")
            interval: Seconds between readings
            sensor_id: Sent as sensorId with every reading
            request_timeout: How long to wait for the API (seconds)
            transport: Custom httpx transport (tests use httpx.MockTransport)
            rng: Random source, seedable for repeatable runs
        """
        self.inject_url = f"{api_url.rstrip('/')}/api/data/inject"
        self.interval = interval
        self.sensor_id = sensor_id
        self.rng = rng or random.Random()
        self.http_client = httpx.AsyncClient(timeout=request_timeout, transport=transport)

        # Counters, handy for logs and tests
        self.sent = 0
        self.failed = 0

        self._remaining: Optional[int] = None
        self._done: Optional[asyncio.Event] = None


    def generate_value(self) -> float:
        """A random consumption value between 50 and 150 kWh, 2 decimals."""
        value = self.MIN_VALUE + self.rng.random() * self.VALUE_SPAN
        return round(value, 2)


    async def send_reading(self) -> dict:
        """
        POST one reading.

        Returns:
            If it worked:
            {"status": "success", "value": 97.31, "reading": {...stored record...}}

            If it failed:
            {"status": "error", "value": 97.31, "error_type": "connection_error",
             "error_message": "..."}
        """
        value = self.generate_value()
        payload = {
            "sensorId": self.sensor_id,
            "value": value,
            "type": DEFAULT_READING_TYPE,
        }
        stamp = datetime.now().strftime("%H:%M:%S")

        try:
            response = await self.http_client.post(self.inject_url, json=payload)
            response.raise_for_status()
            self.sent += 1
            logger.info(f"[{stamp}] Reading sent: {value} kWh")
            return {"status": "success", "value": value, "reading": response.json()}

        except httpx.ConnectError as e:
            self.failed += 1
            logger.error(f"[{stamp}] Connection refused by {self.inject_url}. Is the API running? ({e})")
            return {
                "status": "error",
                "value": value,
                "error_type": "connection_error",
                "error_message": str(e),
            }
        except httpx.TimeoutException:
            self.failed += 1
            logger.error(f"[{stamp}] Request to {self.inject_url} timed out")
            return {
                "status": "error",
                "value": value,
                "error_type": "timeout",
                "error_message": f"Request to {self.inject_url} timed out",
            }
        except httpx.HTTPStatusError as e:
            self.failed += 1
            error_body = e.response.text[:500]
            logger.error(f"[{stamp}] API answered HTTP {e.response.status_code}: {error_body}")
            return {
                "status": "error",
                "value": value,
                "error_type": "http_error",
                "http_status": e.response.status_code,
                "error_message": error_body,
            }
        except httpx.HTTPError as e:
            self.failed += 1
            logger.error(f"[{stamp}] Request failed: {e}")
            return {
                "status": "error",
                "value": value,
                "error_type": "unknown_error",
                "error_message": str(e),
            }


    async def _tick(self):
        """One scheduled run: send, then stop if we've hit the count."""
        await self.send_reading()

        if self._remaining is not None:
            self._remaining -= 1
            if self._remaining <= 0 and self._done is not None:
                self._done.set()


    async def run(self, count: Optional[int] = None):
        """
        Send a reading right away, then one every `interval` seconds.

        Args:
            count: Stop after this many attempts (None = run until cancelled)
        """
        self._remaining = count
        self._done = asyncio.Event()

        scheduler = AsyncIOScheduler()
        scheduler.add_job(
            self._tick,
            trigger=IntervalTrigger(seconds=self.interval),
            id=self.JOB_ID,
            next_run_time=datetime.now(timezone.utc),
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        logger.info(f"Injector started. Sending to {self.inject_url} every {self.interval} seconds")

        try:
            await self._done.wait()
        finally:
            scheduler.shutdown(wait=False)
            logger.info(f"Injector stopped. Sent: {self.sent}, failed: {self.failed}")


    async def close(self):
        await self.http_client.aclose()


# =============================================================================
# COMMAND LINE
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="energisense-injector",
        description="Send simulated energy readings to the EnergiSense API.",
    )
    parser.add_argument("--url", default=Config.DATA_API_URL, help="API base URL")
    parser.add_argument(
        "--interval", type=float, default=Config.INJECT_INTERVAL,
        help="Seconds between readings",
    )
    parser.add_argument(
        "--count", type=int, default=None,
        help="Stop after this many readings (default: run forever)",
    )
    parser.add_argument("--sensor-id", default=DataInjector.DEFAULT_SENSOR_ID)
    return parser


async def _main(args: argparse.Namespace):
    injector = DataInjector(api_url=args.url, interval=args.interval, sensor_id=args.sensor_id)
    try:
        await injector.run(count=args.count)
    finally:
        await injector.close()


def main(argv: Optional[list[str]] = None):
    args = build_parser().parse_args(argv)
    if args.interval <= 0:
        raise SystemExit("--interval must be positive")

    try:
        asyncio.run(_main(args))
    except KeyboardInterrupt:
        print()
        print("Injector stopped")


if __name__ == "__main__":
    main()
