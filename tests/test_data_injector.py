"""
Tests for the simulated sensor.

The API is replaced by httpx.MockTransport, so nothing touches the network.
"""

import asyncio
import json
import random

import httpx
import pytest

from energisense.config import Config
from energisense.services import DataInjector
from energisense.services.data_injector import build_parser, main


def make_injector(handler, **kwargs) -> DataInjector:
    return DataInjector(
        api_url="http://energisense.test/",
        transport=httpx.MockTransport(handler),
        rng=random.Random(7),
        **kwargs,
    )


def accept_all(received: list):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        received.append((request.url.path, body))
        return httpx.Response(201, json={"id": "1", "value": body["value"], "type": body["type"]})
    return handler


class TestGenerateValue:

    def test_values_stay_in_range_with_two_decimals(self):
        injector = make_injector(accept_all([]))
        for _ in range(200):
            value = injector.generate_value()
            assert 50.0 <= value <= 150.0
            assert value == round(value, 2)


class TestSendReading:

    def test_success_posts_to_inject_path(self):
        received = []

        async def scenario():
            injector = make_injector(accept_all(received))
            try:
                return injector, await injector.send_reading()
            finally:
                await injector.close()

        injector, result = asyncio.run(scenario())

        assert result["status"] == "success"
        assert injector.sent == 1
        path, body = received[0]
        assert path == "/api/data/inject"
        assert body["type"] == "kWh"
        assert body["sensorId"] == DataInjector.DEFAULT_SENSOR_ID
        assert body["value"] == result["value"]

    def test_connection_refused_is_reported_not_raised(self):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        async def scenario():
            injector = make_injector(refuse)
            try:
                return injector, await injector.send_reading()
            finally:
                await injector.close()

        injector, result = asyncio.run(scenario())

        assert result["status"] == "error"
        assert result["error_type"] == "connection_error"
        assert injector.failed == 1
        assert injector.sent == 0

    def test_server_error_is_reported_with_status(self):
        def explode(request):
            return httpx.Response(500, json={"detail": "Database error: down"})

        async def scenario():
            injector = make_injector(explode)
            try:
                return await injector.send_reading()
            finally:
                await injector.close()

        result = asyncio.run(scenario())

        assert result["error_type"] == "http_error"
        assert result["http_status"] == 500

    def test_timeout_is_reported(self):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async def scenario():
            injector = make_injector(slow)
            try:
                return await injector.send_reading()
            finally:
                await injector.close()

        assert asyncio.run(scenario())["error_type"] == "timeout"


class TestRun:

    def test_run_stops_after_count(self):
        received = []

        async def scenario():
            injector = make_injector(accept_all(received), interval=0.05)
            try:
                await asyncio.wait_for(injector.run(count=3), timeout=5)
                return injector
            finally:
                await injector.close()

        injector = asyncio.run(scenario())

        assert injector.sent == 3
        assert len(received) == 3

    def test_failures_do_not_stop_the_loop(self):
        calls = []

        def flaky(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("Connection refused", request=request)
            return httpx.Response(201, json={})

        async def scenario():
            injector = make_injector(flaky, interval=0.05)
            try:
                await asyncio.wait_for(injector.run(count=2), timeout=5)
                return injector
            finally:
                await injector.close()

        injector = asyncio.run(scenario())

        assert injector.failed == 1
        assert injector.sent == 1


class TestCommandLine:

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.interval == Config.INJECT_INTERVAL
        assert args.count is None
        assert args.url == Config.DATA_API_URL

    def test_overrides(self):
        args = build_parser().parse_args(["--url", "http://api:8000", "--interval", "1", "--count", "10"])
        assert args.url == "http://api:8000"
        assert args.interval == 1.0
        assert args.count == 10

    def test_non_positive_interval_rejected(self):
        with pytest.raises(SystemExit):
            main(["--interval", "0"])
