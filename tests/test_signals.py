"""
Tests for the green hosting and server location lookups.
"""

import asyncio
import socket
import unittest
from unittest.mock import AsyncMock, patch

import httpx

from analyzers.base import ServerLocation
from analyzers.countries import COUNTRY_NAME_TO_CODE, country_code_for
from analyzers.hosting import check_green_hosting
from analyzers.location import get_server_location, resolve_ipv4
from errors import SignalLookupError


class TestGreenHosting(unittest.IsolatedAsyncioTestCase):
    async def test_green_domain(self):
        payload = {"url": "example.org", "green": True, "hosted_by": "Green Host"}
        with patch("analyzers.hosting._fetch_greencheck", AsyncMock(return_value=payload)):
            self.assertTrue(await check_green_hosting("example.org"))

    async def test_grey_domain(self):
        with patch("analyzers.hosting._fetch_greencheck", AsyncMock(return_value={"green": False})):
            self.assertFalse(await check_green_hosting("example.org"))

    async def test_lookup_failure_defaults_to_not_green(self):
        mock = AsyncMock(side_effect=httpx.ConnectError("connection refused"))
        with patch("analyzers.hosting._fetch_greencheck", mock):
            with self.assertLogs("analyzers.hosting", level="WARNING") as logs:
                self.assertFalse(await check_green_hosting("example.org"))
        self.assertIn("assuming non-green hosting", logs.output[0])

    async def test_unexpected_payload_defaults_to_not_green(self):
        with patch("analyzers.hosting._fetch_greencheck", AsyncMock(return_value=["green"])):
            self.assertFalse(await check_green_hosting("example.org"))


class TestServerLocation(unittest.IsolatedAsyncioTestCase):
    async def test_location_found(self):
        location = ServerLocation(country="Germany", region="Hesse", city="Frankfurt")
        with patch("analyzers.location.resolve_ipv4", AsyncMock(return_value="192.0.2.10")), \
                patch("analyzers.location.geolocate_ip", AsyncMock(return_value=location)) as geo:
            self.assertEqual(await get_server_location("example.de"), location)
        geo.assert_awaited_once_with("192.0.2.10")

    async def test_dns_failure_returns_none(self):
        mock = AsyncMock(side_effect=SignalLookupError("DNS lookup failed"))
        with patch("analyzers.location.resolve_ipv4", mock):
            with self.assertLogs("analyzers.location", level="WARNING"):
                self.assertIsNone(await get_server_location("nope.invalid"))

    async def test_geolocation_failure_returns_none(self):
        with patch("analyzers.location.resolve_ipv4", AsyncMock(return_value="192.0.2.10")), \
                patch("analyzers.location.geolocate_ip", AsyncMock(side_effect=SignalLookupError("503"))):
            self.assertIsNone(await get_server_location("example.com"))

    async def test_resolve_ipv4_takes_first_address(self):
        loop = asyncio.get_running_loop()
        infos = [
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("192.0.2.1", 0)),
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("192.0.2.2", 0)),
        ]
        with patch.object(loop, "getaddrinfo", AsyncMock(return_value=infos)):
            self.assertEqual(await resolve_ipv4("example.com"), "192.0.2.1")

    async def test_resolve_ipv4_wraps_dns_errors(self):
        loop = asyncio.get_running_loop()
        with patch.object(loop, "getaddrinfo", AsyncMock(side_effect=socket.gaierror("Name or service not known"))):
            with self.assertRaises(SignalLookupError):
                await resolve_ipv4("nope.invalid")


class TestCountryCodes(unittest.TestCase):
    def test_known_countries(self):
        self.assertEqual(country_code_for("United Kingdom"), "GBR")
        self.assertEqual(country_code_for("United States"), "USA")
        self.assertEqual(country_code_for("Germany"), "DEU")

    def test_unknown_or_empty_country(self):
        self.assertIsNone(country_code_for("Atlantis"))
        self.assertIsNone(country_code_for(""))
        self.assertIsNone(country_code_for(None))

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            COUNTRY_NAME_TO_CODE["Atlantis"] = "ATL"


if __name__ == "__main__":
    unittest.main()
