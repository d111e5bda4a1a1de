"""
Unit tests for record resolution in sg.govtech.dnsprove.resolve.records

Tests cover backend selection, end-to-end extraction from a mocked DNS response,
dnssec propagation and error propagation from the query backend.
"""

import pytest
from unittest.mock import AsyncMock, patch
from aiohttp import ClientConnectionError

from sg.govtech.dnsprove.answers import DnsQueryResponse
from sg.govtech.dnsprove.records import DnsDidRecord, DocumentStoreRecord
from sg.govtech.dnsprove.resolve.records import (
    get_dns_did_records,
    get_document_store_records,
    get_generic_records,
    get_records,
    query_dns,
)
from tests.test_helpers import (
    DNS_DID_TXT,
    DOCUMENT_STORE_TXT,
    SAMPLE_ADDR,
    SAMPLE_DID,
    SAMPLE_DOMAIN,
    make_response,
    quoted,
)


class TestQueryDns:
    """Test suite for backend selection."""

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_system")
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_over_https")
    async def test_doh_backend(self, mock_doh, mock_system, settings):
        """Test the default backend is DNS-over-HTTPS with configured endpoint."""
        mock_doh.return_value = DnsQueryResponse()
        mock_session = AsyncMock()

        await query_dns(mock_session, SAMPLE_DOMAIN, settings)

        mock_doh.assert_called_once_with(
            mock_session, SAMPLE_DOMAIN, "https://dns.google/resolve", 10.0
        )
        mock_system.assert_not_called()

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_system")
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_over_https")
    async def test_system_backend(self, mock_doh, mock_system, system_settings):
        mock_system.return_value = DnsQueryResponse()

        await query_dns(AsyncMock(), SAMPLE_DOMAIN, system_settings)

        mock_system.assert_called_once_with(SAMPLE_DOMAIN)
        mock_doh.assert_not_called()


class TestGetDocumentStoreRecords:
    """Test suite for document store resolution."""

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_over_https")
    async def test_records_with_dnssec(self, mock_doh, settings):
        """Test records are extracted and carry the response's AD flag."""
        mock_doh.return_value = make_response(
            quoted(DOCUMENT_STORE_TXT), authenticated=True
        )

        result = await get_document_store_records(AsyncMock(), SAMPLE_DOMAIN, settings)

        assert [r.to_dict() for r in result] == [
            {
                "type": "openatts",
                "net": "ethereum",
                "netId": "3",
                "addr": SAMPLE_ADDR,
                "dnssec": True,
            }
        ]

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_over_https")
    async def test_no_records(self, mock_doh, settings):
        """Test a domain without attestation records gives an empty list."""
        mock_doh.return_value = make_response("v=spf1 -all")

        result = await get_document_store_records(AsyncMock(), "google.com", settings)

        assert result == []

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_over_https")
    async def test_nonexistent_domain(self, mock_doh, settings):
        mock_doh.return_value = DnsQueryResponse()

        result = await get_document_store_records(
            AsyncMock(), "thisdoesnotexist.gov.sg", settings
        )

        assert result == []

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_over_https")
    async def test_worldatts_settings(self, mock_doh, worldatts_settings):
        """Test the configured record type selects which records are read."""
        mock_doh.return_value = make_response(
            DOCUMENT_STORE_TXT,
            f"worldatts net=ethereum netId=1 addr={SAMPLE_ADDR}",
        )

        result = await get_document_store_records(
            AsyncMock(), SAMPLE_DOMAIN, worldatts_settings
        )

        assert [(r.type, r.net_id) for r in result] == [("worldatts", "1")]

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_over_https")
    async def test_network_failure_propagates(self, mock_doh, settings):
        """Test transport errors reach the caller."""
        mock_doh.side_effect = ClientConnectionError("Network error")

        with pytest.raises(ClientConnectionError):
            await get_document_store_records(AsyncMock(), SAMPLE_DOMAIN, settings)

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_over_https")
    async def test_settings_loaded_from_environment(self, mock_doh, monkeypatch):
        """Test omitted settings come from DNSPROVE_* variables."""
        monkeypatch.setenv("DNSPROVE_DOH_URL", "https://doh.example.com/resolve")
        mock_doh.return_value = DnsQueryResponse()
        mock_session = AsyncMock()

        await get_document_store_records(mock_session, SAMPLE_DOMAIN)

        mock_doh.assert_called_once_with(
            mock_session, SAMPLE_DOMAIN, "https://doh.example.com/resolve", 10.0
        )


class TestGetDnsDidRecords:
    """Test suite for DNS-DID resolution."""

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_system")
    async def test_system_resolver_never_authenticated(
        self, mock_system, system_settings
    ):
        """Test records from the system resolver are marked dnssec False."""
        mock_system.return_value = make_response(DNS_DID_TXT, DOCUMENT_STORE_TXT)

        result = await get_dns_did_records(AsyncMock(), SAMPLE_DOMAIN, system_settings)

        assert len(result) == 1
        assert result[0].public_key == SAMPLE_DID
        assert result[0].dnssec is False


class TestGetGenericRecords:
    """Test suite for generic record resolution."""

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_over_https")
    async def test_generic_records(self, mock_doh, settings):
        mock_doh.return_value = make_response(
            "openatts a=dns-did; p=abc==; v=1;", authenticated=True
        )

        result = await get_generic_records(AsyncMock(), SAMPLE_DOMAIN, settings)

        assert [r.to_dict() for r in result] == [
            {
                "algorithm": "dns-did",
                "publicKey": "abc==",
                "version": "1",
                "dnssec": True,
            }
        ]


class TestGetRecords:
    """Test suite for multi-format resolution."""

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_over_https")
    async def test_default_formats(self, mock_doh, settings):
        """Test document store and dns-did records come back in answer order."""
        mock_doh.return_value = make_response(
            DOCUMENT_STORE_TXT, "openatts foobarbar", DNS_DID_TXT, authenticated=False
        )

        result = await get_records(AsyncMock(), SAMPLE_DOMAIN, settings=settings)

        assert [type(r) for r in result] == [DocumentStoreRecord, DnsDidRecord]
        assert all(r.dnssec is False for r in result)

    @pytest.mark.asyncio
    @patch("sg.govtech.dnsprove.resolve.records.query_dns_over_https")
    async def test_invalid_formats(self, mock_doh, settings):
        """Test a bad format list is refused before any query is made."""
        mock_doh.return_value = make_response(DNS_DID_TXT)

        with pytest.raises(ValueError):
            await get_records(
                AsyncMock(), SAMPLE_DOMAIN, ["generic", "dns-did"], settings
            )
        mock_doh.assert_not_called()
