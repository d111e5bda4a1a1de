"""Attestation record resolution.

Queries a domain's TXT records once and extracts the attestation records the
caller asked for, annotated with the response's dnssec flag.
"""

import logging
from typing import List, Optional, Sequence

from aiohttp import ClientSession

from sg.govtech.dnsprove.answers import DnsQueryResponse
from sg.govtech.dnsprove.config import Settings
from sg.govtech.dnsprove.parse import (
    DEFAULT_FORMATS,
    RecordFormat,
    check_formats,
    parse_dns_did_results,
    parse_dns_results,
    parse_document_store_results,
    parse_generic_results,
)
from sg.govtech.dnsprove.records import (
    AttestationRecord,
    DnsDidRecord,
    DocumentStoreRecord,
    GenericRecord,
)
from sg.govtech.dnsprove.resolve.query import query_dns_over_https, query_dns_system

logger = logging.getLogger(__name__)


async def query_dns(
    session: ClientSession, domain: str, settings: Settings
) -> DnsQueryResponse:
    """Query a domain's TXT records with the configured backend."""
    if settings.resolver == "system":
        return await query_dns_system(domain)
    return await query_dns_over_https(
        session, domain, settings.doh_url, settings.request_timeout
    )


async def lookup(
    session: ClientSession, domain: str, settings: Settings
) -> DnsQueryResponse:
    logger.debug("Received request to resolve %s", domain)
    results = await query_dns(session, domain, settings)
    logger.debug("Lookup results: %s", results.answers)
    return results


async def get_records(
    session: ClientSession,
    domain: str,
    formats: Sequence[RecordFormat | str] = DEFAULT_FORMATS,
    settings: Optional[Settings] = None,
) -> List[AttestationRecord]:
    """Resolve a domain and return the records matching any of ``formats``.

    Args:
        session: HTTP client session
        domain: e.g. "example.openattestation.com"
        formats: Record schemas to try, in order
        settings: Resolution settings, loaded from the environment if omitted

    Returns:
        Records in answer order, empty if the domain has none

    Raises:
        ValueError: If ``formats`` is empty or combines the generic format with another
    """
    formats = check_formats(formats)
    settings = settings or Settings()
    results = await lookup(session, domain, settings)
    return parse_dns_results(
        results.answers, results.authenticated, formats, settings.record_type
    )


async def get_document_store_records(
    session: ClientSession, domain: str, settings: Optional[Settings] = None
) -> List[DocumentStoreRecord]:
    """Resolve a domain and return its document store records, if any.

    Example:
        >>> await get_document_store_records(session, "example.openattestation.com")
        [DocumentStoreRecord(dnssec=True, type='openatts', net='ethereum',
                             net_id=<EthereumNetworks.ropsten: '3'>,
                             addr='0x2f60375e8144e16Adf1979936301D8341D58C36C')]
    """
    settings = settings or Settings()
    results = await lookup(session, domain, settings)
    return parse_document_store_results(
        results.answers, results.authenticated, settings.record_type
    )


async def get_dns_did_records(
    session: ClientSession, domain: str, settings: Optional[Settings] = None
) -> List[DnsDidRecord]:
    """Resolve a domain and return its DNS-DID records, if any."""
    settings = settings or Settings()
    results = await lookup(session, domain, settings)
    return parse_dns_did_results(
        results.answers, results.authenticated, settings.record_type
    )


async def get_generic_records(
    session: ClientSession, domain: str, settings: Optional[Settings] = None
) -> List[GenericRecord]:
    settings = settings or Settings()
    results = await lookup(session, domain, settings)
    return parse_generic_results(
        results.answers, results.authenticated, settings.record_type
    )
