"""DNS TXT query backends.

Both backends return a DnsQueryResponse holding only TXT answers. Neither
retries nor caches; transport errors propagate to the caller.
"""

import logging
from typing import Union

import aiodns.error
from aiodns import DNSResolver
from aiohttp import ClientSession, ClientTimeout

from sg.govtech.dnsprove.answers import DnsQueryResponse, RawAnswer, TXT_RECORD_TYPE
from sg.govtech.dnsprove.config import DEFAULT_DOH_URL

logger = logging.getLogger(__name__)

# c-ares errors that mean "nothing to return" rather than a failed lookup.
NOT_FOUND_ERRORS = (aiodns.error.ARES_ENOTFOUND, aiodns.error.ARES_ENODATA)


async def query_dns_over_https(
    session: ClientSession,
    domain: str,
    doh_url: str = DEFAULT_DOH_URL,
    timeout: float = 10.0,
) -> DnsQueryResponse:
    """Query TXT records through a DNS-over-HTTPS JSON endpoint.

    Args:
        session: HTTP client session
        domain: Domain to query, e.g. "example.openattestation.com"
        doh_url: JSON API endpoint such as https://dns.google/resolve
        timeout: Total request timeout in seconds

    Returns:
        The TXT answers and the resolver's AD flag. A domain that does not
        exist yields an empty answer list.

    Raises:
        aiohttp.ClientError: On connection errors and non-2xx responses
        asyncio.TimeoutError: When the request exceeds ``timeout``
    """
    async with session.get(
        doh_url,
        params={"name": domain, "type": "TXT"},
        headers={"Accept": "application/dns-json"},
        timeout=ClientTimeout(total=timeout),
    ) as resp:
        resp.raise_for_status()
        # dns.google answers with application/x-javascript
        body = await resp.json(content_type=None)

    if body is None:
        return DnsQueryResponse()

    response = DnsQueryResponse.model_validate(body)
    return response.model_copy(
        update={
            "answers": [a for a in response.answers if a.type == TXT_RECORD_TYPE]
        }
    )


def decode_txt(text: Union[str, bytes]) -> str:
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return text


async def query_dns_system(domain: str) -> DnsQueryResponse:
    """Query TXT records through the system's configured nameservers.

    The stub resolver does not report DNSSEC validation, so the response is
    never marked authenticated.

    Args:
        domain: Domain to query

    Returns:
        The TXT answers. Missing domains and empty answers yield an empty list.

    Raises:
        aiodns.error.DNSError: On lookup failures other than not-found/no-data
    """
    resolver = DNSResolver()
    try:
        results = await resolver.query(domain, "TXT")
    except aiodns.error.DNSError as e:
        if len(e.args) > 0 and e.args[0] in NOT_FOUND_ERRORS:
            logger.debug("No TXT records for %s: %s", domain, e)
            return DnsQueryResponse()
        raise

    answers = [
        RawAnswer(
            name=domain,
            type=TXT_RECORD_TYPE,
            ttl=result.ttl,
            data=decode_txt(result.text),
        )
        for result in results or []
    ]
    return DnsQueryResponse(authenticated=False, answers=answers)
