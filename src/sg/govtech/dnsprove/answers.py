"""DNS answer models.

Shapes of the data handed over by a DNS query backend. Field aliases follow the
DNS-over-HTTPS JSON format (https://developers.google.com/speed/public-dns/docs/doh/json).
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

TXT_RECORD_TYPE = 16


class RawAnswer(BaseModel):
    """One entry of a DNS answer section."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    type: int
    ttl: int = Field(alias="TTL")
    data: str


class DnsQueryResponse(BaseModel):
    """A DNS response reduced to its answers and the resolver's AD flag.

    ``authenticated`` applies to the whole response: it is True only when the
    resolver validated every answer with DNSSEC.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    authenticated: bool = Field(default=False, alias="AD")
    answers: List[RawAnswer] = Field(default_factory=list, alias="Answer")
