"""DNS-DID records.

A DNS-DID record binds a domain to a decentralized identifier:

    openatts a=dns-did; p=did:ethr:0xE712878f6E8d5d4F9e87E10DA604F9cB564C9a89#controller; v=1.0;

Publishers use the short keys ``a``, ``p`` and ``v``; the long names produced
by :meth:`AttestationRecord.to_txt` are accepted as well.
"""

import re
from typing import Literal

from pydantic import AliasChoices, Field, ValidationInfo, field_validator

from sg.govtech.dnsprove.records.base import (
    AttestationRecord,
    RecordType,
    check_record_type,
)

Algorithm = Literal["dns-did"]

DID_METHOD_NAME_PATTERN = re.compile(r"[a-z]+")


def validate_did(maybe_did: str) -> bool:
    """Check that a string follows the W3C DID syntax ``did:<method>:<method-specific-id>``.

    See https://www.w3.org/TR/did-core/#did-syntax. The method specific id may
    itself contain colons.

    Args:
        maybe_did: Candidate identifier

    Returns:
        True if the scheme is exactly ``did``, the method name is lower case
        ASCII letters and a method specific id is present
    """
    did, _, rest = maybe_did.partition(":")
    method_name, _, method_specific_id = rest.partition(":")
    return (
        did == "did"
        and DID_METHOD_NAME_PATTERN.fullmatch(method_name) is not None
        and len(method_specific_id) > 0
    )


class DnsDidRecord(AttestationRecord):
    """Decentralized identifier published under a domain."""

    type: RecordType
    algorithm: Algorithm = Field(
        validation_alias=AliasChoices("a", "algorithm"),
        serialization_alias="algorithm",
    )
    public_key: str = Field(
        validation_alias=AliasChoices("p", "publicKey"),
        serialization_alias="publicKey",
    )
    version: str = Field(
        min_length=1,
        validation_alias=AliasChoices("v", "version"),
        serialization_alias="version",
    )

    @field_validator("type")
    @classmethod
    def check_type(cls, v: str, info: ValidationInfo) -> str:
        return check_record_type(v, info)

    @field_validator("public_key")
    @classmethod
    def check_public_key(cls, v: str) -> str:
        if not validate_did(v):
            raise ValueError(f"{v} is not a valid did")
        return v
