"""Generic (legacy) records.

The loosest record shape: an algorithm, a public key and a version, with no
type tag and no check on the key format. Only used when a deployment asks for
it on its own.
"""

from pydantic import AliasChoices, Field

from sg.govtech.dnsprove.records.base import AttestationRecord
from sg.govtech.dnsprove.records.dns_did import Algorithm


class GenericRecord(AttestationRecord):
    """Algorithm, public key and version with no type tag."""

    algorithm: Algorithm = Field(
        validation_alias=AliasChoices("a", "algorithm"),
        serialization_alias="algorithm",
    )
    public_key: str = Field(
        validation_alias=AliasChoices("p", "publicKey"),
        serialization_alias="publicKey",
    )
    version: str = Field(
        validation_alias=AliasChoices("v", "version"),
        serialization_alias="version",
    )
