"""Shared base for attestation record models.

Provides the dnssec annotation slot, the reserved record type tags and the
serialization helpers common to every record variant.
"""

from typing import Any, Dict, Literal, Optional, Self

from pydantic import BaseModel, ConfigDict, ValidationInfo

RecordType = Literal["openatts", "worldatts"]
"""Reserved TXT prefix tokens. A deployment is configured with exactly one."""

DEFAULT_RECORD_TYPE: RecordType = "openatts"


class AttestationRecord(BaseModel):
    """Base class for every record variant extracted from a TXT record.

    Records are immutable. ``dnssec`` is never part of the validated TXT content;
    it is set afterwards from the DNS response with :meth:`with_dnssec`.
    """

    model_config = ConfigDict(frozen=True)

    dnssec: Optional[bool] = None

    def with_dnssec(self, dnssec: bool) -> Self:
        """Return a copy of this record annotated with the resolver's AD flag."""
        return self.model_copy(update={"dnssec": dnssec})

    def to_dict(self) -> Dict[str, Any]:
        """Render the record with its wire field names, omitting an unset dnssec."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_txt(self, record_type: str = DEFAULT_RECORD_TYPE) -> str:
        """Render the record back into TXT form.

        Records that carry their own ``type`` use it as the leading tag,
        otherwise ``record_type`` is used.
        """
        tag = getattr(self, "type", record_type)
        fields = self.model_dump(
            mode="json", by_alias=True, exclude={"dnssec", "type"}
        )
        return " ".join([tag] + [f"{key}={value}" for key, value in fields.items()])


def check_record_type(value: str, info: ValidationInfo) -> str:
    """Require ``value`` to equal the record type supplied as validation context.

    Without a context (direct construction) only the ``RecordType`` literal applies.
    """
    expected = (info.context or {}).get("record_type")
    if expected is not None and value != expected:
        raise ValueError(f"{value} is not the configured record type {expected}")
    return value
