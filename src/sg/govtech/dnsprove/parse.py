"""TXT record parsing and schema dispatch.

Turns the answer list of a TXT lookup into typed attestation records:

1. Unquote each answer's data and keep those that start with the record type tag
2. Tokenize the record into a type tag plus key=value entries
3. Validate the entries against one or more record schemas
4. Annotate surviving records with the response's dnssec flag

Records that fail any step are dropped. Nothing raised while checking a single
record reaches the caller.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import (
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

import sentry_sdk
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sg.govtech.dnsprove.answers import RawAnswer
from sg.govtech.dnsprove.records import (
    AttestationRecord,
    DnsDidRecord,
    DocumentStoreRecord,
    GenericRecord,
)
from sg.govtech.dnsprove.records.base import DEFAULT_RECORD_TYPE

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=AttestationRecord)


class RecordFormat(str, Enum):
    """Record schemas a lookup can be parsed against."""

    document_store = "document-store"
    dns_did = "dns-did"
    generic = "generic"


RECORD_MODELS: Dict[RecordFormat, Type[AttestationRecord]] = {
    RecordFormat.document_store: DocumentStoreRecord,
    RecordFormat.dns_did: DnsDidRecord,
    RecordFormat.generic: GenericRecord,
}

DEFAULT_FORMATS: Tuple[RecordFormat, ...] = (
    RecordFormat.document_store,
    RecordFormat.dns_did,
)


class TokenMap(BaseModel):
    """A tokenized TXT record: its leading type tag and its key=value entries."""

    model_config = ConfigDict(frozen=True)

    type: str
    entries: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("entries")
    @classmethod
    def freeze_entries(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    def as_dict(self) -> Dict[str, str]:
        # A "type=" entry in the body replaces the leading tag.
        return {"type": self.type, **self.entries}


def trim_double_quotes(record: str) -> str:
    """Some resolvers return TXT data wrapped in double quotes, others don't."""
    if record.startswith('"') and record.endswith('"'):
        return record[1:-1]
    return record


def is_attestation_record(record: str, record_type: str = DEFAULT_RECORD_TYPE) -> bool:
    """Check that an unquoted TXT record carries the reserved prefix.

    Args:
        record: e.g. 'openatts net=ethereum netId=3 addr=0x0c9d5E6C766030cc6f0f49951D275Ad0701F81EC'
        record_type: The prefix token configured for this deployment
    """
    return record.startswith(record_type)


def trim_value(value: str) -> str:
    value = value.strip()
    if value.endswith(";"):
        return value[:-1].strip()
    return value


def split_key_value(token: str) -> Tuple[str, str]:
    """Split a "key=value" token on its first "=".

    Values may contain "=" themselves (e.g. "net=ethereum=classic"). A token
    without "=" yields an empty value.
    """
    key, _, value = token.partition("=")
    return key.strip(), trim_value(value)


def parse_attestation_record(record: str) -> TokenMap:
    """Tokenize one attestation TXT record.

    Args:
        record: e.g. 'openatts net=ethereum netId=3 addr=0x0c9d5E6C766030cc6f0f49951D275Ad0701F81EC'

    Returns:
        TokenMap with the first token as type and the remaining tokens as entries,
        the last occurrence of a repeated key winning
    """
    logger.debug("Parsing record: %s", record)
    tag, *tokens = record.strip().split(" ")
    return TokenMap(type=tag, entries=dict(split_key_value(token) for token in tokens))


def parse_attestation_records(
    answers: Optional[Iterable[RawAnswer]] = None,
    record_type: str = DEFAULT_RECORD_TYPE,
) -> List[TokenMap]:
    """Unquote, filter and tokenize a TXT answer list, preserving answer order."""
    answers = list(answers or [])
    logger.debug("Parsing DNS results: %s", answers)
    unquoted = (trim_double_quotes(answer.data) for answer in answers)
    return [
        parse_attestation_record(record)
        for record in unquoted
        if is_attestation_record(record, record_type)
    ]


def validate_record(
    model: Type[RecordT],
    tokens: TokenMap,
    record_type: str = DEFAULT_RECORD_TYPE,
) -> Optional[RecordT]:
    """Validate a TokenMap against one record schema.

    Returns:
        The typed record, or None if the entries do not satisfy the schema
    """
    # dnssec comes from the DNS response, never from the record text.
    data = {k: v for k, v in tokens.as_dict().items() if k != "dnssec"}
    try:
        return model.model_validate(data, context={"record_type": record_type})
    except ValidationError as e:
        logger.debug(
            "Rejected %s record %s: %d error(s)",
            model.__name__,
            tokens.as_dict(),
            e.error_count(),
        )
        return None
    except Exception as e:
        logger.exception("Unexpected error validating %s record", model.__name__)
        sentry_sdk.capture_exception(e)
        return None


def check_formats(formats: Sequence[RecordFormat | str]) -> Tuple[RecordFormat, ...]:
    """Normalize a list of requested formats.

    Raises:
        ValueError: If no format is given, a format is unknown, or the generic
            format is combined with another one
    """
    checked = tuple(RecordFormat(f) for f in formats)
    if len(checked) == 0:
        raise ValueError("at least one record format is required")
    if RecordFormat.generic in checked and len(checked) > 1:
        raise ValueError("the generic record format cannot be combined with others")
    return checked


def parse_dns_results(
    answers: Optional[Iterable[RawAnswer]],
    dnssec: bool,
    formats: Sequence[RecordFormat | str] = DEFAULT_FORMATS,
    record_type: str = DEFAULT_RECORD_TYPE,
) -> List[AttestationRecord]:
    """Extract attestation records from a TXT answer list.

    Each record is tried against ``formats`` in order and the first schema it
    satisfies wins. Records matching none are dropped.

    Args:
        answers: Answers of one DNS response
        dnssec: The response's AD flag, applied to every record
        formats: Record schemas to try
        record_type: Reserved prefix / type tag of this deployment

    Returns:
        Records in answer order, each annotated with ``dnssec``
    """
    models = [RECORD_MODELS[f] for f in check_formats(formats)]
    records: List[AttestationRecord] = []
    for tokens in parse_attestation_records(answers, record_type):
        candidates = (validate_record(m, tokens, record_type) for m in models)
        record = next((c for c in candidates if c is not None), None)
        if record is not None:
            records.append(record.with_dnssec(dnssec))
    return records


def _parse_as(
    model: Type[RecordT],
    answers: Optional[Iterable[RawAnswer]],
    dnssec: bool,
    record_type: str,
) -> List[RecordT]:
    records = []
    for tokens in parse_attestation_records(answers, record_type):
        record = validate_record(model, tokens, record_type)
        if record is not None:
            records.append(record.with_dnssec(dnssec))
    return records


def parse_document_store_results(
    answers: Optional[Iterable[RawAnswer]],
    dnssec: bool,
    record_type: str = DEFAULT_RECORD_TYPE,
) -> List[DocumentStoreRecord]:
    """Takes a TXT answer list and returns the document store records in it, if any."""
    return _parse_as(DocumentStoreRecord, answers, dnssec, record_type)


def parse_dns_did_results(
    answers: Optional[Iterable[RawAnswer]],
    dnssec: bool,
    record_type: str = DEFAULT_RECORD_TYPE,
) -> List[DnsDidRecord]:
    return _parse_as(DnsDidRecord, answers, dnssec, record_type)


def parse_generic_results(
    answers: Optional[Iterable[RawAnswer]],
    dnssec: bool,
    record_type: str = DEFAULT_RECORD_TYPE,
) -> List[GenericRecord]:
    return _parse_as(GenericRecord, answers, dnssec, record_type)
