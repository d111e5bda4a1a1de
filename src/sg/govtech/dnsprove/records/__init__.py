"""
Attestation Record Models

This package defines the closed set of record shapes that can be extracted from
an OpenAttestation DNS TXT record. Each variant is a frozen Pydantic model whose
validation is the schema check: a TokenMap that validates becomes a typed record,
anything else is rejected.

Key Components:
- base.py: Shared record base (dnssec annotation, serialization)
- document_store.py: Ethereum document store records (net/netId/addr)
- dns_did.py: DNS-DID records and the DID syntax validator
- generic.py: Legacy algorithm/publicKey/version records without a type tag

Example TXT records:
    openatts net=ethereum netId=3 addr=0x2f60375e8144e16Adf1979936301D8341D58C36C
    openatts a=dns-did; p=did:ethr:0xE712878f6E8d5d4F9e87E10DA604F9cB564C9a89#controller; v=1.0;
"""

from sg.govtech.dnsprove.records.base import AttestationRecord, RecordType
from sg.govtech.dnsprove.records.dns_did import DnsDidRecord, validate_did
from sg.govtech.dnsprove.records.document_store import (
    DocumentStoreRecord,
    EthereumNetworks,
)
from sg.govtech.dnsprove.records.generic import GenericRecord

__all__ = [
    "AttestationRecord",
    "RecordType",
    "DnsDidRecord",
    "validate_did",
    "DocumentStoreRecord",
    "EthereumNetworks",
    "GenericRecord",
]
