"""Document store records.

A document store record names the Ethereum network and the contract address
that issues documents for a domain:

    openatts net=ethereum netId=3 addr=0x2f60375e8144e16Adf1979936301D8341D58C36C

Key names are abbreviated on the wire because of the 255 character limit on a
single TXT string.
"""

import re
from enum import Enum
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator

from sg.govtech.dnsprove.records.base import (
    AttestationRecord,
    RecordType,
    check_record_type,
)

BlockchainNetwork = Literal["ethereum"]

# Not anchored: any value containing an address-shaped run is accepted.
ETHEREUM_ADDRESS_PATTERN = re.compile(r"0x[a-fA-F0-9]{40}")


class EthereumNetworks(str, Enum):
    """Ethereum network ids accepted in the ``netId`` field."""

    homestead = "1"
    ropsten = "3"
    rinkeby = "4"


class DocumentStoreRecord(AttestationRecord):
    """Ethereum document store published under a domain."""

    type: RecordType
    net: BlockchainNetwork
    net_id: EthereumNetworks = Field(
        validation_alias="netId", serialization_alias="netId"
    )
    addr: str

    @field_validator("type")
    @classmethod
    def check_type(cls, v: str, info: ValidationInfo) -> str:
        return check_record_type(v, info)

    @field_validator("addr")
    @classmethod
    def check_addr(cls, v: str) -> str:
        if ETHEREUM_ADDRESS_PATTERN.search(v) is None:
            raise ValueError(f"{v} is not a valid ethereum address")
        return v
