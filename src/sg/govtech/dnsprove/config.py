"""
Configuration Module for dnsprove

This module defines the configuration for record resolution, using Pydantic
settings so that every value can be supplied through the environment.

Configuration areas:
- Record namespace: which reserved prefix (openatts/worldatts) this deployment reads
- DNS backend: DNS-over-HTTPS JSON resolver or the system resolver, and its timeout
- Monitoring: logging setup and optional Sentry error reporting

Environment variables carry the DNSPROVE_ prefix, e.g. DNSPROVE_RESOLVER=system.
"""

import json
import logging
import os
from logging.config import dictConfig
from typing import Literal, Optional

import sentry_sdk
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sg.govtech.dnsprove.records.base import DEFAULT_RECORD_TYPE, RecordType

logger = logging.getLogger(__name__)

DEFAULT_DOH_URL = "https://dns.google/resolve"


class Settings(BaseSettings):
    """
    Settings for record resolution.

    Values are loaded from DNSPROVE_* environment variables, falling back to
    defaults that match the public OpenAttestation deployment.
    """

    model_config = SettingsConfigDict(env_prefix="DNSPROVE_")

    debug: bool = False
    """
    Enable debug logging.
    Set with DNSPROVE_DEBUG=true environment variable.
    """

    record_type: RecordType = DEFAULT_RECORD_TYPE
    """
    Reserved prefix token of TXT records to read, and the type tag records must carry.
    Set with DNSPROVE_RECORD_TYPE environment variable.
    """

    resolver: Literal["doh", "system"] = "doh"
    """
    DNS backend: "doh" queries a DNS-over-HTTPS JSON endpoint and relays its AD flag,
    "system" uses the local resolver through c-ares and never reports DNSSEC.
    Set with DNSPROVE_RESOLVER environment variable.
    """

    doh_url: str = DEFAULT_DOH_URL
    """
    DNS-over-HTTPS JSON endpoint, queried with ?name=<domain>&type=TXT.
    Set with DNSPROVE_DOH_URL environment variable.
    """

    request_timeout: float = 10.0
    """
    Total timeout in seconds for one DNS-over-HTTPS request.
    Set with DNSPROVE_REQUEST_TIMEOUT environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with DNSPROVE_SENTRY_DSN environment variable.
    """

    @field_validator("request_timeout")
    @classmethod
    def check_request_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        return v


def configure_logging(settings: Optional[Settings] = None):
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig()
    debug = settings is not None and settings.debug
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)


def configure_sentry(settings: Settings) -> bool:
    """Initialize Sentry when a DSN is configured.

    Returns:
        True if error reporting was enabled
    """
    if settings.sentry_dsn is None:
        return False
    sentry_sdk.init(dsn=settings.sentry_dsn, debug=settings.debug)
    logger.debug("Sentry error reporting enabled")
    return True
