from typing import Any, Dict, List
import argparse
import aiohttp
import asyncio
import json
import logging

from sg.govtech.dnsprove.config import Settings, configure_logging, configure_sentry
from sg.govtech.dnsprove.parse import DEFAULT_FORMATS, RecordFormat
from sg.govtech.dnsprove.resolve.records import get_records

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dnsprove", description="Resolve attestation records of domains"
    )
    parser.add_argument("domain", nargs="+", help="The domain(s) to resolve.")
    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=[f.value for f in RecordFormat],
        help="Record format to extract; repeat to try several in order. "
        "Defaults to document-store then dns-did.",
    )
    parser.add_argument(
        "--resolver",
        choices=["doh", "system"],
        help="DNS backend to query with.",
    )
    parser.add_argument("--doh-url", help="DNS-over-HTTPS JSON endpoint.")
    parser.add_argument(
        "--record-type",
        choices=["openatts", "worldatts"],
        help="Reserved TXT prefix to read.",
    )
    return parser


def settings_from_args(args: Dict[str, Any]) -> Settings:
    overrides = {
        key: args[key]
        for key in ("resolver", "doh_url", "record_type")
        if args.get(key) is not None
    }
    return Settings(**overrides)


async def realMain() -> None:
    args = vars(build_parser().parse_args())

    settings = settings_from_args(args)
    configure_logging(settings)
    configure_sentry(settings)

    domains: List[str] = args.get("domain", [])
    formats = args.get("formats") or DEFAULT_FORMATS

    async with aiohttp.ClientSession() as session:
        for domain in domains:
            try:
                records = await get_records(session, domain, formats, settings)
                print(json.dumps([record.to_dict() for record in records]))
            except Exception:
                logging.exception("Exception resolving domain %s", domain)


def main() -> None:
    asyncio.run(realMain())


if __name__ == "__main__":
    main()
