"""WHOIS scanner implementation."""

import asyncio
import json
import time
from collections.abc import Sequence
from datetime import datetime
from typing import Any

import asyncwhois
from dateutil import parser as date_parser

from dnsintel.models.base import utcnow
from dnsintel.models.whois import (
    ContactInfo,
    RegistrarInfo,
    RegistrationDates,
    WHOISResult,
)
from dnsintel.scanners.base import BaseScanner
from dnsintel.scanners.registry import ScannerRegistry

UNAVAILABLE_SUMMARY = (
    "Unable to retrieve WHOIS data. The domain may use privacy protection "
    "or the WHOIS service is unavailable."
)
LIMITED_SUMMARY = "Limited WHOIS information available due to privacy protection."

PRIVACY_INDICATORS = (
    "privacy",
    "protect",
    "proxy",
    "whoisguard",
    "domains by proxy",
    "private",
    "contact privacy",
    "withheld",
    "redacted",
    "gdpr",
    "data protected",
    "identity protection",
    "domain privacy",
    "perfect privacy",
    "privacydotlink",
    "whois privacy",
)

# Nameserver substring -> provider, first match wins
DNS_PROVIDERS = (
    ("cloudflare", "Cloudflare"),
    ("awsdns", "AWS Route53"),
    ("google", "Google Cloud DNS"),
    ("azure", "Azure DNS"),
    ("godaddy", "GoDaddy"),
    ("namecheap", "Namecheap"),
)

BATCH_SIZE = 5
BATCH_DELAY = 0.5


def has_privacy_protection(parsed: dict[str, Any]) -> bool:
    """Heuristic: does any privacy-service marker appear in the parsed record?

    This is a plain substring scan of the serialized payload, so a
    registrant that merely has "private" in its name is flagged too.
    """
    payload = json.dumps(parsed, default=str).lower()
    return any(indicator in payload for indicator in PRIVACY_INDICATORS)


def _elapsed_days(start: datetime, end: datetime) -> int:
    if (start.tzinfo is None) != (end.tzinfo is None):
        start = start.replace(tzinfo=None)
        end = end.replace(tzinfo=None)
    return (end - start).days


def generate_privacy_summary(result: WHOISResult) -> str:
    """One-paragraph summary of what a privacy-protected record still reveals."""
    parts: list[str] = []
    now = utcnow()

    if result.registrar and result.registrar.name:
        parts.append(f"Registered through {result.registrar.name}")

    if result.dates and result.dates.created:
        years = _elapsed_days(result.dates.created, now) // 365
        parts.append(f"Domain is approximately {years} year(s) old")

    if result.dates and result.dates.expires:
        days = _elapsed_days(now, result.dates.expires)
        if days > 0:
            parts.append(f"Expires in {days} days")
        else:
            parts.append("Domain has expired or is about to expire")

    if result.nameservers:
        parts.append(f"Using {len(result.nameservers)} nameserver(s)")
        joined = " ".join(result.nameservers).lower()
        for marker, provider in DNS_PROVIDERS:
            if marker in joined:
                parts.append(f"Hosted on {provider}")
                break

    if any("lock" in status.lower() for status in result.status):
        parts.append("Domain has transfer lock enabled")

    if not parts:
        return LIMITED_SUMMARY
    return ". ".join(parts) + "."


@ScannerRegistry.register
class WHOISScanner(BaseScanner):
    """WHOIS information scanner."""

    name = "whois"

    @property
    def description(self) -> str:
        return "WHOIS domain registration data"

    def get_capabilities(self) -> list[str]:
        return [
            "Registrar information",
            "Registration dates",
            "Nameserver information",
            "Privacy protection detection",
        ]

    async def lookup(self, domain: str) -> WHOISResult:
        """Look up ``domain``; never raises, degrades to a placeholder.

        ``asyncwhois.whois`` blocks, so it runs in a worker thread. On
        timeout the caller gets the placeholder at once, but the thread
        cannot be cancelled and keeps its socket until the WHOIS server
        answers or the library's own timeout fires.
        """
        start_time = time.time()
        self.logger.info("whois_lookup_started", target=domain)

        try:
            raw = await asyncio.wait_for(
                asyncio.to_thread(asyncwhois.whois, domain),
                timeout=self.settings.whois_timeout,
            )
            result = self._parse_whois_result(domain, raw)
        except Exception as e:
            self.logger.warning("whois_lookup_failed", target=domain, error=str(e) or repr(e))
            return WHOISResult(
                domain=domain,
                privacy_enabled=True,
                summary=UNAVAILABLE_SUMMARY,
            )

        self.logger.info(
            "whois_lookup_completed",
            target=domain,
            privacy_enabled=result.privacy_enabled,
            duration=time.time() - start_time,
        )
        return result

    async def batch_lookup(self, domains: Sequence[str]) -> list[WHOISResult]:
        """Look up several domains, five at a time with a short pause between batches."""
        results: list[WHOISResult] = []
        for i in range(0, len(domains), BATCH_SIZE):
            batch = domains[i : i + BATCH_SIZE]
            results.extend(await asyncio.gather(*(self.lookup(d) for d in batch)))
            if i + BATCH_SIZE < len(domains):
                await asyncio.sleep(BATCH_DELAY)
        return results

    def _parse_whois_result(self, domain: str, result: Any) -> WHOISResult:
        """Parse an ``asyncwhois.whois`` result into structured data."""
        # asyncwhois.whois returns tuple: (raw_text, parsed_dict)
        if isinstance(result, tuple) and len(result) >= 2:
            raw_text = result[0]
            parser_output = result[1] if isinstance(result[1], dict) else {}
        else:
            raw_text = None
            parser_output = {}

        registrar = None
        if parser_output.get("registrar"):
            registrar = RegistrarInfo(
                name=str(parser_output["registrar"]),
                url=parser_output.get("registrar_url"),
                iana_id=_as_str(parser_output.get("registrar_iana_id")),
                abuse_email=parser_output.get("registrar_abuse_email"),
                abuse_phone=parser_output.get("registrar_abuse_phone"),
            )

        created = self._parse_date(parser_output.get("created"))
        updated = self._parse_date(parser_output.get("updated"))
        expires = self._parse_date(parser_output.get("expires"))
        dates = None
        if created or updated or expires:
            dates = RegistrationDates(created=created, updated=updated, expires=expires)

        nameservers = [ns.lower() for ns in _as_list(parser_output.get("name_servers"))]

        result_model = WHOISResult(
            domain=domain,
            registrar=registrar,
            dates=dates,
            nameservers=nameservers,
            status=_as_list(parser_output.get("status")),
            dnssec=_as_str(parser_output.get("dnssec")),
            registrant=self._extract_contact(parser_output, "registrant"),
            admin=self._extract_contact(parser_output, "admin"),
            tech=self._extract_contact(parser_output, "tech"),
            raw_text=raw_text if isinstance(raw_text, str) else None,
        )

        if has_privacy_protection(parser_output):
            result_model.privacy_enabled = True
            result_model.summary = generate_privacy_summary(result_model)
            result_model.registrant = None
            result_model.admin = None
            result_model.tech = None

        return result_model

    def _extract_contact(self, data: dict[str, Any], prefix: str) -> ContactInfo | None:
        """Extract contact information with given prefix."""
        name = data.get(f"{prefix}_name")
        org = data.get(f"{prefix}_organization") or data.get(f"{prefix}_org")

        if not name and not org:
            return None

        return ContactInfo(
            name=_as_str(name),
            organization=_as_str(org),
            street=_as_str(data.get(f"{prefix}_address")),
            city=_as_str(data.get(f"{prefix}_city")),
            state=_as_str(data.get(f"{prefix}_state")),
            postal_code=_as_str(data.get(f"{prefix}_zipcode") or data.get(f"{prefix}_postal_code")),
            country=_as_str(data.get(f"{prefix}_country")),
            phone=_as_str(data.get(f"{prefix}_phone")),
            email=_as_str(data.get(f"{prefix}_email")),
        )

    def _parse_date(self, date_value: Any) -> datetime | None:
        """Parse date from various formats."""
        if isinstance(date_value, list):
            date_value = date_value[0] if date_value else None

        if date_value is None or isinstance(date_value, datetime):
            return date_value

        if isinstance(date_value, str):
            try:
                return date_parser.parse(date_value)
            except (ValueError, OverflowError):
                # Non-standard registry formats
                return None

        return None


def _as_list(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value if v]


def _as_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, list):
        return ", ".join(str(v) for v in value if v) or None
    return str(value)
