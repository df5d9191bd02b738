"""WHOIS result models."""

from datetime import datetime

from pydantic import Field

from dnsintel.models.base import BaseSchema, utcnow


class RegistrarInfo(BaseSchema):
    """Domain registrar information."""

    name: str | None = None
    url: str | None = None
    iana_id: str | None = None
    abuse_email: str | None = None
    abuse_phone: str | None = None


class ContactInfo(BaseSchema):
    """Contact information (may be redacted)."""

    name: str | None = None
    organization: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None
    email: str | None = None


class RegistrationDates(BaseSchema):
    """Registration lifecycle dates."""

    created: datetime | None = None
    updated: datetime | None = None
    expires: datetime | None = None


class WHOISResult(BaseSchema):
    """WHOIS lookup result."""

    domain: str
    timestamp: datetime = Field(default_factory=utcnow)
    privacy_enabled: bool = False

    registrar: RegistrarInfo | None = None
    dates: RegistrationDates | None = None
    nameservers: list[str] = Field(default_factory=list)
    status: list[str] = Field(default_factory=list)
    dnssec: str | None = None

    registrant: ContactInfo | None = None
    admin: ContactInfo | None = None
    tech: ContactInfo | None = None

    raw_text: str | None = None
    summary: str | None = None

    @property
    def days_until_expiry(self) -> int | None:
        if self.dates and self.dates.expires:
            expires = self.dates.expires
            now = utcnow()
            if expires.tzinfo is None:
                now = now.replace(tzinfo=None)
            return (expires - now).days
        return None
