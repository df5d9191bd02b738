"""DNS record and DoH response models."""

from datetime import datetime

from pydantic import ConfigDict, Field, computed_field

from dnsintel.doh.types import rcode_text, type_name_of
from dnsintel.models.base import BaseSchema, utcnow


class ResolvedRecord(BaseSchema):
    """Single DNS answer record."""

    # Record data is an opaque payload and is kept byte for byte
    model_config = ConfigDict(frozen=True, str_strip_whitespace=False)

    name: str
    type: int
    ttl: int = Field(default=0, ge=0)
    data: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def type_name(self) -> str:
        return type_name_of(self.type)


class DoHQuestion(BaseSchema):
    """Question section entry."""

    name: str = ""
    type: int = 0


class DoHResponse(BaseSchema):
    """DoH JSON response decoded into the canonical shape."""

    status: int = 0
    question: list[DoHQuestion] = Field(default_factory=list)
    answer: list[ResolvedRecord] = Field(default_factory=list)
    authority: list[ResolvedRecord] | None = None
    additional: list[ResolvedRecord] | None = None

    ad: bool = False  # Authenticated Data
    cd: bool = False  # Checking Disabled
    tc: bool = False  # Truncated
    rd: bool = False  # Recursion Desired
    ra: bool = False  # Recursion Available

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status_text(self) -> str:
        return rcode_text(self.status)

    def records_of(self, *type_names: str) -> list[ResolvedRecord]:
        """Answer records of the given types."""
        return [r for r in self.answer if r.type_name in type_names]


class DNSLookupResult(BaseSchema):
    """Plain record lookup for one domain."""

    domain: str
    timestamp: datetime = Field(default_factory=utcnow)
    records: dict[str, list[ResolvedRecord]] = Field(default_factory=dict)
    supported_types: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def total_records(self) -> int:
        return sum(len(records) for records in self.records.values())
