"""DNS-over-HTTPS client, record type table and resolver registry."""

from dnsintel.doh.types import (
    DNS_RECORD_TYPES,
    query_type_param,
    rcode_text,
    type_code_of,
    type_name_of,
)

__all__ = [
    "DNS_RECORD_TYPES",
    "query_type_param",
    "rcode_text",
    "type_code_of",
    "type_name_of",
]
