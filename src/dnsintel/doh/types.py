"""DNS record type table shared by every component."""

# Numeric codes per IANA DNS parameters
DNS_RECORD_TYPES: dict[str, int] = {
    "A": 1,
    "AAAA": 28,
    "CNAME": 5,
    "MX": 15,
    "NS": 2,
    "TXT": 16,
    "SOA": 6,
    "PTR": 12,
    "SRV": 33,
    "CAA": 257,
    "DNSKEY": 48,
    "DS": 43,
}

_TYPE_NAMES: dict[int, str] = {code: name for name, code in DNS_RECORD_TYPES.items()}

RCODE_TEXT: dict[int, str] = {
    0: "NOERROR",
    1: "FORMERR",
    2: "SERVFAIL",
    3: "NXDOMAIN",
    4: "NOTIMP",
    5: "REFUSED",
}


def type_name_of(code: int) -> str:
    """Mnemonic for a numeric record type, ``TYPE<n>`` when unknown."""
    return _TYPE_NAMES.get(code, f"TYPE{code}")


def type_code_of(name: str) -> int | None:
    """Numeric code for a mnemonic, or None when it is not in the table."""
    return DNS_RECORD_TYPES.get(name.upper())


def rcode_text(status: int) -> str:
    """Text form of a DNS response code."""
    return RCODE_TEXT.get(status, f"UNKNOWN({status})")


def query_type_param(record_type: str | int) -> str:
    """Render a record type for the ``type`` query parameter.

    Numeric codes go through the table. Known mnemonics are sent in
    canonical upper case; anything else is passed through verbatim and
    left for the server to accept or reject.
    """
    if isinstance(record_type, int):
        return type_name_of(record_type)
    if record_type.isdigit():
        return type_name_of(int(record_type))
    if type_code_of(record_type) is not None:
        return record_type.upper()
    return record_type
