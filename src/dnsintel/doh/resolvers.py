"""Static registry of public DoH resolvers."""

from dnsintel.models.propagation import ResolverDescriptor

GLOBAL_RESOLVERS: tuple[ResolverDescriptor, ...] = (
    # North America
    ResolverDescriptor(
        key="google_us",
        name="Google Public DNS",
        region="North America",
        endpoint="https://dns.google/resolve",
        location="United States",
    ),
    ResolverDescriptor(
        key="cloudflare_us",
        name="Cloudflare DNS",
        region="North America",
        endpoint="https://cloudflare-dns.com/dns-query",
        location="United States (Anycast)",
    ),
    # Europe
    ResolverDescriptor(
        key="quad9_eu",
        name="Quad9 DNS",
        region="Europe",
        endpoint="https://dns.quad9.net:5053/dns-query",
        location="Europe",
    ),
    # Asia Pacific
    ResolverDescriptor(
        key="dns_sb_asia",
        name="DNS.SB",
        region="Asia Pacific",
        endpoint="https://doh.dns.sb/dns-query",
        location="Asia",
    ),
    # Anycast
    ResolverDescriptor(
        key="adguard",
        name="AdGuard DNS",
        region="Global (Anycast)",
        endpoint="https://dns.adguard-dns.com/dns-query",
        location="Anycast",
    ),
    ResolverDescriptor(
        key="nextdns",
        name="NextDNS",
        region="Global (Anycast)",
        endpoint="https://dns.nextdns.io/dns-query",
        location="Anycast",
    ),
    ResolverDescriptor(
        key="control_d",
        name="Control D",
        region="Global (Anycast)",
        endpoint="https://freedns.controld.com/p0",
        location="Anycast",
    ),
)


def get_resolver(
    key: str,
    resolvers: tuple[ResolverDescriptor, ...] = GLOBAL_RESOLVERS,
) -> ResolverDescriptor:
    """Look up a resolver by key."""
    for resolver in resolvers:
        if resolver.key == key:
            return resolver
    raise KeyError(f"Unknown resolver: {key}")
