"""Consistency metrics over a set of propagation results."""

import math
from collections import Counter

from dnsintel.models.propagation import PropagationAnalysis, PropagationResult

# Share of resolvers that must answer before a record counts as propagated
PROPAGATION_THRESHOLD = 70

# Inconsistency needs at least two answers to compare
MIN_RESOLVERS_FOR_CONSISTENCY = 2

ADDRESS_TYPES = ("A", "AAAA")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def analyze_propagation(results: list[PropagationResult]) -> PropagationAnalysis:
    """Compute propagation percentage and cross-resolver consistency."""
    successful = [r for r in results if r.is_success and r.response is not None]
    success_count = sum(1 for r in results if r.is_success)
    percentage = (
        _round_half_up(100 * success_count / len(results)) if results else 0
    )

    ip_sets = [
        (r.resolver, sorted(rec.data for rec in r.response.records_of(*ADDRESS_TYPES)))
        for r in successful
        if r.response is not None
    ]

    all_ips = sorted({ip for _, ips in ip_sets for ip in ips})

    records_consistent = True
    discrepancies: list[str] = []

    if len(ip_sets) >= MIN_RESOLVERS_FOR_CONSISTENCY:
        # Majority answer; ties go to the earliest resolver
        counts = Counter(tuple(ips) for _, ips in ip_sets)
        reference = list(counts.most_common(1)[0][0])
        for resolver, ips in ip_sets:
            if ips != reference:
                records_consistent = False
                discrepancies.append(
                    f"{resolver} returned different IPs: {', '.join(ips)}"
                )

    propagated = percentage >= PROPAGATION_THRESHOLD and records_consistent

    if propagated:
        summary = (
            f"DNS records have propagated to {percentage}% of global resolvers "
            "with consistent results."
        )
    elif percentage < PROPAGATION_THRESHOLD:
        summary = (
            f"DNS records have only propagated to {percentage}% of global "
            "resolvers. Propagation may still be in progress."
        )
    else:
        summary = (
            "DNS records show inconsistencies across global resolvers. This may "
            "indicate ongoing propagation or configuration issues."
        )

    return PropagationAnalysis(
        propagated=propagated,
        percentage=percentage,
        records_consistent=records_consistent,
        ip_addresses=all_ips,
        discrepancies=discrepancies,
        summary=summary,
    )
