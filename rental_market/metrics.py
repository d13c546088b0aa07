"""
Prometheus metrics for booking, decision and availability outcomes.

Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Example:
    >>> from rental_market.metrics import booking_proposals
    >>> booking_proposals.labels(outcome="created").inc()
"""

from __future__ import annotations

from prometheus_client import Counter

# =============================================================================
# Availability Engine Metrics
# =============================================================================

booking_proposals = Counter(
    "rental_booking_proposals_total",
    "Total booking proposals handled by the availability engine",
    ["outcome"],
)
"""
Counter for booking proposals.

Labels:
    outcome: created, conflict, invalid, not_found
"""

reservation_decisions = Counter(
    "rental_reservation_decisions_total",
    "Total host decisions on pending reservations",
    ["decision", "outcome"],
)
"""
Counter for host decisions.

Labels:
    decision: accept or reject
    outcome: accepted, rejected, unchanged, conflict, invalid_state, forbidden
"""

blocked_periods = Counter(
    "rental_blocked_periods_total",
    "Total block/unblock operations on listing calendars",
    ["operation", "outcome"],
)
"""
Counter for host calendar blocks.

Labels:
    operation: block or unblock
    outcome: success, conflict, forbidden
"""

# =============================================================================
# Database Metrics
# =============================================================================

db_retries = Counter(
    "rental_db_retries_total",
    "Total transactions retried after a lost database connection",
)
"""Counter for transactions re-run by rental_market.db.retry.run_with_retry."""
