"""Confidence Scoring — maps a single beacon reading to a 0.0–1.0 confidence.

Invariants:
    - Deterministic and stateless; never raises for a valid reading
    - score_rssi(-100) == 0.0, score_rssi(-50) == 0.5, score_rssi(0) == 1.0
    - Monotonically non-decreasing in rssi, clamped to [0.0, 1.0]

Design Decisions:
    - ConfidenceScorer Protocol: the orchestrator depends on the contract, so the
      linear RSSI policy can be swapped without touching identify()
"""

from typing import Protocol

from beacon_identity.core.domain_types import ConfidenceScore, MIN_RSSI, MAX_RSSI
from beacon_identity.core.entities import BeaconReading


class ConfidenceScorer(Protocol):
    """Contract for confidence policies."""
    def score(self, reading: BeaconReading) -> ConfidenceScore: ...


def score_rssi(rssi: int) -> ConfidenceScore:
    """Linear normalization of RSSI (-100..0 dBm) to confidence (0.0..1.0)."""
    normalized = (rssi - MIN_RSSI) / (MAX_RSSI - MIN_RSSI)
    return ConfidenceScore(min(max(normalized, 0.0), 1.0))


class LinearRssiScorer:
    """Default policy: confidence grows linearly with signal strength."""

    def score(self, reading: BeaconReading) -> ConfidenceScore:
        return score_rssi(reading.rssi)
