"""Measurement records shared by the analyzers."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AuditMeasurements:
    """Normalized Lighthouse output for a single page."""

    performance_pct: float  # 0-100
    seo_pct: float  # 0-100
    load_time_seconds: float  # first contentful paint, may be NaN
    transfer_size_kb: float
    breakdown_by_resource_type: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ServerLocation:
    """Geolocation of the server a domain resolves to."""

    country: str
    region: str
    city: str
