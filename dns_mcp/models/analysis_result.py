"""Zone analysis result data models."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .zone_record import ZoneRecord


@dataclass
class TtlStats:
    """Running TTL statistics over records that carried an explicit TTL.

    Attributes:
        count: Number of records with an explicit TTL
        total: Sum of explicit TTLs in seconds
        lowest: Smallest TTL seen, None until the first TTL arrives
        highest: Largest TTL seen
    """
    count: int = 0
    total: int = 0
    lowest: Optional[int] = None
    highest: int = 0

    def add(self, ttl: int) -> None:
        """Feed one explicit TTL into the running statistics."""
        self.count += 1
        self.total += ttl
        self.lowest = ttl if self.lowest is None else min(self.lowest, ttl)
        self.highest = max(self.highest, ttl)

    @property
    def has_values(self) -> bool:
        return self.count > 0

    @property
    def minimum(self) -> int:
        """Smallest TTL, reported as 0 when no record carried a TTL."""
        return self.lowest if self.lowest is not None else 0

    @property
    def maximum(self) -> int:
        return self.highest

    @property
    def average(self) -> int:
        """Arithmetic mean rounded half-up to the nearest second."""
        if self.count == 0:
            return 0
        return (2 * self.total + self.count) // (2 * self.count)


@dataclass
class ZoneStats:
    """Aggregate statistics for a parsed zone.

    Attributes:
        total_records: Number of parsed records
        record_types: Per-type counts in first-seen order
        soa_count: Number of SOA records
        ns_count: Number of NS records
        ttl: TTL statistics
    """
    total_records: int = 0
    record_types: Dict[str, int] = field(default_factory=dict)
    soa_count: int = 0
    ns_count: int = 0
    ttl: TtlStats = field(default_factory=TtlStats)

    def record(self, zone_record: ZoneRecord) -> None:
        """Account for one parsed record.

        Args:
            zone_record: Record to add to the statistics
        """
        self.total_records += 1
        self.record_types[zone_record.type] = self.record_types.get(zone_record.type, 0) + 1

        if zone_record.type == 'SOA':
            self.soa_count += 1
        elif zone_record.type == 'NS':
            self.ns_count += 1

        if zone_record.has_ttl:
            self.ttl.add(zone_record.ttl)

    def types_by_frequency(self) -> List[tuple]:
        """Record type counts, most frequent first; ties keep first-seen order."""
        return sorted(self.record_types.items(), key=lambda item: -item[1])


@dataclass
class AnalysisResult:
    """Outcome of a zone file analysis.

    Attributes:
        zone_name: Zone name supplied by the caller (not used for parsing)
        is_valid: False as soon as any error is recorded
        errors: Structural violations, in detection order
        warnings: Non-fatal issues, in detection order
        suggestions: Advisory notes, in detection order
        stats: Aggregate record statistics
    """
    zone_name: str = ""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    stats: ZoneStats = field(default_factory=ZoneStats)

    def add_error(self, message: str) -> None:
        """Record an error and mark the zone invalid."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_suggestion(self, message: str) -> None:
        self.suggestions.append(message)
