"""Zone file analyzer for RFC 1035 style zone files."""
import logging
import re
from typing import Generator, List, Optional, Sequence, Tuple

from dns_mcp.models import AnalysisResult, ZoneRecord
from dns_mcp.services.report_formatter import format_analysis_output
from dns_mcp.services.text_utils import ensure_text, strip_inline_comment


logger = logging.getLogger(__name__)


class ZoneFileAnalyzer:
    """Parses zone file text and checks zone-level consistency.

    The analyzer is stateless; one instance can serve any number of
    concurrent calls.

    Multi-line records are merged greedily: an open parenthesis without a
    closing one starts a merge that ends at the next line containing ')'.
    Parenthesis depth is not tracked, so nested groups are treated as
    plain concatenation.
    """

    # Record types accepted in a zone
    SUPPORTED_RECORD_TYPES = (
        'A', 'AAAA', 'MX', 'NS', 'TXT', 'SOA', 'CNAME', 'PTR', 'SRV', 'CAA',
        'TLSA', 'DNSKEY', 'DS', 'NSEC', 'NSEC3', 'RRSIG', 'SPF', 'AFSDB',
        'DHCID', 'DLV',
    )

    # Record classes skipped between TTL and type
    RECORD_CLASSES = {'IN', 'CH', 'HS'}

    # 30 days
    MAX_RECOMMENDED_TTL = 2592000

    MAX_SERIAL = 4294967295

    IPV4_PATTERN = re.compile(r'^([0-9]{1,3}\.){3}[0-9]{1,3}$')
    IPV6_PATTERN = re.compile(r'^[0-9a-f:]+$', re.IGNORECASE)

    # TTLs and MX priorities are ASCII digits only
    DIGITS_PATTERN = re.compile(r'[0-9]+')

    # Leading integer of a serial token; trailing junk is ignored
    SERIAL_PATTERN = re.compile(r'[+-]?[0-9]+')

    def analyze(self, zone_content: str, zone_name: str = "") -> AnalysisResult:
        """Parse zone text and validate it.

        Args:
            zone_content: Zone file text
            zone_name: Zone name, kept on the result only

        Returns:
            Populated AnalysisResult
        """
        result = AnalysisResult(zone_name=zone_name)
        records = self.parse_records(zone_content)

        for record in records:
            result.stats.record(record)

        self.validate(records, result)

        logger.debug(
            f"Zone {zone_name or '<unnamed>'}: {result.stats.total_records} records, "
            f"valid={result.is_valid}"
        )
        return result

    def parse_records(self, zone_content: str) -> List[ZoneRecord]:
        """Parse all records from zone text in file order.

        Args:
            zone_content: Zone file text

        Returns:
            List of ZoneRecord objects
        """
        records = []
        lines = zone_content.split('\n')
        for line_number, logical_line in self._logical_lines(lines):
            record = self.parse_line(logical_line)
            if record is None:
                logger.debug(f"Line {line_number}: Could not parse: {logical_line[:100]}")
                continue
            records.append(record)
        return records

    def _logical_lines(
        self,
        lines: Sequence[str]
    ) -> Generator[Tuple[int, str], None, None]:
        """Yield (line number, logical line) pairs.

        Blank lines, comment lines and $ directives are dropped. Lines that
        open a parenthesis without closing it absorb the following lines up
        to and including the first one containing ')'.
        """
        index = 0
        total = len(lines)
        while index < total:
            line_number = index + 1
            line = self._clean(lines[index])
            index += 1

            if not line or line.startswith('$'):
                continue

            if '(' in line and ')' not in line:
                parts = [line]
                while index < total:
                    continuation = self._clean(lines[index])
                    index += 1
                    if continuation:
                        parts.append(continuation)
                    if ')' in continuation:
                        break
                line = ' '.join(parts)

            yield line_number, line

    @staticmethod
    def _clean(raw_line: str) -> str:
        line = raw_line.strip()
        if line.startswith(';'):
            return ''
        return strip_inline_comment(line)

    def parse_line(self, line: str) -> Optional[ZoneRecord]:
        """Parse a single logical line into a record.

        Args:
            line: Logical zone line (already merged if multi-line)

        Returns:
            ZoneRecord or None if the line has too few fields
        """
        record_line = line.replace('(', '').replace(')', '')
        parts = record_line.split()
        if len(parts) < 3:
            return None

        name = parts[0]
        index = 1
        ttl = None

        if self.DIGITS_PATTERN.fullmatch(parts[index]):
            ttl = int(parts[index])
            index += 1

        if index < len(parts) and parts[index] in self.RECORD_CLASSES:
            index += 1

        if index >= len(parts):
            return None

        record_type = parts[index].upper()
        value = ' '.join(parts[index + 1:])

        return ZoneRecord(
            name=name,
            type=record_type,
            value=value,
            line=line,
            ttl=ttl,
        )

    def validate(self, records: List[ZoneRecord], result: AnalysisResult) -> None:
        """Apply zone-level rules to the parsed records.

        Args:
            records: Parsed records in file order
            result: Result whose stats are already populated
        """
        stats = result.stats

        if stats.soa_count == 0:
            result.add_error('Missing SOA record - zone must have exactly one SOA record')
        elif stats.soa_count > 1:
            result.add_error(
                f"Multiple SOA records found ({stats.soa_count}) - zone should have exactly one"
            )

        if stats.ns_count == 0:
            result.add_error(
                'Missing NS records - zone must have at least one NS record at the zone apex'
            )
        elif stats.ns_count < 2:
            result.add_warning('Only one NS record found - redundancy is recommended')

        self._check_cname_conflicts(records, result)
        self._check_soa_serial(records, result)
        self._check_ttls(result)

        for record in records:
            if record.type not in self.SUPPORTED_RECORD_TYPES:
                result.add_error(f"Invalid record type: {record.type}")

            problem = self.check_record_value(record.type, record.value)
            if problem:
                result.add_warning(f"{record.type} record validation: {problem}")

        self._add_suggestions(records, result)

    @staticmethod
    def _check_cname_conflicts(records: List[ZoneRecord], result: AnalysisResult) -> None:
        other_names = {record.name for record in records if record.type != 'CNAME'}
        for record in records:
            if record.type == 'CNAME' and record.name in other_names:
                result.add_error(
                    f"CNAME conflict at {record.name}: CNAME cannot coexist with other records"
                )

    def _check_soa_serial(self, records: List[ZoneRecord], result: AnalysisResult) -> None:
        soa = next((record for record in records if record.type == 'SOA'), None)
        if soa is None:
            return

        tokens = soa.value_tokens
        if len(tokens) < 3:
            return

        match = self.SERIAL_PATTERN.match(tokens[2])
        if not match:
            result.add_error('Invalid SOA serial number format')
            return

        serial = int(match.group())
        if serial < 1 or serial > self.MAX_SERIAL:
            result.add_warning(
                f"SOA serial {serial} is outside recommended range (1-{self.MAX_SERIAL})"
            )

    def _check_ttls(self, result: AnalysisResult) -> None:
        ttl = result.stats.ttl
        if not ttl.has_values:
            result.add_warning('No explicit TTL values found - default TTL will be used')
            return

        if ttl.minimum == 0:
            result.add_warning('Zero TTL found - DNS entries will not be cached')
        if ttl.maximum > self.MAX_RECOMMENDED_TTL:
            result.add_warning(
                f"High TTL detected ({ttl.maximum}s) - may slow down propagation of changes"
            )

    @classmethod
    def check_record_value(cls, record_type: str, value: str) -> Optional[str]:
        """Spot-check the shape of a record value.

        Args:
            record_type: Uppercased record type
            value: Record value

        Returns:
            Problem description, or None if the value looks fine
        """
        if record_type == 'A':
            return None if cls.IPV4_PATTERN.match(value) else 'Invalid IPv4 address format'

        if record_type == 'AAAA':
            return None if cls.IPV6_PATTERN.match(value) else 'Invalid IPv6 address format'

        if record_type == 'MX':
            parts = value.split()
            if len(parts) < 2:
                return 'MX record must have priority and exchange'
            return None if cls.DIGITS_PATTERN.fullmatch(parts[0]) else 'Invalid MX priority'

        if record_type == 'SOA':
            if len(value.split()) < 7:
                return 'SOA record incomplete'
            return None

        return None

    @staticmethod
    def _add_suggestions(records: List[ZoneRecord], result: AnalysisResult) -> None:
        present = {record.type for record in records}

        if 'MX' not in present:
            result.add_suggestion('No MX records found - add MX records if this zone handles email')
        if 'AAAA' not in present:
            result.add_suggestion('No AAAA records found - consider adding IPv6 support')
        if 'CAA' not in present:
            result.add_suggestion(
                'No CAA records found - add CAA records to restrict certificate issuance'
            )
        if 'DNSKEY' not in present and 'DS' not in present:
            result.add_suggestion(
                'DNSSEC is not configured - consider enabling DNSSEC for security'
            )


def analyze_zone_file(zone_content, zone_name) -> str:
    """Analyze a zone file and render the report.

    Args:
        zone_content: Zone file text (str, or UTF-8 bytes)
        zone_name: Zone name (e.g. "example.com")

    Returns:
        Rendered report, or "Error analyzing zone file: ..." on unexpected failure

    Raises:
        TypeError: If an argument is not text
        UnicodeDecodeError: If byte input is not valid UTF-8
    """
    zone_content = ensure_text(zone_content, 'zoneContent')
    zone_name = ensure_text(zone_name, 'zoneName')

    try:
        result = ZoneFileAnalyzer().analyze(zone_content, zone_name)
        return format_analysis_output(result)
    except Exception as e:
        logger.exception(f"Zone analysis failed for {zone_name}")
        return f"Error analyzing zone file: {e}"
