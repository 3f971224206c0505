"""DNS server configuration validator.

Each supported dialect has its own line scanner. Scanners are plain
functions registered in SCANNERS; exactly one runs per validation.
"""
import logging
import re
from types import MappingProxyType
from typing import Callable, List, Mapping

from dns_mcp.models import ValidationResult
from dns_mcp.services.report_formatter import format_validation_output
from dns_mcp.services.text_utils import ensure_text, iter_config_lines


logger = logging.getLogger(__name__)


SUPPORTED_SERVER_TYPES = ('bind', 'nsd', 'unbound', 'powerdns', 'djbdns')


class UnknownServerTypeError(ValueError):
    """Raised when a server type outside SUPPORTED_SERVER_TYPES is requested."""

    def __init__(self, server_type: str):
        self.server_type = server_type
        super().__init__(
            f"Error: Unknown server type '{server_type}'. "
            f"Supported types: {', '.join(SUPPORTED_SERVER_TYPES)}"
        )


# -------------------------------
# BIND (named.conf)
# -------------------------------

BIND_BLOCK_PATTERN = re.compile(r'^(options|zone|logging)(?=[\s{"]|$)')
BIND_ZONE_PATTERN = re.compile(r'zone\s+"([^"]+)"')


def scan_bind(content: str, result: ValidationResult) -> None:
    """Scan named.conf text.

    The recursion check is line-local: a line enabling recursion is
    flagged unless the same line mentions allow-recursion.
    """
    brace_count = 0
    configured_zones: List[str] = []

    for line in iter_config_lines(content, ('//', '#')):
        brace_count += line.count('{')
        brace_count -= line.count('}')

        block = BIND_BLOCK_PATTERN.match(line)
        if block:
            result.add_section_line(block.group(1), line)
            zone = BIND_ZONE_PATTERN.match(line)
            if zone:
                configured_zones.append(zone.group(1))

        if 'rrset-order' in line:
            result.add_deprecated('rrset-order - deprecated in BIND 9.9+')
        if 'slave' in line:
            result.add_deprecated('slave keyword - use secondary instead')

        if 'allow-transfer' in line and 'any' in line:
            result.add_security_issue(
                'allow-transfer set to any - restricts zone transfers for security'
            )
        if 'recursion' in line and 'yes' in line and 'allow-recursion' not in line:
            result.add_security_issue(
                'recursion enabled without allow-recursion restriction - '
                'can lead to open resolver attacks'
            )
        if 'allow-query' in line and 'any' in line:
            result.add_security_issue('allow-query set to any - consider restricting query sources')
        if 'dnssec-validation' in line and 'no' in line:
            result.add_suggestion('DNSSEC validation is disabled - enable for better security')

    if brace_count != 0:
        side = 'missing closing braces' if brace_count > 0 else 'missing opening braces'
        result.add_syntax_error(f"Unbalanced braces: {side}")

    if not result.has_section('options'):
        result.add_suggestion('No options section found - add options block for configuration')
    if not configured_zones:
        result.add_suggestion('No zones configured - add zone statements for your domains')
    if 'dnssec-enable' not in content:
        result.add_suggestion('DNSSEC not enabled - consider enabling for security')

    result.add_suggestion('Consider using BIND 9.18+ for latest security fixes')


# -------------------------------
# NSD (nsd.conf)
# -------------------------------

NSD_ZONE_NAME_PATTERN = re.compile(r'name:\s*(\S+)')


def scan_nsd(content: str, result: ValidationResult) -> None:
    """Scan nsd.conf text; 'server:' and 'zone:' lines switch the current block."""
    current_block = None
    configured_zones: List[str] = []

    for line in iter_config_lines(content, ('#', ';')):
        if line == 'server:':
            current_block = 'server'
        elif line == 'zone:':
            current_block = 'zone'

        if current_block == 'server' and line.startswith('ip-address:'):
            result.add_section_line('server', line)

        if current_block == 'zone' and line.startswith('name:'):
            match = NSD_ZONE_NAME_PATTERN.match(line)
            if match:
                configured_zones.append(match.group(1))
                result.add_section_line('zone', line)

        if 'provide-xfr' in line and '0.0.0.0/0' in line:
            result.add_security_issue(
                'Zone transfer allowed from any host - restrict to your secondaries'
            )
        if 'allow-notify' in line and '0.0.0.0/0' in line:
            result.add_security_issue('NOTIFY allowed from any host - restrict to your primaries')

        if 'tcp:' in line:
            result.add_deprecated('tcp option - NSD now auto-enables TCP')

    if not configured_zones:
        result.add_suggestion('No zones configured - add zone sections')

    result.add_suggestion('Ensure zonefiles exist at configured paths')


# -------------------------------
# Unbound (unbound.conf)
# -------------------------------

UNBOUND_SECTION_PATTERN = re.compile(r'^(\w[\w-]*):')


def scan_unbound(content: str, result: ValidationResult) -> None:
    """Scan unbound.conf text; a server: section is mandatory."""
    sections = set()

    for line in iter_config_lines(content, ('#', ';')):
        match = UNBOUND_SECTION_PATTERN.match(line)
        if match:
            sections.add(match.group(1))

        if 'interface:' in line and '0.0.0.0' in line:
            result.add_section_line('interface', line)

        if 'access-control' in line and 'allow' in line and '0.0.0.0/0' in line:
            result.add_security_issue('access-control allows from 0.0.0.0/0 - publicly accessible')

        if 'edns-buffer-size' in line and '512' in line:
            result.add_suggestion(
                'EDNS buffer size set to 512 - consider increasing to 1280+ for DNSSEC'
            )

        if 'dnssec-validation:' in line and 'no' in line:
            result.add_suggestion('DNSSEC validation disabled - enable for security')

    if 'server' not in sections:
        result.add_syntax_error('Missing server: section')

    if 'forward-zone' not in sections and 'stub-zone' not in sections:
        result.add_suggestion('No forward-zone or stub-zone configured')

    if 'ratelimit' not in content:
        result.add_suggestion('No rate limiting configured - consider adding rate-limit')

    result.add_suggestion(
        'Ensure log-file has appropriate permissions (usually Unbound runs as unbound user)'
    )


# -------------------------------
# PowerDNS (pdns.conf)
# -------------------------------

POWERDNS_OPTION_PATTERN = re.compile(r'^([a-z0-9-]+)=(.+)$')


def scan_powerdns(content: str, result: ValidationResult) -> None:
    """Scan pdns.conf key=value text."""
    configured_zones: List[str] = []

    for line in iter_config_lines(content, ('#', ';')):
        match = POWERDNS_OPTION_PATTERN.match(line)
        if match:
            key, value = match.groups()

            if key == 'zone':
                configured_zones.append(value)

            if key == 'allow-recursion' and '0.0.0.0/0' in value:
                result.add_security_issue('Recursion allowed from any source - restrict this')

            if key == 'allow-axfr-ips' and '0.0.0.0/0' in value:
                result.add_security_issue(
                    'Zone transfers allowed from any IP - restrict to your secondaries'
                )

            if key == 'api' and 'yes' in value and 'api-key' not in content:
                result.add_security_issue('API enabled without api-key - add api-key for security')

            result.add_section_line(key, f"{key}={value}")

        if line.startswith('launch=') and 'gmysql' in line:
            result.add_suggestion(
                'gmysql backend - ensure MySQL/MariaDB backend is properly configured'
            )

    if not configured_zones:
        result.add_suggestion('No zones configured - add zone= entries or use database backend')

    if 'api=' not in content:
        result.add_suggestion('API not configured - enable for easier zone management')

    result.add_suggestion('Ensure database backend is properly initialized and accessible')


# -------------------------------
# djbdns (tinydns data)
# -------------------------------

TINYDNS_RECORD_KINDS = {
    '.': 'ns',
    '+': 'a',
    '&': 'delegation',
    '|': 'alias',
    '%': 'location',
    '^': 'ptr',
    '@': 'mx',
    '=': 'host',
}

TINYDNS_A_PATTERN = re.compile(r'^\+[^:]+:[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}')


def scan_djbdns(content: str, result: ValidationResult) -> None:
    """Scan tinydns data lines; the first character selects the record kind."""
    record_count = 0

    for line in iter_config_lines(content, ('#',)):
        kind = TINYDNS_RECORD_KINDS.get(line[0])
        if kind is None:
            continue

        record_count += 1
        result.add_section_line(kind, line)
        excerpt = line[:50]

        if line[0] == '.' and ':' not in line:
            result.add_syntax_error(f"Invalid NS record format: {excerpt}")
        elif line[0] == '@' and ':' not in line:
            result.add_syntax_error(f"Invalid MX record format: {excerpt}")
        elif line[0] == '+' and not TINYDNS_A_PATTERN.match(line):
            result.add_suggestion(f"A record may have invalid format: {excerpt}")

    if record_count == 0:
        result.add_syntax_error('No DNS records found in tinydns data file')

    result.add_suggestion('Ensure tinydns data file is compiled with tinydns-data before use')
    result.add_suggestion('Test with dnstracesoa to verify zone data')


Scanner = Callable[[str, ValidationResult], None]

SCANNERS: Mapping[str, Scanner] = MappingProxyType({
    'bind': scan_bind,
    'nsd': scan_nsd,
    'unbound': scan_unbound,
    'powerdns': scan_powerdns,
    'djbdns': scan_djbdns,
})


def validate_config(server_type: str, config_content: str) -> ValidationResult:
    """Validate configuration text for one server dialect.

    Args:
        server_type: Dialect name, matched case-insensitively
        config_content: Configuration file text

    Returns:
        Populated ValidationResult

    Raises:
        UnknownServerTypeError: If the dialect is not supported
    """
    normalized = server_type.lower()
    scanner = SCANNERS.get(normalized)
    if scanner is None:
        raise UnknownServerTypeError(server_type)

    result = ValidationResult(server_type=normalized)
    logger.debug(f"Validating {normalized} configuration ({len(config_content)} chars)")
    scanner(config_content, result)
    return result


def validate_dns_config(server_type, config_content) -> str:
    """Validate a DNS server configuration and render the report.

    Args:
        server_type: One of bind, nsd, unbound, powerdns, djbdns (any case)
        config_content: Configuration text (str, or UTF-8 bytes)

    Returns:
        Rendered report, the unknown-type message, or
        "Error validating config: ..." on unexpected failure

    Raises:
        TypeError: If an argument is not text
        UnicodeDecodeError: If byte input is not valid UTF-8
    """
    server_type = ensure_text(server_type, 'serverType')
    config_content = ensure_text(config_content, 'configContent')

    try:
        result = validate_config(server_type, config_content)
        return format_validation_output(result)
    except UnknownServerTypeError as e:
        logger.info(f"Rejected unknown server type: {server_type}")
        return str(e)
    except Exception as e:
        logger.exception(f"Config validation failed for {server_type}")
        return f"Error validating config: {e}"
