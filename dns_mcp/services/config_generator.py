"""DNS server configuration and zone file generator.

Output is deterministic template text with conservative defaults: no open
recursion, no open zone transfers, and an API key whenever an API is
enabled. Placeholders such as <secondary_ip> are left for the operator.
"""
import logging
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional, Sequence

from dns_mcp.models import GeneratorOptions
from dns_mcp.services.text_utils import ensure_text


logger = logging.getLogger(__name__)


SERVER_ROLES = ('authoritative', 'recursive', 'both')


def _serves_zones(role: str) -> bool:
    return role in ('authoritative', 'both')


def _resolves(role: str) -> bool:
    return role in ('recursive', 'both')


def build_bind_config(role: str, zones: Sequence[str], options: GeneratorOptions) -> List[str]:
    """named.conf with an internals ACL and one zone block per zone."""
    lines = [
        '// BIND 9 Configuration File',
        '// Generated configuration - customize as needed',
        '',
        'include "/etc/bind/named.conf.local";',
        'include "/etc/bind/named.conf.default-zones";',
        '',
        'acl internals {',
        '  127.0.0.1;',
        '  ::1;',
        '  // Add your trusted networks here',
        '};',
        '',
        'options {',
        '  directory "/var/cache/bind";',
        '  listen-on port 53 { 127.0.0.1; };',
        '  listen-on-v6 port 53 { ::1; };',
        '',
    ]

    if _resolves(role):
        lines.append('  recursion yes; allow-recursion { internals; };')
    else:
        lines.append('  recursion no;')
    lines.append('  allow-query { any; };')
    lines.append('')

    lines.append('  dnssec-enable yes;')
    lines.append('  dnssec-validation auto;' if options.dnssec else '  dnssec-validation no;')
    lines.append('')

    lines.append('  allow-transfer { none; };  // Configure for secondary servers')
    lines.append('  notify yes;')
    lines.append('  also-notify { };  // Add secondary server IPs')
    lines.append('')

    if options.ratelimit:
        lines.extend([
            '  rate-limit {',
            '    responses-per-second 5;',
            '    window 5;',
            '  };',
            '',
        ])

    if options.logging == 'verbose':
        lines.append('  log-queries yes;')

    lines.append('};')
    lines.append('')

    if zones:
        lines.append('// Zone definitions')
        for zone in zones:
            lines.append(f'zone "{zone}" {{')
            if _serves_zones(role):
                lines.append('  type primary;')
                lines.append(f'  file "/etc/bind/zones/db.{zone}";')
            else:
                lines.append('  type secondary;')
                lines.append('  primaries { <primary_ip>; };')
                lines.append(f'  file "/var/cache/bind/db.{zone}";')
            lines.append('};')

    return lines


def build_nsd_config(role: str, zones: Sequence[str], options: GeneratorOptions) -> List[str]:
    """nsd.conf with one zone: block per zone."""
    lines = [
        '# NSD Configuration File',
        '# Generated configuration - customize as needed',
        '',
        'server:',
        '  # Server identity',
        '  identity "NSD"',
        '  version "NSD"',
        '',
        '  # Listening interfaces',
        '  ip-address: 127.0.0.1',
        '  ip-address: ::1',
        '',
        '  # Port',
        '  port: 53',
        '',
    ]

    if _serves_zones(role):
        lines.append('  # Authoritative server configuration')
        lines.append('  hide-version: yes')
    lines.append('')

    if options.logging == 'verbose':
        lines.append('  log-time-ascii: yes')
    lines.append('')

    for zone in zones:
        lines.extend([
            'zone:',
            f'  name: {zone}',
            f'  zonefile: "/etc/nsd/{zone}.zone"',
            '  notify: <secondary_ip> NOKEY',
            '  provide-xfr: <secondary_ip> NOKEY',
        ])

    return lines


UNBOUND_VERBOSITY = {'minimal': 0, 'standard': 1, 'verbose': 2}


def build_unbound_config(role: str, zones: Sequence[str], options: GeneratorOptions) -> List[str]:
    """unbound.conf; zones become forward-zone entries unless purely authoritative."""
    lines = [
        '# Unbound Configuration File',
        '# Generated configuration - customize as needed',
        '',
        'server:',
        '  # Network interfaces',
        '  interface: 127.0.0.1',
        '  interface: ::1',
        '  port: 53',
        '',
    ]

    if _resolves(role):
        lines.extend([
            '  # Recursive resolver',
            '  access-control: 127.0.0.0/8 allow',
            '  access-control: ::1/128 allow',
            '  access-control: 0.0.0.0/0 deny',
            '',
        ])

    lines.extend([
        '  # Performance',
        '  num-threads: 2',
        '  msg-buffer-size: 65552',
        '  msg-cache-size: 4m',
        '  rrset-cache-size: 8m',
        '',
    ])

    if options.dnssec:
        lines.extend([
            '  # DNSSEC',
            '  dnssec-validation: auto',
            '  root-hints: "/usr/share/dns/root.hints"',
            '',
        ])

    lines.append('  # Logging')
    lines.append(f"  verbosity: {UNBOUND_VERBOSITY[options.logging]}")
    lines.append('')

    if options.ratelimit:
        lines.extend([
            '  # Rate limiting',
            '  ratelimit: 1000',
            '',
        ])

    if zones and role != 'authoritative':
        lines.extend([
            'forward-zone:',
            '  name: "."',
            '  forward-addr: 8.8.8.8',
            '  forward-addr: 8.8.4.4',
            '',
        ])
        for zone in zones:
            lines.extend([
                'forward-zone:',
                f'  name: "{zone}"',
                '  forward-addr: 127.0.0.1@53',
            ])

    return lines


POWERDNS_LOGLEVEL = {'minimal': 3, 'standard': 4, 'verbose': 6}


def build_powerdns_config(role: str, zones: Sequence[str], options: GeneratorOptions) -> List[str]:
    """pdns.conf using the bind backend; zones live in bind-config, not here."""
    lines = [
        '# PowerDNS Configuration',
        '# Generated configuration - customize as needed',
        '',
        '# Server',
        'daemon=yes',
        'guardian=yes',
        'local-port=5300',
        'local-address=127.0.0.1',
        '',
        '# Logging',
        f"loglevel={POWERDNS_LOGLEVEL[options.logging]}",
        '',
    ]

    if _serves_zones(role):
        lines.extend([
            '# Authoritative server',
            'master=yes',
            'slave=no',
            '',
        ])
    else:
        lines.extend([
            '# Recursive server',
            'master=no',
            'slave=no',
            'recursor=127.0.0.1:5301',
            '',
        ])

    lines.extend([
        '# Backend',
        'launch=bind',
        'bind-config=/etc/powerdns/bind.conf',
        '',
    ])

    if options.dnssec:
        lines.extend(['# DNSSEC', 'dnssec=yes', ''])

    if options.ratelimit:
        lines.extend(['# Rate limiting', 'out-of-zone-additional-processing=no', ''])

    lines.extend([
        '# API',
        'api=yes',
        'api-key=changeme',
        'api-readonly=no',
    ])
    return lines


Generator = Callable[[str, Sequence[str], GeneratorOptions], List[str]]

GENERATORS: Mapping[str, Generator] = MappingProxyType({
    'bind': build_bind_config,
    'nsd': build_nsd_config,
    'unbound': build_unbound_config,
    'powerdns': build_powerdns_config,
})


def _coerce_zones(zones: Any) -> List[str]:
    if zones is None:
        return []
    if isinstance(zones, (str, bytes)) or not isinstance(zones, (list, tuple)):
        raise TypeError(f"zones must be a list of names, got {type(zones).__name__}")
    return [ensure_text(zone, 'zones[]') for zone in zones]


def generate_config(server_type, config_type, zones=None, options=None) -> str:
    """Generate a DNS server configuration.

    Args:
        server_type: One of bind, nsd, unbound, powerdns (any case)
        config_type: Server role: authoritative, recursive or both (any case)
        zones: Optional list of zone names
        options: Optional mapping with dnssec, ratelimit and logging keys

    Returns:
        Configuration text, an unknown type/role message, or
        "Error generating config: ..." on unexpected failure

    Raises:
        TypeError: If an argument has the wrong shape
        ValueError: If options.logging is not a known level
    """
    server_type = ensure_text(server_type, 'serverType').lower()
    role = ensure_text(config_type, 'configType').lower()
    zone_names = _coerce_zones(zones)
    generator_options = GeneratorOptions.from_mapping(options)

    generator = GENERATORS.get(server_type)
    if generator is None:
        logger.info(f"Rejected unknown server type for generation: {server_type}")
        return (
            f"Error: Unknown server type '{server_type}'. "
            f"Supported: {', '.join(GENERATORS)}"
        )
    if role not in SERVER_ROLES:
        logger.info(f"Rejected unknown config type for generation: {role}")
        return (
            f"Error: Unknown config type '{role}'. "
            f"Supported: {', '.join(SERVER_ROLES)}"
        )

    try:
        lines = generator(role, zone_names, generator_options)
    except Exception as e:
        logger.exception(f"Config generation failed for {server_type}")
        return f"Error generating config: {e}"

    logger.debug(f"Generated {server_type} {role} config with {len(zone_names)} zone(s)")
    return '\n'.join(lines)


def generate_zone_file(
    zone_name: str,
    primary_ns: str = 'ns1.example.com',
    admin_email: str = 'admin.example.com',
    options: Optional[GeneratorOptions] = None,
    now: Optional[datetime] = None,
) -> str:
    """Generate a starter zone file.

    The SOA serial is the Unix time of ``now``, so passing a fixed
    ``now`` gives reproducible output.

    Args:
        zone_name: Zone apex without trailing dot
        primary_ns: Primary name server host name
        admin_email: Responsible mailbox in SOA form (dots for '@')
        options: Generator options; only dnssec is used
        now: Generation time, defaults to the current UTC time

    Returns:
        Zone file text
    """
    options = options or GeneratorOptions()
    now = now or datetime.now(timezone.utc)
    serial = int(now.timestamp())

    lines = [
        f"; Zone file for {zone_name}",
        f"; Generated: {now.isoformat()}",
        '',
        f"$ORIGIN {zone_name}.",
        '$TTL 3600',
        '',
        '; SOA record',
        f"@  IN  SOA  {primary_ns}. {admin_email}. (",
        f"           {serial}  ; Serial",
        '           3600     ; Refresh',
        '           1800     ; Retry',
        '           604800   ; Expire',
        '           300 )    ; Minimum TTL',
        '',
        '; NS records',
        f"@  IN  NS  {primary_ns}.",
        '@  IN  NS  ns2.example.com.',
        '',
        '; A records',
        '@           IN  A      192.0.2.1',
        'www         IN  A      192.0.2.1',
        'mail        IN  A      192.0.2.2',
        '',
        '; MX records',
        '@           IN  MX  10 mail.example.com.',
        '',
        '; CNAME records',
        'alias       IN  CNAME  www',
        '',
        '; CAA records',
        '@           IN  CAA  0 issue "letsencrypt.org"',
        '',
        '; TXT/SPF records',
        '@           IN  TXT  "v=spf1 mx -all"',
        '_dmarc      IN  TXT  "v=DMARC1; p=none;"',
        '',
    ]

    if options.dnssec:
        lines.extend([
            '; DNSSEC records (would be added by DNSSEC signing)',
            '; DNSKEY, DS, RRSIG records would appear here',
            '',
        ])

    lines.append(f"; End of zone file for {zone_name}")
    return '\n'.join(lines)
