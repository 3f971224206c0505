"""Tool descriptors and dispatch for the request/response tool server."""
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from dns_mcp.models import LOGGING_LEVELS
from dns_mcp.services.config_generator import GENERATORS, SERVER_ROLES, generate_config
from dns_mcp.services.config_validator import SUPPORTED_SERVER_TYPES, validate_dns_config
from dns_mcp.services.zone_analyzer import analyze_zone_file


logger = logging.getLogger(__name__)


class UnknownToolError(LookupError):
    """Raised when a tool name is not registered."""


class ToolArgumentError(ValueError):
    """Raised when a tool call is missing arguments."""


@dataclass(frozen=True)
class ToolSpec:
    """A callable tool exposed by the server.

    Attributes:
        name: Tool name used in call requests
        description: Human readable description
        input_schema: JSON schema of the arguments object
        handler: Function receiving required then optional arguments positionally
        required: Argument names that must be present, in handler order
        optional: Argument names passed after the required ones, None when absent
    """
    name: str
    description: str
    input_schema: Dict[str, Any]
    handler: Callable[..., str]
    required: Tuple[str, ...] = field(default_factory=tuple)
    optional: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Convert to the descriptor returned by the tool listing."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


ANALYZE_ZONE = ToolSpec(
    name='analyze_zone',
    description=(
        'Analyze a DNS zone file for errors, best practices, and optimization '
        'opportunities. Checks SOA records, NS records, DNSSEC, and common misconfigurations.'
    ),
    input_schema={
        "type": "object",
        "properties": {
            "zoneContent": {
                "type": "string",
                "description": "DNS zone file content to analyze",
            },
            "zoneName": {
                "type": "string",
                "description": "Zone name (e.g., example.com)",
            },
        },
        "required": ["zoneContent", "zoneName"],
    },
    handler=analyze_zone_file,
    required=('zoneContent', 'zoneName'),
)

VALIDATE_CONFIG = ToolSpec(
    name='validate_config',
    description=(
        'Validate DNS server configuration files (BIND named.conf, NSD nsd.conf, '
        'Unbound unbound.conf, PowerDNS pdns.conf, tinydns data). '
        'Checks syntax, security, and best practices.'
    ),
    input_schema={
        "type": "object",
        "properties": {
            "serverType": {
                "type": "string",
                "enum": list(SUPPORTED_SERVER_TYPES),
                "description": "DNS server type",
            },
            "configContent": {
                "type": "string",
                "description": "Configuration file content",
            },
        },
        "required": ["serverType", "configContent"],
    },
    handler=validate_dns_config,
    required=('serverType', 'configContent'),
)

GENERATE_CONFIG = ToolSpec(
    name='generate_config',
    description=(
        'Generate DNS server configuration files based on requirements. '
        'Supports BIND, NSD, Unbound, PowerDNS with security best practices.'
    ),
    input_schema={
        "type": "object",
        "properties": {
            "serverType": {
                "type": "string",
                "enum": list(GENERATORS),
                "description": "DNS server type",
            },
            "configType": {
                "type": "string",
                "enum": list(SERVER_ROLES),
                "description": "Server role",
            },
            "zones": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Zone names to configure (optional)",
            },
            "options": {
                "type": "object",
                "properties": {
                    "dnssec": {"type": "boolean", "description": "Enable DNSSEC"},
                    "ratelimit": {"type": "boolean", "description": "Enable rate limiting"},
                    "logging": {"type": "string", "enum": list(LOGGING_LEVELS)},
                },
            },
        },
        "required": ["serverType", "configType"],
    },
    handler=generate_config,
    required=('serverType', 'configType'),
    optional=('zones', 'options'),
)

TOOLS: Mapping[str, ToolSpec] = MappingProxyType({
    ANALYZE_ZONE.name: ANALYZE_ZONE,
    VALIDATE_CONFIG.name: VALIDATE_CONFIG,
    GENERATE_CONFIG.name: GENERATE_CONFIG,
})


def list_tools() -> List[dict]:
    """Get descriptors for all registered tools."""
    return [tool.to_dict() for tool in TOOLS.values()]


def call_tool(name: str, arguments: Optional[Mapping[str, Any]]) -> str:
    """Invoke a registered tool.

    Args:
        name: Tool name
        arguments: Tool arguments keyed by schema property name

    Returns:
        Report text produced by the tool

    Raises:
        UnknownToolError: If the tool is not registered
        ToolArgumentError: If arguments are absent, not an object or incomplete
        TypeError: If an argument has the wrong type
        UnicodeDecodeError: If byte input is not valid UTF-8
    """
    if arguments is None:
        raise ToolArgumentError("No arguments provided")
    if not isinstance(arguments, Mapping):
        raise ToolArgumentError(
            f"Arguments must be an object, got {type(arguments).__name__}"
        )

    tool = TOOLS.get(name) if isinstance(name, str) else None
    if tool is None:
        raise UnknownToolError(f"Unknown tool: {name}")

    missing = [arg for arg in tool.required if arguments.get(arg) is None]
    if missing:
        raise ToolArgumentError(f"Missing required arguments: {', '.join(missing)}")

    logger.debug(f"Dispatching tool {name}")
    values = [arguments[arg] for arg in tool.required]
    values.extend(arguments.get(arg) for arg in tool.optional)
    return tool.handler(*values)
