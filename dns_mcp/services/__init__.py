# Services Package
from dns_mcp.services.zone_analyzer import ZoneFileAnalyzer, analyze_zone_file
from dns_mcp.services.config_validator import (
    SCANNERS,
    SUPPORTED_SERVER_TYPES,
    UnknownServerTypeError,
    validate_config,
    validate_dns_config,
)
from dns_mcp.services.config_generator import GENERATORS, generate_config, generate_zone_file
from dns_mcp.services.report_formatter import format_analysis_output, format_validation_output
from dns_mcp.services.logger_service import LoggerService
from dns_mcp.services.tool_registry import TOOLS, call_tool, list_tools

__all__ = [
    'ZoneFileAnalyzer',
    'analyze_zone_file',
    'SCANNERS',
    'SUPPORTED_SERVER_TYPES',
    'UnknownServerTypeError',
    'validate_config',
    'validate_dns_config',
    'GENERATORS',
    'generate_config',
    'generate_zone_file',
    'format_analysis_output',
    'format_validation_output',
    'LoggerService',
    'TOOLS',
    'call_tool',
    'list_tools',
]
