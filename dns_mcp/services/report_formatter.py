"""Plain-text rendering of analysis and validation results.

Section order and labels are part of the output contract: header, status,
then each non-empty list section, then statistics. Bullets are indented
two spaces and start with '- '.
"""
from typing import List

from dns_mcp.models import AnalysisResult, ValidationResult


def _status_line(is_valid: bool) -> str:
    return 'Status: VALID' if is_valid else 'Status: INVALID'


def _append_section(lines: List[str], title: str, items: List[str]) -> None:
    """Append a titled bullet list followed by a blank line; skip if empty."""
    if not items:
        return
    lines.append(f"{title}:")
    lines.extend(f"  - {item}" for item in items)
    lines.append('')


def format_analysis_output(result: AnalysisResult) -> str:
    """Render a zone analysis report.

    Args:
        result: Populated analysis result

    Returns:
        Report text, lines joined with '\\n'
    """
    stats = result.stats
    lines = ['=== DNS Zone File Analysis ===', '', _status_line(result.is_valid), '']

    _append_section(lines, 'ERRORS', result.errors)
    _append_section(lines, 'WARNINGS', result.warnings)
    _append_section(lines, 'SUGGESTIONS', result.suggestions)

    lines.append('STATISTICS:')
    lines.append(f"  Total Records: {stats.total_records}")
    lines.append(f"  SOA Records: {stats.soa_count}")
    lines.append(f"  NS Records: {stats.ns_count}")
    lines.append('')
    lines.append('Record Types:')
    for record_type, count in stats.types_by_frequency():
        lines.append(f"    {record_type}: {count}")
    lines.append('')

    if stats.ttl.has_values:
        lines.append('TTL Statistics:')
        lines.append(f"  Minimum: {stats.ttl.minimum}s")
        lines.append(f"  Maximum: {stats.ttl.maximum}s")
        lines.append(f"  Average: {stats.ttl.average}s")

    return '\n'.join(lines)


def format_validation_output(result: ValidationResult) -> str:
    """Render a configuration validation report.

    Args:
        result: Populated validation result

    Returns:
        Report text, lines joined with '\\n'
    """
    lines = [
        f"=== {result.server_type.upper()} Configuration Validation ===",
        '',
        _status_line(result.is_valid),
        '',
    ]

    _append_section(lines, 'SYNTAX ERRORS', result.syntax_errors)
    _append_section(lines, 'SECURITY ISSUES', result.security_issues)
    _append_section(lines, 'DEPRECATED OPTIONS', result.deprecated_options)
    _append_section(lines, 'SUGGESTIONS', result.suggestions)

    if result.sections:
        lines.append('DETECTED SECTIONS:')
        for section, items in result.sections.items():
            lines.append(f"  {section}: {len(items)} item(s)")

    return '\n'.join(lines)
