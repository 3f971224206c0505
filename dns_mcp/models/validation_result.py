"""Config Validation Result data model."""
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class ValidationResult:
    """Outcome of a DNS server configuration validation.

    Only syntax errors affect validity; security issues, deprecated
    options and suggestions are reported but never invalidate the config.

    Attributes:
        server_type: Lowercased dialect name (bind, nsd, unbound, powerdns, djbdns)
        is_valid: False as soon as a syntax error is recorded
        syntax_errors: Syntax problems, in scan order
        security_issues: Security findings, in scan order
        deprecated_options: Deprecated directives, in scan order
        suggestions: Advisory notes, in scan order
        sections: Detected section/option key -> raw lines seen for it
    """
    server_type: str
    is_valid: bool = True
    syntax_errors: List[str] = field(default_factory=list)
    security_issues: List[str] = field(default_factory=list)
    deprecated_options: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    sections: Dict[str, List[str]] = field(default_factory=dict)

    def add_syntax_error(self, message: str) -> None:
        """Record a syntax error and mark the config invalid."""
        self.syntax_errors.append(message)
        self.is_valid = False

    def add_security_issue(self, message: str) -> None:
        self.security_issues.append(message)

    def add_deprecated(self, message: str) -> None:
        self.deprecated_options.append(message)

    def add_suggestion(self, message: str) -> None:
        self.suggestions.append(message)

    def add_section_line(self, key: str, line: str) -> None:
        """Append a raw line under a detected section key."""
        self.sections.setdefault(key, []).append(line)

    def has_section(self, key: str) -> bool:
        return bool(self.sections.get(key))
