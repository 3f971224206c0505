"""Options for DNS server configuration generation."""
from dataclasses import dataclass
from typing import Any, Mapping, Optional


LOGGING_LEVELS = ('minimal', 'standard', 'verbose')


@dataclass(frozen=True)
class GeneratorOptions:
    """Feature switches for a generated configuration.

    Attributes:
        dnssec: Turn on DNSSEC validation or signing support
        ratelimit: Add response rate limiting
        logging: Logging detail, one of minimal, standard, verbose
    """
    dnssec: bool = False
    ratelimit: bool = False
    logging: str = 'standard'

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "GeneratorOptions":
        """Build options from a tool-call options object.

        Args:
            data: Mapping with optional dnssec, ratelimit and logging keys, or None

        Returns:
            GeneratorOptions with defaults for absent keys

        Raises:
            TypeError: If data is not a mapping or a switch is not a boolean
            ValueError: If logging is not a known level
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError(f"options must be an object, got {type(data).__name__}")

        switches = {}
        for key in ('dnssec', 'ratelimit'):
            value = data.get(key)
            if value is None:
                continue
            if not isinstance(value, bool):
                raise TypeError(f"options.{key} must be a boolean, got {type(value).__name__}")
            switches[key] = value

        logging = data.get('logging')
        if logging is None:
            logging = 'standard'
        if logging not in LOGGING_LEVELS:
            raise ValueError(
                f"options.logging must be one of {', '.join(LOGGING_LEVELS)}, got {logging!r}"
            )

        return cls(logging=logging, **switches)
