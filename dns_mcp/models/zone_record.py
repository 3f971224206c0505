"""Zone Record data model."""
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ZoneRecord:
    """Represents one resource record parsed from a zone file.

    Attributes:
        name: Owner name token, relative ("@", "www") or absolute ("www.example.com.")
        type: Uppercased record type mnemonic (A, AAAA, MX, NS, SOA, ...)
        value: Remaining tokens joined with single spaces
        line: Logical line the record came from (multi-line records merged)
        ttl: Explicit TTL in seconds, None when the line carried no TTL token
    """
    name: str
    type: str
    value: str
    line: str
    ttl: Optional[int] = None

    @property
    def has_ttl(self) -> bool:
        """Check if the record carried an explicit TTL."""
        return self.ttl is not None

    @property
    def value_tokens(self) -> List[str]:
        """Whitespace-separated tokens of the record value."""
        return self.value.split()
