"""DNS MCP Server - zone file analysis and DNS server config validation."""

__version__ = "1.0.0"
