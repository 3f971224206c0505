"""Pytest configuration and fixtures."""
import os
import pytest
from hypothesis import settings

from dns_mcp.api.app import create_app
from dns_mcp.config import Config
from dns_mcp.services.logger_service import LoggerService

# Hypothesis profiles
settings.register_profile("ci", max_examples=100)
settings.register_profile("dev", max_examples=10)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


VALID_ZONE = """\
$ORIGIN example.com.
$TTL 3600
; example.com zone
@   IN  SOA ns1.example.com. hostmaster.example.com. (
        2024011701 ; serial
        3600       ; refresh
        1800       ; retry
        604800     ; expire
        86400 )    ; minimum

@       IN  NS   ns1.example.com.
@       IN  NS   ns2.example.com.
ns1  3600   IN  A    192.0.2.1
ns2  3600   IN  A    192.0.2.2
"""

SCENARIO_ZONE = """\
@  IN SOA ns1.example.com. admin.example.com. ( 2024011701 3600 1800 604800 86400 )
@  IN NS ns1.example.com.
www 300 IN A 192.0.2.10
www IN CNAME example.com.
"""


@pytest.fixture
def valid_zone():
    """A well-formed zone with one multi-line SOA and two NS records."""
    return VALID_ZONE


@pytest.fixture
def scenario_zone():
    """Zone with a single NS and a CNAME clashing with an A record."""
    return SCENARIO_ZONE


@pytest.fixture
def logger_service():
    """Fresh in-memory logger service."""
    return LoggerService(max_entries=50)


@pytest.fixture
def app(logger_service):
    """Flask app wired with a logger service."""
    app = create_app(config=Config(), logger_service=logger_service)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
