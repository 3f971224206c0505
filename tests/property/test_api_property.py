"""Property tests for the tool server endpoints.

Property 13: Tool Call Envelope
For any tool call, the response SHALL carry the report text in a single
text content item, and failures SHALL be flagged with isError.
"""
from hypothesis import given, strategies as st, settings, HealthCheck

from dns_mcp.api.app import create_app
from dns_mcp.services.zone_analyzer import analyze_zone_file


def call(client, name, arguments=None, include_arguments=True):
    body = {"name": name}
    if include_arguments:
        body["arguments"] = arguments
    return client.post('/api/tools/call', json=body)


def response_text(response):
    data = response.get_json()
    assert len(data["content"]) == 1
    assert data["content"][0]["type"] == "text"
    return data["content"][0]["text"]


class TestToolServer:
    """Property 13: Tool Call Envelope"""

    def test_health(self, client):
        """The health endpoint SHALL report ok."""
        response = client.get('/api/health')

        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"

    def test_tools_listing(self, client):
        """Both tools SHALL be listed with their input schemas."""
        response = client.get('/api/tools')
        tools = response.get_json()["tools"]

        assert [tool["name"] for tool in tools] == [
            'analyze_zone', 'validate_config', 'generate_config'
        ]
        assert tools[0]["inputSchema"]["required"] == ["zoneContent", "zoneName"]
        assert tools[1]["inputSchema"]["properties"]["serverType"]["enum"] == [
            'bind', 'nsd', 'unbound', 'powerdns', 'djbdns'
        ]

    def test_analyze_zone_call(self, client, valid_zone):
        """analyze_zone SHALL return the rendered report."""
        response = call(client, 'analyze_zone', {
            "zoneContent": valid_zone,
            "zoneName": "example.com",
        })

        assert response.status_code == 200
        assert "isError" not in response.get_json()
        assert response_text(response) == analyze_zone_file(valid_zone, "example.com")

    def test_unknown_server_type_is_a_normal_report(self, client):
        """An unsupported server type SHALL be returned as plain report text."""
        response = call(client, 'validate_config', {
            "serverType": "ftp",
            "configContent": "",
        })

        assert response.status_code == 200
        assert response_text(response) == (
            "Error: Unknown server type 'ftp'. Supported types: bind, nsd, unbound, powerdns, djbdns"
        )

    def test_absent_arguments(self, client):
        """A call without arguments SHALL be rejected before tool lookup."""
        response = call(client, 'no_such_tool', include_arguments=False)

        assert response.status_code == 400
        assert response.get_json()["isError"] is True
        assert response_text(response) == "Error: No arguments provided"

    def test_unknown_tool(self, client):
        """An unregistered tool SHALL return 404."""
        response = call(client, 'dig', {})

        assert response.status_code == 404
        assert response_text(response) == "Error: Unknown tool: dig"

    def test_missing_required_argument(self, client):
        """A missing required argument SHALL return 400 naming it."""
        response = call(client, 'analyze_zone', {"zoneContent": ""})

        assert response.status_code == 400
        assert response_text(response) == "Error: Missing required arguments: zoneName"

    def test_non_text_argument(self, client):
        """A non-text argument SHALL return 422."""
        response = call(client, 'analyze_zone', {"zoneContent": 123, "zoneName": "x"})

        assert response.status_code == 422
        assert response.get_json()["isError"] is True
        assert response_text(response) == "Error: zoneContent must be text, got int"

    @given(body=st.one_of(
        st.lists(st.integers(), max_size=3),
        st.text(max_size=10),
        st.integers(),
        st.booleans(),
    ))
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_non_object_body_is_rejected(self, client, body):
        """A JSON body that is not an object SHALL return 400 with the error envelope.

        Feature: dns-mcp-server, Property 13: Tool Call Envelope
        """
        response = client.post('/api/tools/call', json=body)

        assert response.status_code == 400
        assert response.get_json()["isError"] is True
        assert response_text(response) == "Error: Request body must be a JSON object"

    def test_array_body_is_rejected(self, client):
        """A JSON array body SHALL return the error envelope, not an HTML error page."""
        response = client.post('/api/tools/call', json=[1, 2])

        assert response.status_code == 400
        assert response.is_json
        assert response_text(response) == "Error: Request body must be a JSON object"

    def test_non_object_arguments_are_rejected(self, client):
        """List or string arguments SHALL return 400 naming the received type."""
        as_list = call(client, 'analyze_zone', ["x"])
        as_text = call(client, 'analyze_zone', "zoneContent")

        assert as_list.status_code == 400
        assert response_text(as_list) == "Error: Arguments must be an object, got list"
        assert as_text.status_code == 400
        assert response_text(as_text) == "Error: Arguments must be an object, got str"

    def test_non_text_tool_name_is_unknown(self, client):
        """A tool name that is not a string SHALL be treated as unknown."""
        response = call(client, ['analyze_zone'], {})

        assert response.status_code == 404
        assert response_text(response) == "Error: Unknown tool: ['analyze_zone']"

    def test_generate_config_call(self, client):
        """generate_config SHALL return configuration text."""
        response = call(client, 'generate_config', {
            "serverType": "bind",
            "configType": "authoritative",
            "zones": ["example.com"],
            "options": {"dnssec": True},
        })

        assert response.status_code == 200
        text = response_text(response)
        assert text.startswith('// BIND 9 Configuration File')
        assert 'zone "example.com" {' in text

    def test_generate_config_bad_options(self, client):
        """Malformed generator options SHALL return 422."""
        wrong_level = call(client, 'generate_config', {
            "serverType": "nsd",
            "configType": "authoritative",
            "options": {"logging": "loud"},
        })
        wrong_zones = call(client, 'generate_config', {
            "serverType": "nsd",
            "configType": "authoritative",
            "zones": "example.com",
        })

        assert wrong_level.status_code == 422
        assert response_text(wrong_level) == (
            "Error: options.logging must be one of minimal, standard, verbose, got 'loud'"
        )
        assert wrong_zones.status_code == 422
        assert response_text(wrong_zones) == "Error: zones must be a list of names, got str"

    @given(
        server_type=st.sampled_from(['bind', 'NSD', 'Unbound', 'powerdns', 'djbdns']),
        content=st.text(max_size=300),
    )
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_validate_config_always_returns_report(self, client, server_type, content):
        """Any text config SHALL produce a 200 report for a supported type.

        Feature: dns-mcp-server, Property 13: Tool Call Envelope
        """
        response = call(client, 'validate_config', {
            "serverType": server_type,
            "configContent": content,
        })

        assert response.status_code == 200
        assert response_text(response).startswith(
            f"=== {server_type.upper()} Configuration Validation ==="
        )


class TestLogEndpoint:
    """Tool calls SHALL be visible in the log endpoint"""

    def test_logs_record_success_and_failure(self, client, scenario_zone):
        """Successful and failed calls SHALL be logged with their status."""
        call(client, 'analyze_zone', {"zoneContent": scenario_zone, "zoneName": "example.com"})
        call(client, 'analyze_zone', {"zoneContent": scenario_zone})

        response = client.get('/api/logs?limit=10')
        data = response.get_json()

        assert response.status_code == 200
        assert data["count"] == 2
        assert [entry["status"] for entry in data["logs"]] == ["success", "failed"]
        assert data["logs"][1]["context"]["error_class"] == "ToolArgumentError"

    def test_logs_unavailable_without_logger_service(self):
        """Without a logger service the log endpoint SHALL return 503."""
        app = create_app()
        app.config['TESTING'] = True

        response = app.test_client().get('/api/logs')

        assert response.status_code == 503
        assert "logger_service" in response.get_json()["error"]
