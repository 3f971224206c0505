"""Flask tool server for the DNS analysis tools."""
import logging
import time
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request

from dns_mcp import __version__
from dns_mcp.config import Config
from dns_mcp.services.logger_service import LoggerService
from dns_mcp.services.tool_registry import (
    ToolArgumentError,
    UnknownToolError,
    call_tool,
    list_tools,
)


logger = logging.getLogger(__name__)


def _text_response(text: str, status_code: int = 200, is_error: bool = False):
    """Wrap report text in the tool response envelope."""
    body = {"content": [{"type": "text", "text": text}]}
    if is_error:
        body["isError"] = True
    return jsonify(body), status_code


def create_app(
    config: Optional[Config] = None,
    logger_service: Optional[LoggerService] = None,
) -> Flask:
    """Create Flask application with dependencies.

    Args:
        config: Application configuration
        logger_service: Logger service instance

    Returns:
        Flask app
    """
    app = Flask(__name__)
    if config is not None:
        app.config['MAX_CONTENT_LENGTH'] = config.max_content_length

    # Store services in app context
    app.logger_service = logger_service
    app.config_obj = config

    def require_services(*services):
        """Decorator to check if required services are available."""
        def decorator(f):
            @wraps(f)
            def decorated_function(*args, **kwargs):
                for service_name in services:
                    if getattr(app, service_name, None) is None:
                        return jsonify({
                            "error": f"Service {service_name} not available"
                        }), 503
                return f(*args, **kwargs)
            return decorated_function
        return decorator

    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({"status": "ok", "version": __version__})

    @app.route('/api/tools')
    def get_tools():
        """List available tools."""
        return jsonify({"tools": list_tools()})

    @app.route('/api/tools/call', methods=['POST'])
    def post_tool_call():
        """Invoke a tool and return its report."""
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            logger.warning(f"Rejected tool call body of type {type(data).__name__}")
            return _text_response(
                "Error: Request body must be a JSON object", 400, is_error=True
            )

        name = data.get('name')
        arguments = data.get('arguments')

        started = time.perf_counter()
        try:
            text = call_tool(name, arguments)
        except ToolArgumentError as e:
            _record_failure(name, e, started)
            return _text_response(f"Error: {e}", 400, is_error=True)
        except UnknownToolError as e:
            _record_failure(name, e, started)
            return _text_response(f"Error: {e}", 404, is_error=True)
        except (TypeError, ValueError) as e:
            _record_failure(name, e, started)
            return _text_response(f"Error: {e}", 422, is_error=True)
        except Exception as e:
            logger.exception(f"Tool {name} crashed")
            _record_failure(name, e, started)
            return _text_response(f"Error: {e}", 500, is_error=True)

        if app.logger_service:
            app.logger_service.log_tool_call(name, _elapsed_ms(started), len(text))
        return _text_response(text)

    def _record_failure(name, error: Exception, started: float) -> None:
        if app.logger_service:
            app.logger_service.log_tool_failure(name, error, _elapsed_ms(started))
        else:
            logger.warning(f"Tool {name} failed: {error}")

    @app.route('/api/logs')
    @require_services('logger_service')
    def get_logs():
        """Get recent log entries."""
        limit = request.args.get('limit', 100, type=int)
        limit = min(limit, 500)  # Cap at 500

        logs = app.logger_service.get_logs_as_dicts(limit)

        return jsonify({
            "logs": logs,
            "count": len(logs),
        })

    return app


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)
