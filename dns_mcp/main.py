"""Main entry point for the DNS tool server."""
import sys
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    from dns_mcp.config import Config, ConfigurationError
    from dns_mcp.api.app import create_app
    from dns_mcp.services.logger_service import LoggerService

    logger.info("Starting DNS MCP Server")

    # Load configuration
    try:
        config = Config.from_env()
        logger.info("Configuration loaded successfully")
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)

    logger_service = LoggerService(max_entries=config.log_buffer_size)
    app = create_app(config=config, logger_service=logger_service)

    logger_service.log(
        "INFO",
        f"DNS MCP Server started on port {config.port}",
    )

    # Run Flask app
    logger.info(f"Starting web server on {config.host}:{config.port}")
    try:
        app.run(host=config.host, port=config.port, debug=config.debug)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        logger.info("Shutdown complete")


if __name__ == '__main__':
    main()
