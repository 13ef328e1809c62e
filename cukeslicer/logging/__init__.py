"""
Cucumber Slicer logging module

Structured logging for the assembly pipeline. Messages carry queryable
fields and are written as NDJSON (default) or human-readable text.

Usage:
    from cukeslicer.logging import get_logger

    logger = get_logger("cukeslicer.assembly")
    logger.warning("Scenario skipped", scenario="Search for Cheese", tags="@wip")

Configuration:
    # Via environment variables
    export CUKESLICER_LOG_LEVEL=DEBUG
    export CUKESLICER_LOG_FORMAT=text

    # Via the `logging:` section of the CLI configuration file
    from cukeslicer.logging.config import LoggingConfig
    LoggingConfig.setup_logging(config_path="config.yml")
"""

from cukeslicer.logging.structured_logger import LoggerFactory, StructuredLogger, LogLevel

__all__ = [
    "LoggerFactory",
    "StructuredLogger",
    "LogLevel",
    "get_logger",
]


def get_logger(name: str) -> StructuredLogger:
    """
    Get a logger instance with the factory's current configuration.

    Args:
        name: Logger name (usually module path like "cukeslicer.assembly")

    Returns:
        StructuredLogger instance
    """
    return LoggerFactory.get_logger(name)
