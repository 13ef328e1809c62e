"""
Logging configuration for Cucumber Slicer

Settings come from the `logging:` section of the CLI configuration file and
from CUKESLICER_LOG_* environment variables, in that order of precedence
(environment wins), on top of DEFAULT_CONFIG.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from cukeslicer.logging.structured_logger import LoggerFactory


class LoggingConfig:
    """
    Example configuration file section:
        logging:
          level: DEBUG
          format: text        # json or text
          output: file        # stderr, stdout, file
          file_path: build/cukeslicer.log
    """

    DEFAULT_CONFIG = {
        "level": "INFO",
        "format": "json",
        "output": "stderr",
        "file_path": None,
    }

    ENV_MAPPINGS = {
        "CUKESLICER_LOG_LEVEL": "level",
        "CUKESLICER_LOG_FORMAT": "format",
        "CUKESLICER_LOG_OUTPUT": "output",
        "CUKESLICER_LOG_FILE": "file_path",
    }

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> Dict[str, Any]:
        config = cls.DEFAULT_CONFIG.copy()
        if config_path and Path(config_path).is_file():
            file_config = cls._load_from_file(config_path)
            if isinstance(file_config, dict) and isinstance(file_config.get("logging"), dict):
                config.update(file_config["logging"])

        for env_var, config_key in cls.ENV_MAPPINGS.items():
            if env_var in os.environ:
                config[config_key] = os.environ[env_var]
        return config

    @classmethod
    def _load_from_file(cls, config_path: str) -> Optional[Dict[str, Any]]:
        try:
            file_config = {}
            with open(config_path) as f:
                for page_content in yaml.safe_load_all(f):
                    if isinstance(page_content, dict):
                        file_config.update(page_content)
            return file_config
        except (yaml.YAMLError, OSError) as e:
            sys.stderr.write(f"Error loading logging config from {config_path}: {e}\n")
            return None

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> tuple:
        """
        Validate configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        level = str(config.get("level", "INFO")).upper()
        if level not in valid_levels:
            return False, f"Invalid log level '{level}'. Must be one of: {', '.join(valid_levels)}"

        valid_formats = ["json", "text"]
        format_style = config.get("format", "json")
        if format_style not in valid_formats:
            return False, f"Invalid format '{format_style}'. Must be one of: {', '.join(valid_formats)}"

        valid_outputs = ["stderr", "stdout", "file"]
        output = config.get("output", "stderr")
        if output not in valid_outputs:
            return False, f"Invalid output '{output}'. Must be one of: {', '.join(valid_outputs)}"

        if output == "file" and not config.get("file_path"):
            return False, "file_path required when output is 'file'"

        return True, ""

    @classmethod
    def setup_logging(cls, config_path: Optional[str] = None, **overrides):
        """
        Configure the logger factory.

        Raises:
            ValueError: when the resulting configuration is invalid
        """
        config = cls.load(config_path)
        config.update({key: value for key, value in overrides.items() if value is not None})

        is_valid, error = cls.validate(config)
        if not is_valid:
            raise ValueError(error)

        output_type = config["output"]
        if output_type == "stdout":
            stream = sys.stdout
        elif output_type == "file":
            file_path = Path(config["file_path"])
            file_path.parent.mkdir(parents=True, exist_ok=True)
            stream = open(file_path, "a", encoding="utf-8")
        else:
            stream = None

        LoggerFactory.configure(
            level=str(config["level"]), format_style=config["format"], stream=stream, owns_stream=output_type == "file"
        )
        return config
