"""
Unit tests for config.py

Tests configuration loading functionality including:
- Environment variable loading
- File configuration
- Validation
- Logger factory setup
"""

import unittest
import tempfile
import os
import shutil
from pathlib import Path
from cukeslicer.logging.config import LoggingConfig
from cukeslicer.logging.structured_logger import LoggerFactory, LogLevel


class TestLoggingConfig(unittest.TestCase):
    """Test LoggingConfig class"""

    def setUp(self):
        self.original_env = os.environ.copy()
        for env_var in LoggingConfig.ENV_MAPPINGS:
            os.environ.pop(env_var, None)
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        os.environ.clear()
        os.environ.update(self.original_env)
        shutil.rmtree(self.temp_dir, ignore_errors=True)
        LoggerFactory.reset()

    def write_config(self, content: str, name: str = "config.yml") -> str:
        config_file = Path(self.temp_dir) / name
        config_file.write_text(content)
        return str(config_file)

    def test_default_config(self):
        config = LoggingConfig.load()

        self.assertEqual(config["level"], "INFO")
        self.assertEqual(config["format"], "json")
        self.assertEqual(config["output"], "stderr")
        self.assertIsNone(config["file_path"])

    def test_env_var_overrides(self):
        os.environ["CUKESLICER_LOG_LEVEL"] = "DEBUG"
        os.environ["CUKESLICER_LOG_FORMAT"] = "text"
        os.environ["CUKESLICER_LOG_OUTPUT"] = "stdout"
        os.environ["CUKESLICER_LOG_FILE"] = "/tmp/cukeslicer.log"

        config = LoggingConfig.load()

        self.assertEqual(config["level"], "DEBUG")
        self.assertEqual(config["format"], "text")
        self.assertEqual(config["output"], "stdout")
        self.assertEqual(config["file_path"], "/tmp/cukeslicer.log")

    def test_yaml_config_file(self):
        config_file = self.write_config(
            "tags: \"@smoke\"\n"
            "logging:\n"
            "  level: WARNING\n"
            "  format: text\n"
        )

        config = LoggingConfig.load(config_file)

        self.assertEqual(config["level"], "WARNING")
        self.assertEqual(config["format"], "text")
        self.assertEqual(config["output"], "stderr")
        self.assertNotIn("tags", config)

    def test_multiple_document_config_file(self):
        config_file = self.write_config("tags: \"@smoke\"\n---\nlogging:\n  level: ERROR\n")

        config = LoggingConfig.load(config_file)

        self.assertEqual(config["level"], "ERROR")

    def test_config_precedence(self):
        """Environment variables win over the config file"""
        config_file = self.write_config("logging:\n  level: WARNING\n  format: text\n")
        os.environ["CUKESLICER_LOG_LEVEL"] = "ERROR"

        config = LoggingConfig.load(config_file)

        self.assertEqual(config["level"], "ERROR")
        self.assertEqual(config["format"], "text")

    def test_nonexistent_config_file(self):
        config = LoggingConfig.load("/nonexistent/config.yml")

        self.assertEqual(config["level"], "INFO")

    def test_invalid_config_file(self):
        config_file = self.write_config("logging: [unclosed\n")

        config = LoggingConfig.load(config_file)

        self.assertEqual(config, LoggingConfig.DEFAULT_CONFIG)

    def test_validate_valid_config(self):
        is_valid, error = LoggingConfig.validate({"level": "INFO", "format": "json", "output": "stderr"})

        self.assertTrue(is_valid)
        self.assertEqual(error, "")

    def test_validate_invalid_level(self):
        is_valid, error = LoggingConfig.validate({"level": "LOUD", "format": "json", "output": "stderr"})

        self.assertFalse(is_valid)
        self.assertIn("Invalid log level", error)

    def test_validate_invalid_format(self):
        is_valid, error = LoggingConfig.validate({"level": "INFO", "format": "xml", "output": "stderr"})

        self.assertFalse(is_valid)
        self.assertIn("Invalid format", error)

    def test_validate_invalid_output(self):
        is_valid, error = LoggingConfig.validate({"level": "INFO", "format": "json", "output": "syslog"})

        self.assertFalse(is_valid)
        self.assertIn("Invalid output", error)

    def test_validate_file_output_missing_path(self):
        is_valid, error = LoggingConfig.validate({"level": "INFO", "format": "json", "output": "file"})

        self.assertFalse(is_valid)
        self.assertIn("file_path required", error)

    def test_case_insensitive_level(self):
        is_valid, _ = LoggingConfig.validate({"level": "debug", "format": "json", "output": "stderr"})

        self.assertTrue(is_valid)

    def test_setup_logging_overrides(self):
        """Overrides win over file and environment, None overrides are ignored"""
        config_file = self.write_config("logging:\n  level: ERROR\n  format: text\n")

        config = LoggingConfig.setup_logging(config_path=config_file, level="DEBUG", format=None)

        self.assertEqual(config["level"], "DEBUG")
        self.assertEqual(config["format"], "text")
        logger = LoggerFactory.get_logger("test.config.overrides")
        self.assertEqual(logger.level, LogLevel.DEBUG)
        self.assertEqual(logger.format_style, "text")

    def test_setup_logging_invalid(self):
        with self.assertRaises(ValueError):
            LoggingConfig.setup_logging(level="LOUD")

    def test_setup_logging_to_file(self):
        log_file = Path(self.temp_dir) / "logs" / "cukeslicer.log"

        LoggingConfig.setup_logging(output="file", file_path=str(log_file))
        LoggerFactory.get_logger("test.config.file").warning("Scenario skipped", tags="@wip")
        LoggerFactory.close()

        self.assertIn('"tags": "@wip"', log_file.read_text())

    def test_setup_logging_twice_closes_previous_file(self):
        first_log = Path(self.temp_dir) / "first.log"
        LoggingConfig.setup_logging(output="file", file_path=str(first_log))
        first_stream = LoggerFactory.get_logger("test.config.reopen").output_stream

        LoggingConfig.setup_logging(output="file", file_path=str(Path(self.temp_dir) / "second.log"))

        self.assertTrue(first_stream.closed)
        self.assertFalse(LoggerFactory.get_logger("test.config.reopen").output_stream.closed)


if __name__ == "__main__":
    unittest.main()
