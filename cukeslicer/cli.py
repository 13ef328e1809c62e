import os
import sys
from typing import List, Optional, Union

import click
import yaml
from pathlib import Path

from click.core import ParameterSource

from cukeslicer.constants import (
    FAULT_MAPPING,
    MISSING_COMMAND_SLOGAN,
    TOOL_USAGE,
    TOOL_VERSION,
)
from cukeslicer.logging.config import LoggingConfig
from cukeslicer.logging.structured_logger import LoggerFactory

CONTEXT_SETTINGS = dict(auto_envvar_prefix="CUKESLICER")

cukeslicer_folder = Path(__file__).parent
cmd_folder = cukeslicer_folder / "commands/"


def resolve_tags(value: Union[str, List[str], tuple, None]) -> Optional[List[str]]:
    """Accepts `@smoke,@regression` or a list of tags, None keeps the default filter"""
    if value is None or value == "" or value == ():
        return None
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return [str(tag).strip() for tag in value]


class Environment:
    def __init__(self):
        self.home = os.getcwd()
        self.default_config_file = True
        self.params_from_config = dict()
        self.cmd = None
        self.config = None
        self.verbose = None
        self.silent = None
        self.log_format = None
        self.output_dir = None
        self.base_dir = None
        self._file = []
        self._tags = None

    @property
    def file(self) -> List[str]:
        return self._file

    @file.setter
    def file(self, file: Union[str, List[str], tuple, None]):
        if not file:
            self._file = []
        elif isinstance(file, str):
            self._file = [file]
        else:
            self._file = list(file)

    @property
    def tags(self) -> Optional[List[str]]:
        return self._tags

    @tags.setter
    def tags(self, tags: Union[str, List[str], None]):
        self._tags = resolve_tags(tags)

    def log(self, msg: str, new_line=True, *args):
        """Logs a message to stdout only is silent mode is disabled."""
        if not self.silent:
            if args:
                msg %= args
            click.echo(msg, file=sys.stdout, nl=new_line)

    def vlog(self, msg: str, *args):
        """Logs a message to stdout only if the verbose option is enabled."""
        if self.verbose:
            self.log(msg, *args)

    @staticmethod
    def elog(msg: str, new_line=True, *args):
        """Logs a message to stderr."""
        if args:
            msg %= args
        click.echo(msg, file=sys.stderr, nl=new_line)

    def set_parameters(self, context: click.core.Context):
        """Sets parameters based on context. The function will override parameters with config file values
        depending on the parameter source and config file source (default or custom)"""
        if self.default_config_file:
            param_sources_types = [ParameterSource.DEFAULT]
        else:
            param_sources_types = [ParameterSource.DEFAULT, ParameterSource.ENVIRONMENT]
        for param, value in context.params.items():
            # Don't set config again
            if param == "config":
                continue
            param_config_value = self.params_from_config.get(param, None)
            param_source = context.get_parameter_source(param)
            if param_source in param_sources_types and (param_config_value is not None):
                setattr(self, param, param_config_value)
            else:
                setattr(self, param, value)

    def check_for_required_parameters(self):
        """Checks that at least one report file was given. If not error message would be printed and
        program will exit with exit code 1"""
        if not self.file:
            self.elog(FAULT_MAPPING["missing_file"])
            exit(1)

    def parse_config_file(self, context: click.Context):
        """Sets config file path from context and information if default or custom config file should be used."""
        executable_folder = Path(sys.argv[0]).parent

        if context.params["config"]:
            self.config = context.params["config"]
            self.default_config_file = False
        else:
            if Path(executable_folder / "config.yml").is_file():
                self.config = executable_folder / "config.yml"
            elif Path(executable_folder / "config.yaml").is_file():
                self.config = executable_folder / "config.yaml"
            else:
                self.config = None
        if self.config:
            self.parse_params_from_config_file(self.config)

    def parse_params_from_config_file(self, file_path: Path):
        self.params_from_config = {}
        try:
            with open(file_path, "r") as f:
                file_content = yaml.safe_load_all(f)
                for page_content in file_content:
                    if page_content:
                        self.params_from_config.update(page_content)
        except (yaml.YAMLError, ValueError, TypeError) as e:
            self.elog(FAULT_MAPPING["yaml_file_parse_issue"].format(file_path=file_path))
            self.elog(f"Error details:\n{e}")
            if not self.default_config_file:
                exit(1)
            self.params_from_config = {}
        except IOError:
            self.elog(FAULT_MAPPING["file_open_issue"].format(file_path=file_path))
            if not self.default_config_file:
                exit(1)
            self.params_from_config = {}
        # the logging section configures the logger factory, not the command
        self.params_from_config.pop("logging", None)

    def setup_logging(self):
        level = "DEBUG" if self.verbose else None
        try:
            LoggingConfig.setup_logging(
                config_path=str(self.config) if self.config else None, level=level, format=self.log_format
            )
        except ValueError as e:
            self.elog(f"Invalid logging configuration: {e}")
            exit(1)


pass_environment = click.make_pass_decorator(Environment, ensure=True)


class CukeSlicerCLI(click.Group):
    def __init__(self, *args, **kwargs):
        # invoke_without_command=True to be able to print
        # short tool description when starting without parameters
        kwargs.setdefault("invoke_without_command", True)
        click.Group.__init__(self, *args, **kwargs)

    def list_commands(self, context: click.Context):
        commands = []
        for filename in cmd_folder.iterdir():
            if filename.name.endswith(".py") and filename.name.startswith("cmd_"):
                commands.append(filename.name[4:-3])
        commands.sort()
        return commands

    def get_command(self, context: click.Context, name: str):
        try:
            mod = __import__(f"cukeslicer.commands.cmd_{name}", None, None, ["cli"])
        except ImportError:
            return None
        return mod.cli


@click.command(cls=CukeSlicerCLI, context_settings=CONTEXT_SETTINGS)
@click.pass_context
@pass_environment
@click.option(
    "-c",
    "--config",
    type=click.Path(),
    metavar="",
    help="Optional path definition for the configuration file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Output every processed scenario and debug logs.")
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    metavar="",
    help="Format of the diagnostic log written to stderr (json or text).",
)
@click.option(
    "-s",
    "--silent",
    flag_value=True,
    is_flag=True,
    help="Silence stdout",
    default=False,
)
def cli(environment: Environment, context: click.core.Context, *args, **kwargs):
    """Cucumber Slicer: split Cucumber JSON reports into feature files"""
    if not context.invoked_subcommand:
        if not sys.argv[1:]:
            click.echo(TOOL_VERSION)
            click.echo(TOOL_USAGE)
            exit(0)
        print(MISSING_COMMAND_SLOGAN)
        exit(2)

    environment.parse_config_file(context)
    environment.set_parameters(context)
    environment.setup_logging()
    context.call_on_close(LoggerFactory.close)
