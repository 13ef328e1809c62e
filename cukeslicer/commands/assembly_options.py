import functools

import click

from cukeslicer import settings
from cukeslicer.cli import Environment


def print_config(env: Environment):
    env.log(f"Assembly Execution Parameters"
            f"\n> Report files: {', '.join(str(file) for file in env.file)}"
            f"\n> Config file: {env.config}"
            f"\n> Tag filter: {', '.join(env.tags if env.tags is not None else settings.DEFAULT_EXPECTED_TAGS)}")


def assembly_options(f):
    @click.option(
        "-f",
        "--file",
        type=click.Path(),
        multiple=True,
        metavar="",
        help="Cucumber JSON report to split. Can be repeated.",
    )
    @click.option(
        "--tags",
        metavar="",
        help=f"Comma-separated Scenario tags to keep (default: {','.join(settings.DEFAULT_EXPECTED_TAGS)}).",
    )
    @functools.wraps(f)
    def wrapper_common_options(*args, **kwargs):
        return f(*args, **kwargs)

    return wrapper_common_options
