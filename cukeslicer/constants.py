import cukeslicer

FAULT_MAPPING = dict(
    missing_file="Please provide a valid path to your Cucumber JSON report with the -f argument.",
    invalid_file="Provided file is not a valid file.",
    missing_report="Missing JSON structure! Cannot proceed to assemble the feature file.",
    invalid_json="Error occurred while parsing the Cucumber JSON report ({file_path}): {error_message}",
    invalid_tags="One or more of the supplied Cucumber tags '{tags}' is not properly formatted. "
    "Missing the '@' character!",
    yaml_file_parse_issue="Error occurred while parsing yaml file ({file_path}). "
    "Make sure that structure of a file is correct.\nWe expect only `key: value`, `---` and `...`.",
    file_open_issue="Error occurred while opening the file ({file_path}). "
    "Make sure that the file exists or the path is correct.",
    write_issue="Error occurred while writing feature file ({file_path}): {error_message}",
)

TOOL_VERSION = f"""Cucumber Slicer v{cukeslicer.__version__}"""
TOOL_USAGE = f"""Supported and loaded modules:
    - assemble: Split a Cucumber JSON report into one .feature file per scenario
    - preview: Show the scenarios a report would be split into, without writing files"""

MISSING_COMMAND_SLOGAN = """Usage: cukeslicer [OPTIONS] COMMAND [ARGS]...\nTry 'cukeslicer --help' for help.
\nError: Missing command."""


class ElementTypes:
    scenario = "scenario"
    scenario_outline = "scenario_outline"
    background = "background"
