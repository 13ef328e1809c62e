import json

import click
from serde import to_dict

from cukeslicer.cli import pass_environment, Environment, CONTEXT_SETTINGS
from cukeslicer.commands.assembly_options import assembly_options
from cukeslicer.commands.report_loading import create_assembler, load_reports
from cukeslicer.constants import FAULT_MAPPING
from cukeslicer.writers.feature_file_writer import CollectingWriter, render_feature


@click.command(context_settings=CONTEXT_SETTINGS)
@assembly_options
@click.option("--output", type=click.Path(), metavar="", help="Optional output file path to save the preview JSON.")
@click.option("--pretty", is_flag=True, help="Pretty print JSON output with indentation.")
@click.pass_context
@pass_environment
def cli(environment: Environment, context: click.Context, output: str, pretty: bool, **kwargs):
    """Preview the scenarios a Cucumber JSON report would be split into

    Nothing is written to the feature directories. The assembled scenarios,
    including the rendered feature file content, are printed as JSON.
    """
    environment.cmd = "preview"
    environment.set_parameters(context)
    environment.check_for_required_parameters()

    writer = CollectingWriter()
    assembler = create_assembler(environment, writer)
    reports = load_reports(environment)

    for report_file, report in zip(environment.file, reports):
        try:
            assembler.assemble_report(report)
        except ValueError as e:
            environment.elog(FAULT_MAPPING["invalid_json"].format(file_path=report_file, error_message=e))
            exit(1)

    scenarios_data = []
    for scenario, source_directory in zip(writer.scenarios, writer.source_directories):
        scenario_dict = to_dict(scenario)
        scenario_dict["source_directory"] = str(source_directory)
        scenario_dict["content"] = render_feature(scenario)
        scenarios_data.append(scenario_dict)

    output_data = {
        "scenarios": scenarios_data,
        "summary": {
            "total_scenarios": len(scenarios_data),
            "skipped_scenarios": assembler.skipped,
            "expected_tags": assembler.expected_tags,
            "source_files": [str(file) for file in environment.file],
        },
    }

    if pretty:
        json_output = json.dumps(output_data, indent=2, ensure_ascii=False)
    else:
        json_output = json.dumps(output_data, ensure_ascii=False)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(json_output)
        environment.log(f"Preview saved to: {output}")
        environment.log(f"  Total scenarios: {output_data['summary']['total_scenarios']}")
        environment.log(f"  Skipped scenarios: {output_data['summary']['skipped_scenarios']}")
    else:
        print(json_output)
