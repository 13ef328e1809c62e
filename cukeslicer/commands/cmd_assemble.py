import click

from cukeslicer.cli import pass_environment, Environment, CONTEXT_SETTINGS
from cukeslicer.commands.assembly_options import assembly_options, print_config
from cukeslicer.commands.report_loading import create_assembler, load_reports
from cukeslicer.constants import FAULT_MAPPING
from cukeslicer.writers.feature_file_writer import FeatureFileWriter


@click.command(context_settings=CONTEXT_SETTINGS)
@assembly_options
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    metavar="",
    help="Write feature files here instead of the parallel_features directory next to the sources.",
)
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False),
    metavar="",
    help="Directory that relative feature URIs in the report are resolved against (default: current directory).",
)
@click.pass_context
@pass_environment
def cli(environment: Environment, context: click.Context, *args, **kwargs):
    """Split Cucumber JSON reports into one .feature file per scenario

    Scenario Outlines are expanded into one file per Examples row. Only
    scenarios whose tags match the tag filter are written.
    """
    environment.cmd = "assemble"
    environment.set_parameters(context)
    environment.check_for_required_parameters()
    print_config(environment)

    writer = FeatureFileWriter(output_dir=environment.output_dir, base_dir=environment.base_dir)
    assembler = create_assembler(environment, writer)
    reports = load_reports(environment)

    written = 0
    for report_file, report in zip(environment.file, reports):
        try:
            assembled = assembler.assemble_report(report)
        except ValueError as e:
            environment.elog(FAULT_MAPPING["invalid_json"].format(file_path=report_file, error_message=e))
            exit(1)
        except OSError as e:
            environment.elog(FAULT_MAPPING["write_issue"].format(file_path=report_file, error_message=e))
            exit(1)
        for scenario in assembled:
            environment.vlog(f"  '{scenario.name}' written to '{scenario.filename}'")
        written += len(assembled)

    environment.log(f"Assembled {written} feature file(s), skipped {assembler.skipped} scenario(s) by tag filter.")
    for feature_file in sorted({str(path.parent) for path in writer.feature_files}):
        environment.log(f"  Output directory: {feature_file}")
