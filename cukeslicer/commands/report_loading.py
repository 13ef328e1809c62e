from beartype.typing import List, Optional

from cukeslicer.assembly.feature_file_assembler import FeatureFileAssembler
from cukeslicer.assembly.outline_expander import check_examples
from cukeslicer.cli import Environment
from cukeslicer.constants import FAULT_MAPPING
from cukeslicer.data_classes.dataclass_report import ParsedReport
from cukeslicer.data_classes.validation_exception import MissingReportException, ValidationException
from cukeslicer.readers.cucumber_json import CucumberReportParser


def load_reports(environment: Environment) -> List[ParsedReport]:
    """Read every report up front so a broken one aborts the run before anything is written"""
    reports = []
    for report_file in environment.file:
        environment.vlog(f"Reading Cucumber JSON report: {report_file}")
        try:
            report = CucumberReportParser(report_file).parse_file()
            check_examples(report)
            reports.append(report)
        except FileNotFoundError:
            environment.elog(FAULT_MAPPING["invalid_file"] + f" ({report_file})")
            exit(1)
        except MissingReportException:
            environment.elog(FAULT_MAPPING["missing_report"] + f" ({report_file})")
            exit(1)
        except ValueError as e:
            environment.elog(FAULT_MAPPING["invalid_json"].format(file_path=report_file, error_message=e))
            exit(1)
    return reports


def create_assembler(environment: Environment, writer) -> Optional[FeatureFileAssembler]:
    try:
        return FeatureFileAssembler(expected_tags=environment.tags, writer=writer)
    except ValidationException as e:
        environment.elog(FAULT_MAPPING["invalid_tags"].format(tags=environment.tags))
        environment.vlog(str(e))
        exit(1)
