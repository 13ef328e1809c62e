from datetime import datetime
from pathlib import Path
from beartype.typing import Callable, List, Optional

from cukeslicer import settings
from cukeslicer.assembly.narrative import compose_narrative, title_fragment
from cukeslicer.assembly.outline_expander import OutlineExpander, ParameterBinding, check_examples, slugify
from cukeslicer.assembly.step_extractor import StepExtractor
from cukeslicer.assembly.tag_filter import TagFilter
from cukeslicer.data_classes.dataclass_report import (
    AssembledScenario,
    AssemblyContext,
    ParsedReport,
    ReportElement,
    ReportFeature,
)
from cukeslicer.data_classes.validation_exception import MissingReportException
from cukeslicer.logging import get_logger
from cukeslicer.readers.cucumber_json import CucumberReportParser
from cukeslicer.writers.feature_file_writer import FeatureFileWriter

logger = get_logger("cukeslicer.assembly.feature_file_assembler")


class FeatureFileAssembler:
    """Splits a Cucumber JSON report into one assembled scenario per Scenario
    and per Scenario Outline example row, handing each one that passes the tag
    filter to the writer.

    :param expected_tags: tag filter, defaults to @smoke and @regression
    :param writer: object with an emit(scenario, source_directory) method
    :param clock: callable returning the datetime used for file name timestamps
    """

    def __init__(
        self,
        expected_tags: Optional[List[str]] = None,
        writer=None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.tag_filter = TagFilter(expected_tags)
        self.writer = writer if writer is not None else FeatureFileWriter()
        self.clock = clock or datetime.now
        self.context = AssemblyContext()
        self.extractor = StepExtractor()
        self.skipped = 0
        self._issued_filenames = set()
        logger.info("Supplied list of Scenario tag filters", expected_tags=self.expected_tags)

    @property
    def expected_tags(self) -> List[str]:
        return self.tag_filter.expected_tags

    def assemble_feature_file_from_json(self, json_text: Optional[str]) -> List[AssembledScenario]:
        """Assemble feature files from the text of a Cucumber JSON report.

        Raises:
            MissingReportException: when no report text is supplied
            ValueError: when the text is not a Cucumber JSON report
        """
        if not json_text:
            raise MissingReportException()
        return self.assemble_report(CucumberReportParser.parse_text(json_text))

    def assemble_report(self, report: ParsedReport) -> List[AssembledScenario]:
        """Assemble every feature of the report. Malformed example rows are rejected before anything is emitted."""
        check_examples(report)
        assembled = []
        for feature in report.features:
            assembled.extend(self.assemble_feature(feature))
        return assembled

    def assemble_feature(self, feature: ReportFeature) -> List[AssembledScenario]:
        # a background only applies to the feature it was declared in
        self.context.reset_document()
        if not feature.has_scenarios:
            logger.warning(
                "Skipping further processing of the supplied feature because it does not contain any scenarios",
                feature=feature.name,
                uri=feature.uri,
            )
            return []

        source_directory = CucumberReportParser.source_directory(feature)
        assembled = []
        for element in feature.elements:
            if element.is_background:
                self.extractor.extract_background(element, self.context)
                logger.info("Background processed", background=self.context.background[0])
            elif not element.steps:
                logger.info("Skipping element without steps", element=element.name, type=element.type)
            elif element.has_examples:
                assembled.extend(self._assemble_outline(feature, element, source_directory))
            else:
                scenario = self._assemble_scenario(feature, element, source_directory)
                if scenario:
                    assembled.append(scenario)
        return assembled

    def _assemble_outline(
        self, feature: ReportFeature, element: ReportElement, source_directory: Path
    ) -> List[AssembledScenario]:
        expander = OutlineExpander(element)
        outline_logger = logger.with_context(outline=element.name)
        outline_logger.info("Processing Scenario Outline", examples=expander.remaining)
        assembled = []
        for binding in expander.drain():
            scenario = self._assemble_scenario(feature, element, source_directory, binding)
            if scenario:
                assembled.append(scenario)
        outline_logger.debug("Scenario Outline expanded", rows=expander.consumed, assembled=len(assembled))
        return assembled

    def _assemble_scenario(
        self,
        feature: ReportFeature,
        element: ReportElement,
        source_directory: Path,
        binding: Optional[ParameterBinding] = None,
    ) -> Optional[AssembledScenario]:
        self.context.timestamp = self.timestamp()
        self.extractor.extract_scenario(element, self.context)
        filename = f"{element.id_suffix}-{self.context.timestamp}{settings.FEATURE_FILE_EXTENSION}"
        if binding is not None:
            OutlineExpander.apply(binding, self.context)
            filename = OutlineExpander.filename(binding, filename)
        if element.is_outline:
            filename = slugify(filename)
        self.context.filename = self._unique_filename(filename)
        self.context.narrative = compose_narrative(feature, self.context.heading)

        scenario = None
        if self.tag_filter.matches(self.context.tag_line):
            scenario = AssembledScenario(
                name=title_fragment(self.context.heading),
                filename=self.context.filename,
                narrative=list(self.context.narrative),
                background=list(self.context.background),
                steps=list(self.context.steps),
                tag_line=self.context.tag_line,
            )
            self.writer.emit(scenario, source_directory)
            logger.info("Scenario processed", scenario=self.context.heading, filename=scenario.filename)
        else:
            self.skipped += 1
            logger.warning(
                "Skipping further processing because the Scenario's tags do not match the supplied tag filter",
                scenario=self.context.heading,
                tags=self.context.tag_line,
                expected_tags=self.expected_tags,
            )

        self.context.reset_scenario()
        return scenario

    def timestamp(self) -> str:
        now = self.clock()
        return f"{now.strftime(settings.TIMESTAMP_FORMAT)}-{now.microsecond // 1000}"

    def _unique_filename(self, filename: str) -> str:
        # rows assembled within the same millisecond would otherwise share a name
        candidate = filename
        stem = filename[: -len(settings.FEATURE_FILE_EXTENSION)] if filename.endswith(settings.FEATURE_FILE_EXTENSION) else filename
        counter = 2
        while candidate in self._issued_filenames:
            candidate = f"{stem}-{counter}{settings.FEATURE_FILE_EXTENSION}"
            counter += 1
        self._issued_filenames.add(candidate)
        return candidate
