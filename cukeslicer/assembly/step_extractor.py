from beartype.typing import List

from cukeslicer import settings
from cukeslicer.assembly.data_table import append_data_table
from cukeslicer.data_classes.dataclass_report import AssemblyContext, ReportElement, ReportStep


class StepExtractor:
    """Pulls Gherkin text for one report element into the assembly context.

    Background text goes to the document scoped background buffer. Scenarios
    and outlines fill the scenario scoped buffer with, in order: the tag line
    (when tagged), the heading and every step followed directly by its data
    table rows. Outline placeholders are left untouched here.
    """

    def extract(self, element: ReportElement, context: AssemblyContext) -> None:
        if element.is_background:
            self.extract_background(element, context)
        else:
            self.extract_scenario(element, context)

    def extract_background(self, element: ReportElement, context: AssemblyContext) -> None:
        context.background.append(self.heading(element.keyword or "Background", element.name))
        self._extract_steps(element.steps, context.background)

    def extract_scenario(self, element: ReportElement, context: AssemblyContext) -> None:
        tag_names = element.tag_names
        if tag_names:
            context.tag_line = " ".join(tag_names)
            context.steps.append(context.tag_line)

        keyword = settings.OUTLINE_SCENARIO_KEYWORD if element.is_outline else element.keyword
        context.heading = self.heading(keyword or settings.OUTLINE_SCENARIO_KEYWORD, element.name)
        context.steps.append(context.heading)

        self._extract_steps(element.steps, context.steps)

    @staticmethod
    def heading(keyword: str, name: str) -> str:
        return f"{keyword.strip()}: {name}".rstrip()

    @staticmethod
    def step_text(step: ReportStep) -> str:
        # Cucumber keeps the trailing space in the keyword ("Given ")
        return f"{step.keyword}{step.name}"

    def _extract_steps(self, steps: List[ReportStep], buffer: List[str]) -> None:
        for step in steps:
            buffer.append(self.step_text(step))
            if step.has_data_table:
                append_data_table(step.rows, buffer)
