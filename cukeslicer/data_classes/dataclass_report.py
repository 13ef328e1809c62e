from dataclasses import dataclass
from beartype.typing import List, Optional

from serde import field, serialize, deserialize

from cukeslicer.constants import ElementTypes


@serialize
@deserialize
@dataclass
class ReportRow:
    """One row of a data table or example table"""

    cells: List[str] = field(default_factory=list)


@serialize
@deserialize
@dataclass
class ReportTag:
    name: str


@serialize
@deserialize
@dataclass
class ReportStep:
    """Class to store a single step, with its optional data table"""

    keyword: str = field(default="")
    name: str = field(default="")
    rows: List[ReportRow] = field(default_factory=list)

    @property
    def has_data_table(self) -> bool:
        return bool(self.rows)


@serialize
@deserialize
@dataclass
class ReportExamples:
    """One Examples section of a Scenario Outline. Row 0 holds the parameter names."""

    keyword: str = field(default="Examples")
    name: str = field(default="")
    rows: List[ReportRow] = field(default_factory=list)

    @property
    def header(self) -> List[str]:
        return self.rows[0].cells if self.rows else []

    @property
    def value_rows(self) -> List[ReportRow]:
        return self.rows[1:]


@serialize
@deserialize
@dataclass
class ReportElement:
    """A scenario, scenario outline or background of a feature"""

    id: Optional[str] = field(default=None)
    type: str = field(default=ElementTypes.scenario)
    keyword: str = field(default="")
    name: str = field(default="")
    tags: List[ReportTag] = field(default_factory=list)
    steps: List[ReportStep] = field(default_factory=list)
    examples: List[ReportExamples] = field(default_factory=list)

    @property
    def is_background(self) -> bool:
        return not self.id or self.type == ElementTypes.background

    @property
    def is_outline(self) -> bool:
        return self.type == ElementTypes.scenario_outline

    @property
    def has_examples(self) -> bool:
        # a header-only Examples table still makes the element an outline, with zero rows
        return bool(self.examples)

    @property
    def tag_names(self) -> List[str]:
        return [tag.name for tag in self.tags if tag.name]

    @property
    def id_suffix(self) -> str:
        # Cucumber ids look like "<feature-id>;<scenario-id>[;;<row>]"
        parts = self.id.split(";") if self.id else [""]
        return parts[1] if len(parts) > 1 else parts[0]


@serialize
@deserialize
@dataclass
class ReportFeature:
    uri: str = field(default="")
    keyword: str = field(default="Feature")
    name: str = field(default="")
    description: str = field(default="")
    elements: List[ReportElement] = field(default_factory=list)

    @property
    def has_scenarios(self) -> bool:
        return any(element.steps for element in self.elements)


@serialize
@deserialize
@dataclass
class ParsedReport:
    features: List[ReportFeature] = field(default_factory=list)


@serialize
@deserialize
@dataclass
class AssembledScenario:
    """The unit handed to the feature file writer: one concrete scenario"""

    name: str
    filename: str
    narrative: List[str] = field(default_factory=list)
    background: List[str] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)
    tag_line: Optional[str] = field(default=None, skip_if_default=True)


@dataclass
class AssemblyContext:
    """Mutable buffers for one assembly run.

    The background survives across the scenarios of a feature and is only
    cleared by reset_document(). Everything else is scenario scoped.
    """

    background: List[str] = field(default_factory=list)
    narrative: List[str] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)
    tag_line: Optional[str] = None
    heading: Optional[str] = None
    filename: Optional[str] = None
    timestamp: str = ""

    def reset_scenario(self):
        self.narrative = []
        self.steps = []
        self.tag_line = None
        self.heading = None
        self.filename = None

    def reset_document(self):
        self.reset_scenario()
        self.background = []
        self.timestamp = ""
