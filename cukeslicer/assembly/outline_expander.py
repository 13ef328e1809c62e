import re
from collections import deque
from enum import Enum
from beartype.typing import Iterator, List, Optional, Tuple

from cukeslicer.data_classes.dataclass_report import AssemblyContext, ParsedReport, ReportElement
from cukeslicer.logging import get_logger

logger = get_logger("cukeslicer.assembly.outline_expander")

PLACEHOLDER_PATTERN = re.compile(r"<([^<>\n]+)>")
WHITESPACE_PATTERN = re.compile(r"\s+")


class MatchMode(Enum):
    # placeholder equals the header cell as written, used for steps and names
    RAW = "raw"
    # whitespace in the header cell becomes hyphens, case-insensitive, used for filenames
    SLUG = "slug"


def slugify(text: str) -> str:
    return WHITESPACE_PATTERN.sub("-", text.strip())


class ParameterBinding:
    """One Examples row: parameter names zipped with the row's values, in column order"""

    def __init__(self, index: int, pairs: List[Tuple[str, str]]):
        self.index = index
        self.pairs = pairs

    def __repr__(self):
        return f"ParameterBinding({self.index}, {['::'.join(pair) for pair in self.pairs]})"

    def lookup(self, placeholder: str, mode: MatchMode = MatchMode.RAW) -> Optional[str]:
        """Value of the first column whose name matches the placeholder, None when no column does"""
        for name, value in self.pairs:
            if mode is MatchMode.RAW and name == placeholder:
                return value
            if mode is MatchMode.SLUG and slugify(name).lower() == placeholder.lower():
                return value
        return None

    def substitute(self, text: Optional[str], mode: MatchMode = MatchMode.RAW) -> Optional[str]:
        """Replace every `<placeholder>` occurrence. Unknown placeholders stay as literal text."""
        if not text:
            return text

        def replace(match):
            value = self.lookup(match.group(1), mode)
            if value is None:
                logger.debug("No example column for placeholder", placeholder=match.group(0), row=self.index)
                return match.group(0)
            return value

        return PLACEHOLDER_PATTERN.sub(replace, text)


def build_bindings(element: ReportElement) -> List[ParameterBinding]:
    """
    Process the Scenario Outline examples into parameter bindings. For

        Examples:
          | first name | last name |
          | Robert     | Smith     |
          | Jenny      | Sorenson  |

    the result resembles

        0: ['first name::Robert', 'last name::Smith']
        1: ['first name::Jenny', 'last name::Sorenson']

    Several Examples sections are numbered consecutively, each zipped with its own header.
    """
    bindings = []
    for section in element.examples:
        header = section.header
        for row in section.value_rows:
            if len(row.cells) != len(header):
                raise ValueError(
                    f"Examples row {row.cells} of '{element.name}' has {len(row.cells)} cells, "
                    f"but its header has {len(header)}"
                )
            bindings.append(ParameterBinding(len(bindings), list(zip(header, row.cells))))
    return bindings


def check_examples(report: ParsedReport) -> None:
    """Build the bindings of every outline in the report, raising ValueError on the first malformed row"""
    for feature in report.features:
        for element in feature.elements:
            if element.has_examples:
                build_bindings(element)


class OutlineExpander:
    """Queue of the outline's example rows, consumed oldest first.

    drain() yields the head row and removes it only once the caller asks for
    the next one, so every row is used for exactly one scenario and the queue
    is empty when iteration ends.
    """

    def __init__(self, element: ReportElement):
        self.element = element
        self._rows = deque(build_bindings(element))
        self.consumed = 0

    @property
    def remaining(self) -> int:
        return len(self._rows)

    @property
    def exhausted(self) -> bool:
        return not self._rows

    def drain(self) -> Iterator[ParameterBinding]:
        while self._rows:
            yield self._rows[0]
            # prune the processed row so it is never reused
            self._rows.popleft()
            self.consumed += 1

    @staticmethod
    def apply(binding: ParameterBinding, context: AssemblyContext) -> None:
        """Substitute the row's values into every scenario scoped fragment of the context"""
        context.steps = [binding.substitute(line) for line in context.steps]
        context.heading = binding.substitute(context.heading)
        context.tag_line = binding.substitute(context.tag_line)

    @staticmethod
    def filename(binding: ParameterBinding, filename: str) -> str:
        return binding.substitute(filename, MatchMode.SLUG)
