from beartype.typing import List

from cukeslicer.data_classes.dataclass_report import ReportRow


def render_row(cells: List[str]) -> str:
    """Render one table row as `| c1 | c2 |`, cells padded by a single space and not aligned"""
    rendered = "|"
    for cell in cells:
        rendered += f" {cell} |"
    return rendered


def render_data_table(rows: List[ReportRow]) -> List[str]:
    return [render_row(row.cells) for row in rows]


def append_data_table(rows: List[ReportRow], buffer: List[str]) -> None:
    """Append the rendered rows, in row order, to the caller's step buffer"""
    buffer.extend(render_data_table(rows))
