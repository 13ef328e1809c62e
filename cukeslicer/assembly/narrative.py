from beartype.typing import List, Optional

from cukeslicer.data_classes.dataclass_report import ReportFeature


def title_fragment(heading: Optional[str]) -> str:
    """The part of a heading such as `Scenario: Search for Cheese` after its keyword"""
    if not heading:
        return ""
    return heading.partition(":")[2].strip()


def compose_narrative(feature: ReportFeature, heading: Optional[str]) -> List[str]:
    """Feature level lines prefixed to every emitted scenario:
    `<keyword>: <feature name>: <scenario title>` followed by the feature description.
    """
    return [
        f"{feature.keyword.strip() or 'Feature'}: {feature.name}: {title_fragment(heading)}",
        feature.description,
    ]
