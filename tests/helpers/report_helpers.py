from datetime import datetime
from pathlib import Path

from cukeslicer.readers.cucumber_json import CucumberReportParser

CUCUMBER_TEST_DATA = Path(__file__).parent.parent / "test_data" / "CUCUMBER"

FIXED_NOW = datetime(2024, 3, 5, 14, 7, 9, 123456)
FIXED_TIMESTAMP = "020709-123"


def fixed_clock():
    return FIXED_NOW


def report_path(name: str) -> Path:
    return CUCUMBER_TEST_DATA / name


def load_report(name: str):
    return CucumberReportParser(report_path(name)).parse_file()


def build_feature(*elements, uri="features/shop/basket.feature", name="Basket", description="") -> dict:
    return {
        "uri": uri,
        "keyword": "Feature",
        "name": name,
        "description": description,
        "elements": list(elements),
    }


def build_scenario(name, steps, tags=None, scenario_id=None) -> dict:
    element = {
        "id": scenario_id or f"basket;{name.lower().replace(' ', '-')}",
        "keyword": "Scenario",
        "name": name,
        "type": "scenario",
        "steps": steps,
    }
    if tags:
        element["tags"] = [{"name": tag} for tag in tags]
    return element


def build_outline(name, steps, rows, tags=None, scenario_id=None) -> dict:
    element = build_scenario(name, steps, tags=tags, scenario_id=scenario_id)
    element["keyword"] = "Scenario Outline"
    element["type"] = "scenario_outline"
    element["examples"] = [{"keyword": "Examples", "rows": [{"cells": cells} for cells in rows]}]
    return element


def build_background(steps, name="") -> dict:
    return {"keyword": "Background", "name": name, "type": "background", "steps": steps}


def step(keyword, name, rows=None) -> dict:
    built = {"keyword": keyword, "name": name}
    if rows:
        built["rows"] = [{"cells": cells} for cells in rows]
    return built


def parse_features(*features):
    return CucumberReportParser.parse_data(list(features))
