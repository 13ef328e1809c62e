import json
from pathlib import Path
from beartype.typing import Any, Dict, List, Union

from serde import SerdeError, from_dict

from cukeslicer.data_classes.dataclass_report import ParsedReport, ReportFeature
from cukeslicer.data_classes.validation_exception import MissingReportException
from cukeslicer.logging import get_logger
from cukeslicer.readers.file_parser import FileParser

logger = get_logger("cukeslicer.readers.cucumber_json")


class CucumberReportParser(FileParser):
    """Reader for Cucumber JSON reports.

    A report is either a single feature object or an array of features, as written
    by the Cucumber JSON formatter.
    """

    def parse_file(self) -> ParsedReport:
        logger.info("Reading Cucumber JSON report", file=self.filename)
        return self.parse_text(self.read_text())

    @classmethod
    def parse_text(cls, text: str) -> ParsedReport:
        """Objectify the supplied JSON text

        Raises:
            MissingReportException: when there is no text at all
            ValueError: when the text is not a valid Cucumber JSON document
        """
        if not text or not text.strip():
            raise MissingReportException()
        data = json.loads(text)
        return cls.parse_data(data)

    @classmethod
    def parse_data(cls, data: Union[List[Dict[str, Any]], Dict[str, Any]]) -> ParsedReport:
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            raise ValueError("Cucumber JSON must be a feature object or an array of features")

        features = []
        for raw_feature in data:
            if not isinstance(raw_feature, dict):
                raise ValueError("Every feature in a Cucumber JSON report must be an object")
            try:
                features.append(from_dict(ReportFeature, cls._normalize_feature(raw_feature)))
            except SerdeError as e:
                raise ValueError(f"Unexpected structure in feature '{raw_feature.get('name', '')}': {e}") from e

        logger.debug("Objectified Cucumber JSON report", features=len(features))
        return ParsedReport(features=features)

    @classmethod
    def _normalize_feature(cls, feature: Dict[str, Any]) -> Dict[str, Any]:
        normalized = cls._drop_nulls(feature)
        normalized["uri"] = cls._strip_uri_scheme(normalized.get("uri", ""))
        normalized["elements"] = [cls._normalize_element(element) for element in cls._as_list(normalized, "elements")]
        return normalized

    @classmethod
    def _normalize_element(cls, element: Dict[str, Any]) -> Dict[str, Any]:
        normalized = cls._drop_nulls(element)
        # Older formatters write a single Examples object instead of a list
        if isinstance(normalized.get("examples"), dict):
            normalized["examples"] = [normalized["examples"]]
        normalized["examples"] = [cls._drop_nulls(section) for section in cls._as_list(normalized, "examples")]
        normalized["steps"] = [cls._drop_nulls(step) for step in cls._as_list(normalized, "steps")]
        return normalized

    @staticmethod
    def _as_list(data: Dict[str, Any], key: str) -> List[Any]:
        value = data.get(key, [])
        if not isinstance(value, list):
            raise ValueError(f"'{key}' must be an array, got {type(value).__name__}")
        return value

    @staticmethod
    def _drop_nulls(data: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")
        return {key: value for key, value in data.items() if value is not None}

    @staticmethod
    def _strip_uri_scheme(uri: str) -> str:
        for scheme in ("file:", "classpath:"):
            if uri.startswith(scheme):
                return uri[len(scheme):]
        return uri

    @staticmethod
    def source_directory(feature: ReportFeature) -> Path:
        return Path(feature.uri).parent
