import shutil
from pathlib import Path
from beartype.typing import List, Optional, Union

from cukeslicer import settings
from cukeslicer.data_classes.dataclass_report import AssembledScenario
from cukeslicer.logging import get_logger

logger = get_logger("cukeslicer.writers.feature_file_writer")


def render_feature(scenario: AssembledScenario) -> str:
    """Render an assembled scenario as the text of a standalone .feature file"""
    lines = []
    if scenario.narrative:
        lines.append(scenario.narrative[0])
        for description in scenario.narrative[1:]:
            for description_line in (description or "").splitlines():
                if description_line.strip():
                    lines.append(f"  {description_line.strip()}")

    if scenario.background:
        lines.append("")
        lines.extend(_indent_block(scenario.background))

    lines.append("")
    lines.extend(_indent_block(scenario.steps))
    return "\n".join(lines) + "\n"


def _indent_block(block: List[str]) -> List[str]:
    # tag line and heading at 2, steps at 4, table rows at 6
    rendered = []
    heading_seen = False
    for line in block:
        if line.startswith("|"):
            indent = 6
        elif not heading_seen:
            indent = 2
            heading_seen = not line.startswith(settings.TAG_SIGIL)
        else:
            indent = 4
        rendered.append(" " * indent + line)
    return rendered


class FeatureFileWriter:
    """Writes assembled scenarios next to the feature sources they came from.

    For a feature under `<root>/features/<sub dirs>/`, files go to
    `<root>/parallel_features/`. Each destination directory is deleted and
    re-created the first time this writer uses it. An explicit output_dir
    only has its .feature files removed.
    """

    def __init__(self, output_dir: Union[str, Path, None] = None, base_dir: Union[str, Path, None] = None):
        self.output_dir = Path(output_dir) if output_dir else None
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.feature_files: List[Path] = []
        self._prepared_directories = set()

    def resolve_directory(self, source_directory: Union[str, Path]) -> Path:
        if self.output_dir:
            return self.output_dir
        source_directory = Path(source_directory)
        parts = list(source_directory.parts)
        if settings.FEATURES_DIR_NAME in parts:
            # anchored at the first features segment of the report uri, base_dir is not searched
            features_index = parts.index(settings.FEATURES_DIR_NAME)
            directory = Path(*parts[:features_index], settings.PARALLEL_FEATURES_DIR_NAME)
        else:
            directory = source_directory / settings.PARALLEL_FEATURES_DIR_NAME
        if not directory.is_absolute():
            directory = self.base_dir / directory
        return directory

    def prepare_directory(self, directory: Path) -> None:
        if directory in self._prepared_directories:
            return
        if directory == self.output_dir and directory.exists():
            # a user supplied directory may hold other files, only stale feature files go
            logger.info("Removing previously generated feature files", directory=str(directory))
            for stale in directory.glob(f"*{settings.FEATURE_FILE_EXTENSION}"):
                stale.unlink()
        elif directory.exists():
            logger.info("Removing previously generated feature files", directory=str(directory))
            shutil.rmtree(directory)
        directory.mkdir(parents=True, exist_ok=True)
        self._prepared_directories.add(directory)

    def emit(self, scenario: AssembledScenario, source_directory: Union[str, Path]) -> Optional[Path]:
        if not scenario.filename:
            raise ValueError(f"Cannot create feature file for '{scenario.name}', the file name is undefined")
        directory = self.resolve_directory(source_directory)
        self.prepare_directory(directory)

        feature_file = directory / scenario.filename
        if feature_file.exists():
            feature_file.unlink()
        with open(feature_file, "w", encoding="utf-8") as f:
            f.write(render_feature(scenario))

        self.feature_files.append(feature_file)
        logger.info("Feature file written", scenario=scenario.name, path=str(feature_file))
        return feature_file


class CollectingWriter:
    """Keeps assembled scenarios in memory instead of writing them"""

    def __init__(self):
        self.scenarios: List[AssembledScenario] = []
        self.source_directories: List[Path] = []
        self.feature_files: List[Path] = []

    def emit(self, scenario: AssembledScenario, source_directory: Union[str, Path]) -> Optional[Path]:
        self.scenarios.append(scenario)
        self.source_directories.append(Path(source_directory))
        return None
