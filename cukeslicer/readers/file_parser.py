from pathlib import Path
from abc import abstractmethod
from beartype.typing import Union

from cukeslicer.data_classes.dataclass_report import ParsedReport


class FileParser:
    """
    Each report reader should inherit from this class, to make file reading modular.
    """

    def __init__(self, filepath: Union[str, Path]):
        self.filepath = self.check_file(filepath)
        self.filename = self.filepath.name

    @staticmethod
    def check_file(filepath: Union[str, Path]) -> Path:
        filepath = Path(filepath)
        if not filepath.is_file():
            raise FileNotFoundError("File not found.")
        return filepath

    def read_text(self) -> str:
        with open(self.filepath, "r", encoding="utf-8") as f:
            return f.read()

    @abstractmethod
    def parse_file(self) -> ParsedReport:
        raise NotImplementedError
