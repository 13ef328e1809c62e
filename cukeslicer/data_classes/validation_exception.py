class AssemblyException(Exception):
    """Base class for errors that abort an assembly run."""


class ValidationException(AssemblyException):
    """Exception raised when assembler configuration is malformed.

    Attributes:
        field_name: name of the setting that didn't pass validation
        value: offending value
        reason: reason of validation error
    """

    def __init__(self, field_name: str, value=None, reason=""):
        self.field_name = field_name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {field_name}: {value!r}. {reason}".strip())


class MissingReportException(AssemblyException):
    """Raised when there is no report text to assemble from."""

    def __init__(self, message="Missing JSON structure! Cannot proceed to assemble the feature file."):
        super().__init__(message)
