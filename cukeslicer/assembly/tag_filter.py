import re
from beartype.typing import List, Optional

from cukeslicer import settings
from cukeslicer.data_classes.validation_exception import ValidationException


def matches(tag_line: Optional[str], expected_tags: List[str]) -> bool:
    """Do any of the expected tags match the scenario's tag line

    The tag line is the scenario's tag names joined by a space. Expected tags
    are regular expressions searched anywhere in that line, so `@smoke` also
    matches `@smoke-login`.

    :param tag_line: tags recorded for the scenario, None when it has none
    :param expected_tags: configured tag filter
    :return: True if there is a match, False otherwise and always for untagged scenarios
    """
    if not tag_line:
        return False
    return any(re.search(expected_tag, tag_line) for expected_tag in expected_tags)


class TagFilter:
    def __init__(self, expected_tags: Optional[List[str]] = None):
        if expected_tags is None:
            expected_tags = list(settings.DEFAULT_EXPECTED_TAGS)
        self.expected_tags = self.validate(expected_tags)

    @staticmethod
    def validate(expected_tags: List[str]) -> List[str]:
        malformed = [tag for tag in expected_tags if not isinstance(tag, str) or not tag.startswith(settings.TAG_SIGIL)]
        if malformed:
            raise ValidationException(
                field_name="expected_tags",
                value=expected_tags,
                reason=f"Missing the '{settings.TAG_SIGIL}' character in {malformed}.",
            )
        for tag in expected_tags:
            try:
                re.compile(tag)
            except re.error as e:
                raise ValidationException(field_name="expected_tags", value=tag, reason=str(e)) from e
        return list(expected_tags)

    def matches(self, tag_line: Optional[str]) -> bool:
        return matches(tag_line, self.expected_tags)
