"""
# Lightmark: placeholders.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Positional placeholders in replacement templates.
"""

import re
from typing import Sequence


class PlaceholderMaster:
    """
    Static class filling positional placeholders in replacement templates.

    A placeholder is a dollar sign followed by a run of digits, `$«index»`,
    with indices starting at 1. The whole digit run is taken as the index,
    so that `$1` is never confused with the leading part of `$10`.
    Placeholders are filled in a single pass over the template,
    so that a capture containing something like `$2` is inserted verbatim
    rather than being filled in turn.
    Placeholders without a corresponding capture are left as they are.
    """
    def __new__(cls):
        raise TypeError('PlaceholderMaster cannot be instantiated')

    _PLACEHOLDER_PATTERN_COMPILED = re.compile(
        pattern=r'[$] (?P<index> [0-9]+ )',
        flags=re.ASCII | re.VERBOSE,
    )

    @staticmethod
    def fill(template: str, captures: Sequence[str]) -> str:
        """
        Fill the placeholders of a template with captures.
        """
        def substitute_function(placeholder_match: re.Match) -> str:
            index = int(placeholder_match.group('index'))
            if 1 <= index <= len(captures):
                return captures[index - 1]

            return placeholder_match.group()

        return re.sub(
            pattern=PlaceholderMaster._PLACEHOLDER_PATTERN_COMPILED,
            repl=substitute_function,
            string=template,
        )

