"""
# Lightmark: utilities.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Common utility functions.
"""

import re
from typing import Optional


def escape_html(string: str) -> str:
    """
    Escape a string so that it is inert as HTML content.

    Ampersands are escaped first, so that the entities introduced for
    angle brackets and double quotes are not themselves escaped again.
    Unlike an attribute-value escape, existing entities are not preserved:
    `&amp;` becomes `&amp;amp;`, which displays literally as `&amp;`.
    """
    string = re.sub(pattern='&', repl='&amp;', string=string)
    string = re.sub(pattern='<', repl='&lt;', string=string)
    string = re.sub(pattern='>', repl='&gt;', string=string)
    string = re.sub(pattern='"', repl='&quot;', string=string)

    return string


def none_to_empty_string(string: Optional[str]) -> str:
    if string is None:
        return ''

    return string
