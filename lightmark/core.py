"""
# Lightmark: core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Core conversion logic.

Lightmark sources are parsed as
````
«front_matter»
«main_content»
````
where «front_matter» is optional, and is the first block of the form
````
---
«key»: «value»
[...]
---
````
The rules in the rule table are then applied, in order, to «main_content».
"""

import re
from typing import Iterable, Optional

from lightmark.bases import Rule


FRONT_MATTER_PATTERN_COMPILED = re.compile(
    pattern=r'''
        ^ --- \s* \n
        (?P<front_matter> [\s\S]*? )
        \n
        --- \s* \n
    ''',
    flags=re.MULTILINE | re.VERBOSE,
)


def extract_front_matter(text: str,
                         default_metadata: Optional[dict[str, str]] = None) -> tuple[dict[str, str], str]:
    """
    Extract metadata and main content from a Lightmark source.

    The first front matter block found (which need not be at the very start of the source)
    is removed, and the remaining main content is stripped of surrounding whitespace.
    Each line of the block is split at its first colon into a key and a value,
    both stripped of surrounding whitespace; lines free of colons are ignored.

    If the source is free of front matter (including the case of an opening `---` never closed),
    the source is returned untouched, along with a copy of `default_metadata`.
    The returned metadata is always a new dictionary, never `default_metadata` itself.
    """
    match = FRONT_MATTER_PATTERN_COMPILED.search(text)
    if match is None:
        if default_metadata is None:
            return {}, text

        return dict(default_metadata), text

    metadata: dict[str, str] = {}
    for line in match.group('front_matter').strip().split('\n'):
        key, separator, value = line.partition(':')
        if separator == '':
            continue

        metadata[key.strip()] = value.strip()

    main_content = text[:match.start()] + text[match.end():]

    return metadata, main_content.strip()


def apply_rules(string: str, rules: Iterable[Rule], verbose_mode_enabled: bool = False) -> str:
    """
    Apply rules to a string, in order, each rule once.
    """
    rules = tuple(rules)

    if verbose_mode_enabled:
        rule_queue_ids = [
            f'#{rule.id_}'
            for rule in rules
        ]
        print(f'Rule queue: {rule_queue_ids}\n\n\n\n')

    for rule in rules:
        string = rule.apply(string, verbose_mode_enabled)

    return string  # HTML
