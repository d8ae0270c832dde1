"""
# Lightmark: rules.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Rewrite rules, and the standard rule table.

The standard rules cascade rather than tokenise:
each rule is applied once, to the whole output of the rule before it,
so that later rules see (and may match) markup introduced by earlier ones.
Their order is therefore significant, for example:
- fenced code must precede inline code, lest the backticks of a fence be taken as code spans;
- longer heading prefixes must precede shorter ones, lest `# x` match the tail of `###### x`;
- sub-blockquotes must precede blockquotes, lest `> x` match the tail of `>> x`;
- `***` must precede `**`, which must precede `*`;
- images must precede links, lest `[alt](src)` match the tail of `![alt](src)`;
- each list container rule must directly follow its list item rule,
  so that ordered items are claimed by `<ol>` before unordered items become `<li>` elements.
"""

import re
from typing import Callable, Optional

from lightmark.bases import Rule
from lightmark.constants import CSS_CLASS_PREFIX
from lightmark.exceptions import MissingAttributeException
from lightmark.placeholders import PlaceholderMaster
from lightmark.utilities import escape_html, none_to_empty_string


class TemplateRule(Rule):
    """
    A rule replacing every match of a pattern with a template.

    Python regex syntax is used, with `flags=re.VERBOSE`,
    plus `re.MULTILINE` if the rule has per-line scope.
    For every match, the captures are taken in order (an unmatched group capturing the empty string),
    escaped if `escape` is set, and substituted for the positional placeholders `$1`, `$2`, etc.
    of the template (see `PlaceholderMaster`).
    """
    _pattern: Optional[str]
    _template: Optional[str]
    _escape: bool
    _scope_is_per_line: bool
    _pattern_compiled: Optional[re.Pattern]
    _substitute_function: Optional[Callable[[re.Match], str]]

    def __init__(self, id_: str):
        super().__init__(id_)
        self._pattern = None
        self._template = None
        self._escape = False
        self._scope_is_per_line = False
        self._pattern_compiled = None
        self._substitute_function = None

    @property
    def pattern(self) -> Optional[str]:
        return self._pattern

    @pattern.setter
    def pattern(self, value: str):
        self._ensure_uncommitted('pattern')
        self._pattern = value

    @property
    def template(self) -> Optional[str]:
        return self._template

    @template.setter
    def template(self, value: str):
        self._ensure_uncommitted('template')
        self._template = value

    @property
    def escape(self) -> bool:
        return self._escape

    @escape.setter
    def escape(self, value: bool):
        self._ensure_uncommitted('escape')
        self._escape = value

    @property
    def scope_is_per_line(self) -> bool:
        return self._scope_is_per_line

    @scope_is_per_line.setter
    def scope_is_per_line(self, value: bool):
        self._ensure_uncommitted('scope_is_per_line')
        self._scope_is_per_line = value

    def _validate_mandatory_attributes(self):
        if self._pattern is None:
            raise MissingAttributeException('pattern')

        if self._template is None:
            raise MissingAttributeException('template')

    def _set_apply_method_variables(self):
        flags = re.VERBOSE
        if self._scope_is_per_line:
            flags |= re.MULTILINE

        self._pattern_compiled = re.compile(pattern=self._pattern, flags=flags)
        self._substitute_function = TemplateRule.build_substitute_function(self._template, self._escape)

    def _apply(self, string: str) -> str:
        return re.sub(
            pattern=self._pattern_compiled,
            repl=self._substitute_function,
            string=string,
        )

    @staticmethod
    def build_substitute_function(template: str, escape: bool) -> Callable[[re.Match], str]:
        def substitute_function(match: re.Match) -> str:
            captures = [none_to_empty_string(capture) for capture in match.groups()]
            if escape:
                captures = [escape_html(capture) for capture in captures]

            return PlaceholderMaster.fill(template, captures)

        return substitute_function


class ListContainerRule(Rule):
    """
    A rule wrapping runs of list items in a list container.

    The string is scanned for list containers (`<ol>`, `<ul>`, and their closing tags)
    and list items (`<li>«content»</li>` on a single line).
    A run is a maximal sequence of list items that directly adjoin one another
    (nothing at all between the closing `</li>` of one and the opening `<li>` of the next).
    Every run lying outside of any open container is wrapped in a container of the rule's tag name;
    runs already inside a container have been claimed, and are left alone.
    """
    _tag_name: Optional[str]

    _TOKEN_PATTERN_COMPILED = re.compile(
        pattern=r'''
            (?P<container_tag> [<] (?P<closing_slash> [/] )? (?: ol | ul ) [>] )
                |
            (?P<list_item> [<] li [>] .*? [<] [/] li [>] )
        ''',
        flags=re.VERBOSE,
    )

    def __init__(self, id_: str):
        super().__init__(id_)
        self._tag_name = None

    @property
    def tag_name(self) -> Optional[str]:
        return self._tag_name

    @tag_name.setter
    def tag_name(self, value: str):
        self._ensure_uncommitted('tag_name')
        self._tag_name = value

    def _validate_mandatory_attributes(self):
        if self._tag_name is None:
            raise MissingAttributeException('tag_name')

    def _set_apply_method_variables(self):
        pass

    def _apply(self, string: str) -> str:
        opening_tag = f'<{self._tag_name}>'
        closing_tag = f'</{self._tag_name}>'

        pieces: list[str] = []
        cursor = 0
        container_depth = 0
        run_start: Optional[int] = None
        run_end: Optional[int] = None

        def wrap_run():
            nonlocal cursor, run_start
            pieces.append(string[cursor:run_start])
            pieces.append(opening_tag + string[run_start:run_end] + closing_tag)
            cursor = run_end
            run_start = None

        for token_match in ListContainerRule._TOKEN_PATTERN_COMPILED.finditer(string):
            if run_start is not None:
                is_adjoining_item = (
                    token_match.group('list_item') is not None
                    and token_match.start() == run_end
                )
                if not is_adjoining_item:
                    wrap_run()

            if token_match.group('container_tag') is not None:
                if token_match.group('closing_slash') is None:
                    container_depth += 1
                elif container_depth > 0:
                    container_depth -= 1
                continue

            if container_depth > 0:
                continue

            if run_start is None:
                run_start = token_match.start()
            run_end = token_match.end()

        if run_start is not None:
            wrap_run()

        pieces.append(string[cursor:])

        return ''.join(pieces)


def build_template_rule(id_: str, pattern: str, template: str,
                        escape: bool = False, scope_is_per_line: bool = False) -> TemplateRule:
    rule = TemplateRule(id_)
    rule.pattern = pattern
    rule.template = template
    rule.escape = escape
    rule.scope_is_per_line = scope_is_per_line
    rule.commit()

    return rule


def build_heading_rule(level: int) -> TemplateRule:
    return build_template_rule(
        f'heading-{level}',
        fr'[#]{{{level}}} [ ] (.*?) ( \n | \Z )',
        f'<h{level}>$1</h{level}>',
    )


def build_list_container_rule(id_: str, tag_name: str) -> ListContainerRule:
    rule = ListContainerRule(id_)
    rule.tag_name = tag_name
    rule.commit()

    return rule


# A quote or list item marker counts only at the start of a line,
# or straight after a block tag whose rule has consumed the preceding newline.
LINE_START_ANCHORING_REGEX = r'''
    (?:
        ^
            |
        (?<= [<] [/] h [1-6] [>] )
            |
        (?<= [<] hr [>] )
            |
        (?<= [<] [/] blockquote [>] )
    )
'''

STANDARD_RULES: tuple[Rule, ...] = (
    build_template_rule(
        'fenced-code-with-language',
        r'``` ( [^\s`]+ ) [^\S\n]* \n ( [\s\S]*? ) ```',
        f'<code class="{CSS_CLASS_PREFIX}-code-$1"><pre>$2</pre></code>',
        escape=True,
    ),
    build_template_rule(
        'fenced-code',
        r'``` ( [\s\S]*? ) ```',
        '<code><pre>$1</pre></code>',
        escape=True,
    ),
    build_template_rule(
        'inline-code',
        r'` ( .*? ) `',
        '<code><span>$1</span></code>',
        escape=True,
    ),
    build_template_rule(
        'horizontal-rule',
        r'\n -{3,} \n',
        '<hr>',
    ),
    *(build_heading_rule(level) for level in range(6, 0, -1)),
    build_template_rule(
        'sub-blockquote',
        fr'{LINE_START_ANCHORING_REGEX} >> [ ] ( .*? ) ( \n | $ )',
        f'<blockquote class="{CSS_CLASS_PREFIX}-subquote">$1</blockquote>',
        scope_is_per_line=True,
    ),
    build_template_rule(
        'blockquote',
        fr'{LINE_START_ANCHORING_REGEX} > [ ] ( .*? ) ( \n | $ )',
        '<blockquote>$1</blockquote>',
        scope_is_per_line=True,
    ),
    build_template_rule(
        'bold-italic',
        r'\*\*\* ( .*? ) \*\*\*',
        '<strong><em>$1</em></strong>',
    ),
    build_template_rule(
        'bold',
        r'\*\* ( .*? ) \*\*',
        '<strong>$1</strong>',
    ),
    build_template_rule(
        'italic',
        r'\* ( .*? ) \*',
        '<em>$1</em>',
    ),
    build_template_rule(
        'underscore-bold-italic',
        r'( ^ | \s ) ___ ( .*? ) ___',
        '$1<strong><em>$2</em></strong>',
    ),
    build_template_rule(
        'underscore-bold',
        r'( ^ | \s ) __ ( .*? ) __',
        '$1<strong>$2</strong>',
    ),
    build_template_rule(
        'underscore-italic',
        r'( ^ | \s ) _ ( .*? ) _',
        '$1<em>$2</em>',
    ),
    build_template_rule(
        'strikethrough',
        r'~~ ( .*? ) ~~',
        '<del>$1</del>',
    ),
    build_template_rule(
        'image',
        r'! \[ ( .*? ) \] \( ( .*? ) \)',
        '<img alt="$1" title="$1" src="$2">',
    ),
    build_template_rule(
        'link',
        r'\[ ( .*? ) \] \( ( .*? ) \)',
        '<a href="$2">$1</a>',
    ),
    build_template_rule(
        'ordered-list-item',
        fr'{LINE_START_ANCHORING_REGEX} [0-9]+ \. \s ( .*? ) (?: \n | $ )',
        '<li>$1</li>',
        scope_is_per_line=True,
    ),
    build_list_container_rule('ordered-list', 'ol'),
    build_template_rule(
        'unordered-list-item',
        fr'{LINE_START_ANCHORING_REGEX} [-+*] \s ( .*? ) (?: \n | $ )',
        '<li>$1</li>',
        scope_is_per_line=True,
    ),
    build_list_container_rule('unordered-list', 'ul'),
    build_template_rule(
        'line-break',
        r'\n\n',
        '<br>',
    ),
)
