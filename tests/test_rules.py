"""
# Lightmark: test_rules.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `rules.py` (and the base class in `bases.py`).
"""

import unittest

from lightmark.core import apply_rules
from lightmark.exceptions import CommittedMutateException, MissingAttributeException, UncommittedApplyException
from lightmark.rules import (
    STANDARD_RULES,
    ListContainerRule,
    TemplateRule,
    build_list_container_rule,
    build_template_rule,
)


def render(source: str) -> str:
    return apply_rules(source, STANDARD_RULES)


class TestRules(unittest.TestCase):
    def test_template_rule_life_cycle(self):
        rule = TemplateRule('braces')
        rule.pattern = r'\{ (.*?) \}'
        rule.template = '<b>$1</b>'

        with self.assertRaises(UncommittedApplyException):
            rule.apply('{x}')

        rule.commit()
        self.assertTrue(rule.is_committed)
        self.assertEqual(rule.apply('{x} and {y}'), '<b>x</b> and <b>y</b>')

        with self.assertRaises(CommittedMutateException):
            rule.pattern = 'x'
        with self.assertRaises(CommittedMutateException):
            rule.escape = True

    def test_template_rule_mandatory_attributes(self):
        rule = TemplateRule('no-pattern')
        rule.template = ''
        with self.assertRaises(MissingAttributeException) as context:
            rule.commit()
        self.assertEqual(context.exception.missing_attribute, 'pattern')

        rule = TemplateRule('no-template')
        rule.pattern = 'x'
        with self.assertRaises(MissingAttributeException) as context:
            rule.commit()
        self.assertEqual(context.exception.missing_attribute, 'template')

        with self.assertRaises(MissingAttributeException):
            ListContainerRule('no-tag-name').commit()

    def test_template_rule_escapes_captures_only(self):
        rule = build_template_rule('braces', r'\{ (.*?) \}', '<b class="x">$1</b>', escape=True)
        self.assertEqual(rule.apply('{<i>&"}'), '<b class="x">&lt;i&gt;&amp;&quot;</b>')

        rule = build_template_rule('braces', r'\{ (.*?) \}', '<b>$1</b>', escape=False)
        self.assertEqual(rule.apply('{<i>}'), '<b><i></b>')

    def test_template_rule_unmatched_group(self):
        rule = build_template_rule('optional', r'x (y)?', '[$1]')
        self.assertEqual(rule.apply('xy x'), '[y] []')

    def test_template_rule_scope(self):
        rule = build_template_rule('whole', r'^ a', 'b')
        self.assertEqual(rule.apply('a\na'), 'b\na')

        rule = build_template_rule('per-line', r'^ a', 'b', scope_is_per_line=True)
        self.assertEqual(rule.apply('a\na'), 'b\nb')

    def test_list_container_rule(self):
        rule = build_list_container_rule('ordered-list', 'ol')
        self.assertEqual(rule.apply(''), '')
        self.assertEqual(rule.apply('no items'), 'no items')
        self.assertEqual(rule.apply('<li>a</li>'), '<ol><li>a</li></ol>')
        self.assertEqual(
            rule.apply('x<li>a</li><li>b</li>y'),
            'x<ol><li>a</li><li>b</li></ol>y',
        )
        self.assertEqual(
            rule.apply('<li>a</li>\n<li>b</li>'),
            '<ol><li>a</li></ol>\n<ol><li>b</li></ol>',
        )

    def test_list_container_rule_leaves_claimed_runs(self):
        rule = build_list_container_rule('unordered-list', 'ul')
        self.assertEqual(
            rule.apply('<ol><li>a</li><li>b</li></ol>'),
            '<ol><li>a</li><li>b</li></ol>',
        )
        self.assertEqual(
            rule.apply('<ol><li>a</li></ol><li>b</li><li>c</li>'),
            '<ol><li>a</li></ol><ul><li>b</li><li>c</li></ul>',
        )
        self.assertEqual(
            rule.apply('<li>a</li><ol><li>b</li></ol>'),
            '<ul><li>a</li></ul><ol><li>b</li></ol>',
        )
        self.assertEqual(
            rule.apply('</ol><li>a</li>'),
            '</ol><ul><li>a</li></ul>',
        )

    def test_standard_rules_order(self):
        rule_ids = [rule.id_ for rule in STANDARD_RULES]
        self.assertEqual(
            rule_ids,
            [
                'fenced-code-with-language',
                'fenced-code',
                'inline-code',
                'horizontal-rule',
                'heading-6',
                'heading-5',
                'heading-4',
                'heading-3',
                'heading-2',
                'heading-1',
                'sub-blockquote',
                'blockquote',
                'bold-italic',
                'bold',
                'italic',
                'underscore-bold-italic',
                'underscore-bold',
                'underscore-italic',
                'strikethrough',
                'image',
                'link',
                'ordered-list-item',
                'ordered-list',
                'unordered-list-item',
                'unordered-list',
                'line-break',
            ],
        )
        self.assertTrue(all(rule.is_committed for rule in STANDARD_RULES))

    def test_plain_text(self):
        self.assertEqual(render(''), '')
        self.assertEqual(render('Hello world.'), 'Hello world.')
        self.assertEqual(render('Hello\nworld.'), 'Hello\nworld.')
        self.assertEqual(render('Hello\n\nworld.'), 'Hello<br>world.')
        self.assertEqual(render('snake_case_name'), 'snake_case_name')

    def test_headings(self):
        self.assertEqual(render('# x'), '<h1>x</h1>')
        self.assertEqual(render('## x'), '<h2>x</h2>')
        self.assertEqual(render('### x'), '<h3>x</h3>')
        self.assertEqual(render('#### x'), '<h4>x</h4>')
        self.assertEqual(render('##### x'), '<h5>x</h5>')
        self.assertEqual(render('###### x'), '<h6>x</h6>')
        self.assertEqual(render('## Title\nText'), '<h2>Title</h2>Text')
        self.assertEqual(render('#hashtag'), '#hashtag')

    def test_code(self):
        self.assertEqual(
            render("```python\nprint('<b>')\n```"),
            '<code class="lightmark-code-python"><pre>print(\'&lt;b&gt;\')\n</pre></code>',
        )
        self.assertEqual(
            render('```\n<script>alert(1)</script>\n```'),
            '<code><pre>\n&lt;script&gt;alert(1)&lt;/script&gt;\n</pre></code>',
        )
        self.assertEqual(
            render('Use `a<b` now'),
            'Use <code><span>a&lt;b</span></code> now',
        )
        self.assertEqual(
            render('`code` and more'),
            '<code><span>code</span></code> and more',
        )

    def test_horizontal_rule(self):
        self.assertEqual(render('a\n---\nb'), 'a<hr>b')
        self.assertEqual(render('a\n-----\nb'), 'a<hr>b')
        self.assertEqual(render('a\n--\nb'), 'a\n--\nb')

    def test_blockquotes(self):
        self.assertEqual(render('> quoted'), '<blockquote>quoted</blockquote>')
        self.assertEqual(
            render('>> deeper'),
            '<blockquote class="lightmark-subquote">deeper</blockquote>',
        )
        self.assertEqual(
            render('> a\n> b'),
            '<blockquote>a</blockquote><blockquote>b</blockquote>',
        )
        self.assertEqual(
            render('# T\n> q'),
            '<h1>T</h1><blockquote>q</blockquote>',
        )
        self.assertEqual(render('1 > 0'), '1 > 0')

    def test_emphasis(self):
        self.assertEqual(
            render('***a*** **b** *c*'),
            '<strong><em>a</em></strong> <strong>b</strong> <em>c</em>',
        )
        self.assertEqual(
            render('___a___ __b__ _c_'),
            '<strong><em>a</em></strong> <strong>b</strong> <em>c</em>',
        )
        self.assertEqual(render('~~gone~~'), '<del>gone</del>')

    def test_images_and_links(self):
        self.assertEqual(
            render('![alt](pic.png)'),
            '<img alt="alt" title="alt" src="pic.png">',
        )
        self.assertEqual(render('[a](b)'), '<a href="b">a</a>')
        self.assertEqual(render('[x<y](b?c=1&d=2)'), '<a href="b?c=1&d=2">x<y</a>')

    def test_ordered_list(self):
        html = render('1. one\n2. two\n3. three')
        self.assertEqual(html, '<ol><li>one</li><li>two</li><li>three</li></ol>')
        self.assertEqual(html.count('<ol>'), 1)
        self.assertEqual(html.count('</ol>'), 1)
        self.assertEqual(html.count('<li>'), 3)
        self.assertNotIn('<ul>', html)

    def test_unordered_list(self):
        self.assertEqual(render('- a\n- b'), '<ul><li>a</li><li>b</li></ul>')
        self.assertEqual(render('* a\n+ b'), '<ul><li>a</li><li>b</li></ul>')

    def test_lists_after_block_tags(self):
        self.assertEqual(render('# T\n1. a\n2. b'), '<h1>T</h1><ol><li>a</li><li>b</li></ol>')
        self.assertEqual(render('# T\n- a'), '<h1>T</h1><ul><li>a</li></ul>')
        self.assertEqual(render('a\n---\n- b'), 'a<hr><ul><li>b</li></ul>')
        self.assertEqual(render('> q\n- a'), '<blockquote>q</blockquote><ul><li>a</li></ul>')

    def test_list_markers_inside_inline_markup(self):
        self.assertEqual(render('`- x`'), '<code><span>- x</span></code>')
        self.assertEqual(render('**1. x**'), '<strong>1. x</strong>')

    def test_mixed_lists(self):
        self.assertEqual(
            render('1. a\n2. b\n\n- c\n- d'),
            '<ol><li>a</li><li>b</li></ol>\n<ul><li>c</li><li>d</li></ul>',
        )
        html = render('1. a\n\nText\n\n1. b')
        self.assertEqual(html, '<ol><li>a</li></ol>\nText<br><ol><li>b</li></ol>')
        self.assertNotIn('<ul>', html)

    def test_degenerate_input(self):
        for source in ['```', '`', '***', '[', '](', '\n\n\n', '---', '> ', '1. ', '- ', '<li>', '</li></ol>']:
            with self.subTest(source=source):
                self.assertIsInstance(render(source), str)


if __name__ == '__main__':
    unittest.main()
