"""
# Lightmark: constants.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Constants.
"""

GENERIC_ERROR_EXIT_CODE = 1
COMMAND_LINE_ERROR_EXIT_CODE = 2
VERBOSE_MODE_DIVIDER_SYMBOL_COUNT = 48

CSS_CLASS_PREFIX = 'lightmark'
CONTAINER_PREFIX = f'<div class="{CSS_CLASS_PREFIX}"><article>'
CONTAINER_SUFFIX = '</article></div>'

FALLBACK_SOURCE = '# An error occurred loading the content.'
UNTITLED_TITLE = 'Untitled'

STANDALONE_PAGE_TEMPLATE = '''\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
</head>
<body>
{fragment}
</body>
</html>
'''
