"""
# Lightmark: __init__.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Lightweight markdown to HTML fragment conversion.
"""

from lightmark._version import __version__
from lightmark.core import apply_rules, extract_front_matter
from lightmark.documents import Document
from lightmark.rules import STANDARD_RULES
