"""
Parsers that turn source text into plain dict ASTs.

- script: JavaScript via esprima (ESTree node layout)
- handlebars: Handlebars templates (Handlebars 1.x node layout)
"""

from emberdeps.parsers.script import ScriptSyntaxError, parse_script
from emberdeps.parsers.handlebars import TemplateSyntaxError, parse_template

__all__ = [
    "ScriptSyntaxError",
    "TemplateSyntaxError",
    "parse_script",
    "parse_template",
]
