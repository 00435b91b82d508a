"""
Compiled regex patterns for the Handlebars lexer.

All patterns use re.VERBOSE for readability and are pre-compiled for performance.
Patterns are matched at an explicit position with .match(text, pos).
"""
import re

# =============================================================================
# Tag Delimiters
# =============================================================================

# Opening of any mustache tag, with optional whitespace control and tag kind
MUSTACHE_OPEN = re.compile(
    r"""
    \{\{                    # opening braces
    (?P<strip>~)?           # whitespace control
    (?P<kind>
        !--                 # long comment
        | !                 # comment
        | \{                # unescaped (triple stash)
        | &                 # unescaped
        | \#                # block
        | \^                # inverse block / else
        | /                 # end of block
        | >                 # partial
    )?
    """,
    re.VERBOSE,
)

# Ends of comment bodies, searched for from the comment start
LONG_COMMENT_END = re.compile(r"--(?P<strip>~)?\}\}")
SHORT_COMMENT_END = re.compile(r"(?P<strip>~)?\}\}")

# A triple stash needs one more '}', checked by the lexer
MUSTACHE_CLOSE = re.compile(
    r"""
    (?P<strip>~)?           # whitespace control
    \}\}
    """,
    re.VERBOSE,
)

# =============================================================================
# Tokens Inside a Tag
# =============================================================================

WHITESPACE = re.compile(r"\s+")

STRING_LITERAL = re.compile(
    r"""
    "(?P<double>(?:\\.|[^"\\])*)"
    | '(?P<single>(?:\\.|[^'\\])*)'
    """,
    re.VERBOSE,
)

# Must be tried before PATH: digits and '-' are valid path characters
NUMBER_LITERAL = re.compile(
    r"""
    -?\d+(?:\.\d+)?
    (?=[\s~})=]|$)          # followed by a delimiter, not more identifier
    """,
    re.VERBOSE,
)

# Segment characters follow the Handlebars ID rule
_SEGMENT = r"""(?:[^\s!"\#%-,./;->@\[-\^`{-~]+|\[[^\]]*\])"""

PATH = re.compile(
    rf"""
    (?:\.\.|\.|{_SEGMENT})              # first segment, '..' or '.'
    (?:[./](?:\.\.|{_SEGMENT}))*        # more segments separated by '.' or '/'
    """,
    re.VERBOSE,
)

DATA_PATH = re.compile(
    rf"""
    @
    (?P<path>{_SEGMENT}(?:[./]{_SEGMENT})*)
    """,
    re.VERBOSE,
)

HASH_KEY = re.compile(
    rf"""
    (?P<key>{_SEGMENT})
    \s* =
    """,
    re.VERBOSE,
)

OPEN_SEXPR = re.compile(r"\(")
CLOSE_SEXPR = re.compile(r"\)")

# Splits a path's original text into its parts
PATH_SEPARATOR = re.compile(r"[./]")

# Backslash escapes inside string literals
STRING_ESCAPE = re.compile(r"\\(.)", re.DOTALL)

# Block params: {{#each items as |item index|}}
BLOCK_PARAMS = re.compile(
    r"""
    as \s+ \|
    (?P<names>[^|]*)        # space separated names
    \|
    """,
    re.VERBOSE,
)
