"""
Handlebars front end: tokenizes and parses templates into a plain dict AST.

The tree follows the Handlebars 1.x node layout consumed by the template
matchers:

- program:  {"type": "program", "statements": [...]}
- content:  {"type": "content", "string": ...}
- comment:  {"type": "comment", "comment": ...}
- mustache: {"type": "mustache", "sexpr": sexpr, "escaped": bool, "strip": {...}}
- block:    {"type": "block", "mustache": mustache, "program": program|None,
             "inverse": program|None}
- partial:  {"type": "partial", "partialName": {...}, "context": param|None,
             "hash": hash|None}
- sexpr:    {"type": "sexpr", "id": ID, "params": [...], "hash": hash|None,
             "blockParams": [name, ...]|None}
- hash:     {"type": "hash", "pairs": [[key, param], ...]}
- params:   ID, DATA, STRING, NUMBER, BOOLEAN, NULL, UNDEFINED, each carrying
            its source text in "original"

Only the syntax needed to locate helper invocations reliably is supported;
raw blocks and chained `{{else if}}` sections are not.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

from emberdeps.constants import HANDLEBARS_LITERAL_KEYWORDS, MAX_TEMPLATE_NESTING
from emberdeps.parsers.patterns import (
    MUSTACHE_OPEN,
    LONG_COMMENT_END,
    SHORT_COMMENT_END,
    MUSTACHE_CLOSE,
    WHITESPACE,
    STRING_LITERAL,
    NUMBER_LITERAL,
    PATH,
    DATA_PATH,
    HASH_KEY,
    OPEN_SEXPR,
    CLOSE_SEXPR,
    PATH_SEPARATOR,
    STRING_ESCAPE,
    BLOCK_PARAMS,
)

logger = logging.getLogger(__name__)

__all__ = [
    "TokenType",
    "Token",
    "TemplateSyntaxError",
    "TemplateLexer",
    "TemplateParser",
    "parse_template",
]


class TokenType(enum.Enum):
    """Token types produced by the lexer."""

    CONTENT = "CONTENT"
    COMMENT = "COMMENT"

    # Tag openers
    OPEN = "OPEN"                        # {{
    OPEN_UNESCAPED = "OPEN_UNESCAPED"    # {{{
    OPEN_AMP = "OPEN_AMP"                # {{&
    OPEN_BLOCK = "OPEN_BLOCK"            # {{#
    OPEN_INVERSE = "OPEN_INVERSE"        # {{^
    OPEN_ENDBLOCK = "OPEN_ENDBLOCK"      # {{/
    OPEN_PARTIAL = "OPEN_PARTIAL"        # {{>

    # Tag closers
    CLOSE = "CLOSE"                      # }}
    CLOSE_UNESCAPED = "CLOSE_UNESCAPED"  # }}}

    # Inside a tag
    ID = "ID"
    DATA = "DATA"
    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    UNDEFINED = "UNDEFINED"
    KEY = "KEY"                          # hash key, '=' consumed
    OPEN_SEXPR = "OPEN_SEXPR"            # (
    CLOSE_SEXPR = "CLOSE_SEXPR"          # )
    BLOCK_PARAMS = "BLOCK_PARAMS"        # as |a b|

    EOF = "EOF"


_OPENER_KINDS = {
    None: TokenType.OPEN,
    "{": TokenType.OPEN_UNESCAPED,
    "&": TokenType.OPEN_AMP,
    "#": TokenType.OPEN_BLOCK,
    "^": TokenType.OPEN_INVERSE,
    "/": TokenType.OPEN_ENDBLOCK,
    ">": TokenType.OPEN_PARTIAL,
}

_MUSTACHE_OPENERS = frozenset({
    TokenType.OPEN,
    TokenType.OPEN_UNESCAPED,
    TokenType.OPEN_AMP,
})

_CLOSERS = frozenset({TokenType.CLOSE, TokenType.CLOSE_UNESCAPED})

_LITERAL_PARAMS = frozenset({
    TokenType.STRING,
    TokenType.NUMBER,
    TokenType.BOOLEAN,
    TokenType.NULL,
    TokenType.UNDEFINED,
})


@dataclass(frozen=True)
class Token:
    """A token with its offset in the source text."""
    type: TokenType
    value: str
    position: int
    strip: bool = False

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, @{self.position})"


class TemplateSyntaxError(SyntaxError):
    """Raised when template text is not valid Handlebars."""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(message)
        self.lineno = line
        self.offset = column
        self.line = line
        self.column = column


def _line_and_column(text: str, position: int) -> tuple[int, int]:
    """1-based line and column of an offset."""
    line = text.count("\n", 0, position) + 1
    column = position - (text.rfind("\n", 0, position) + 1) + 1
    return line, column


class TemplateLexer:
    """
    Splits template text into content, comments and tag tokens.

    Outside tags everything up to the next '{{' is content; '\\{{' escapes
    a mustache into content, while '\\\\{{' keeps one backslash before a real
    mustache. Inside a tag, params, hash keys and subexpression parentheses
    are tokenized until the closing braces.
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.length = len(text)
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenize the whole text. The list always ends with EOF."""
        text = self.text
        while self.position < self.length:
            index = text.find("{{", self.position)
            if index == -1:
                self._emit_content(self.position, self.length)
                break

            if index >= 2 and text[index - 2:index] == "\\\\":
                # Escaped backslash: keep one backslash, the mustache is real
                self._emit_content(self.position, index - 1)
                self.position = index
                self._lex_tag()
                continue

            if index > 0 and text[index - 1] == "\\":
                # Escaped: drop the backslash, keep the braces as content
                self._emit_content(self.position, index - 1)
                next_tag = text.find("{{", index + 2)
                end = self.length if next_tag == -1 else next_tag
                if end < self.length and text[end - 1] == "\\":
                    end -= 1
                self._emit_content(index, end)
                self.position = end
                continue

            self._emit_content(self.position, index)
            self.position = index
            self._lex_tag()

        self.tokens.append(Token(TokenType.EOF, "", self.length))
        return self.tokens

    def _emit_content(self, start: int, end: int) -> None:
        if start >= end:
            return
        value = self.text[start:end]
        # Merge with preceding content produced by escapes
        if self.tokens and self.tokens[-1].type == TokenType.CONTENT:
            previous = self.tokens.pop()
            self.tokens.append(Token(TokenType.CONTENT, previous.value + value, previous.position))
        else:
            self.tokens.append(Token(TokenType.CONTENT, value, start))

    def _lex_tag(self) -> None:
        start = self.position
        match = MUSTACHE_OPEN.match(self.text, start)
        kind = match.group("kind")
        strip = match.group("strip") is not None
        self.position = match.end()

        if kind in ("!--", "!"):
            self._lex_comment(start, long_form=kind == "!--")
            return

        self.tokens.append(Token(_OPENER_KINDS[kind], match.group(0), start, strip))
        self._lex_tag_body(start, triple=kind == "{")

    def _lex_comment(self, start: int, long_form: bool) -> None:
        pattern = LONG_COMMENT_END if long_form else SHORT_COMMENT_END
        end = pattern.search(self.text, self.position)
        if end is None:
            self._error("Unterminated comment", start)
        self.tokens.append(Token(TokenType.COMMENT, self.text[self.position:end.start()], start))
        self.position = end.end()

    def _lex_tag_body(self, tag_start: int, triple: bool) -> None:
        """Tokenize a tag's inside up to and including its closer."""
        text = self.text
        while True:
            match = WHITESPACE.match(text, self.position)
            if match:
                self.position = match.end()
            if self.position >= self.length:
                self._error("Unclosed mustache", tag_start)

            position = self.position

            match = MUSTACHE_CLOSE.match(text, position)
            if match:
                end = match.end()
                token_type = TokenType.CLOSE
                if triple:
                    if not text.startswith("}", end):
                        self._error("Expected '}}}' to close '{{{'", position)
                    end += 1
                    token_type = TokenType.CLOSE_UNESCAPED
                strip = match.group("strip") is not None
                self.tokens.append(Token(token_type, text[position:end], position, strip))
                self.position = end
                return

            match = STRING_LITERAL.match(text, position)
            if match:
                raw = match.group("double")
                if raw is None:
                    raw = match.group("single")
                self._push(TokenType.STRING, STRING_ESCAPE.sub(r"\1", raw), match.end())
                continue

            match = NUMBER_LITERAL.match(text, position)
            if match:
                self._push(TokenType.NUMBER, match.group(0), match.end())
                continue

            match = BLOCK_PARAMS.match(text, position)
            if match:
                self._push(TokenType.BLOCK_PARAMS, match.group("names").strip(), match.end())
                continue

            match = HASH_KEY.match(text, position)
            if match:
                self._push(TokenType.KEY, match.group("key"), match.end())
                continue

            match = DATA_PATH.match(text, position)
            if match:
                self._push(TokenType.DATA, match.group(0), match.end())
                continue

            match = PATH.match(text, position)
            if match:
                value = match.group(0)
                keyword = HANDLEBARS_LITERAL_KEYWORDS.get(value)
                token_type = TokenType(keyword) if keyword else TokenType.ID
                self._push(token_type, value, match.end())
                continue

            if OPEN_SEXPR.match(text, position):
                self._push(TokenType.OPEN_SEXPR, "(", position + 1)
                continue

            if CLOSE_SEXPR.match(text, position):
                self._push(TokenType.CLOSE_SEXPR, ")", position + 1)
                continue

            if text.startswith("{{", position):
                self._error("Unclosed mustache", tag_start)
            self._error(f"Unexpected character {text[position]!r}", position)

    def _push(self, token_type: TokenType, value: str, end: int) -> None:
        self.tokens.append(Token(token_type, value, self.position))
        self.position = end

    def _error(self, message: str, position: int) -> None:
        line, column = _line_and_column(self.text, position)
        raise TemplateSyntaxError(message, line, column)


class TemplateParser:
    """
    Recursive-descent parser from lexer tokens to the dict AST.

    Blocks are matched against their closing tags; an unclosed block, a
    closing tag without a block or a mismatched name is a syntax error.
    """

    def __init__(self, tokens: List[Token], text: str):
        self.tokens = tokens
        self.text = text
        self.position = 0
        self.depth = 0

    def parse(self) -> dict:
        """Parse all tokens into a program node."""
        statements = self._parse_statements(in_block=False)
        return {"type": "program", "statements": statements}

    # --- Statements ---

    def _parse_statements(self, in_block: bool) -> list:
        statements = []

        while True:
            token = self._current()

            if token.type == TokenType.EOF:
                return statements

            if token.type == TokenType.OPEN_ENDBLOCK or self._at_inverse_marker():
                if in_block:
                    return statements
                if token.type == TokenType.OPEN_ENDBLOCK:
                    self._error("Closing tag without an open block", token)
                self._error("{{else}} outside of a block", token)

            if token.type == TokenType.CONTENT:
                self._advance()
                statements.append({"type": "content", "string": token.value})
            elif token.type == TokenType.COMMENT:
                self._advance()
                statements.append({"type": "comment", "comment": token.value})
            elif token.type in (TokenType.OPEN_BLOCK, TokenType.OPEN_INVERSE):
                statements.append(self._parse_block())
            elif token.type == TokenType.OPEN_PARTIAL:
                statements.append(self._parse_partial())
            elif token.type in _MUSTACHE_OPENERS:
                statements.append(self._parse_mustache())
            else:
                self._error(f"Unexpected {token.type.name}", token)

    def _parse_mustache(self) -> dict:
        opener = self._advance()
        sexpr = self._parse_sexpr(opener)
        closer = self._expect_closer(opener)
        return {
            "type": "mustache",
            "sexpr": sexpr,
            "escaped": opener.type == TokenType.OPEN,
            "strip": {"open": opener.strip, "close": closer.strip},
        }

    def _parse_block(self) -> dict:
        opener = self._advance()
        self._enter(opener)
        sexpr = self._parse_sexpr(opener)
        closer = self._expect_closer(opener)
        mustache = {
            "type": "mustache",
            "sexpr": sexpr,
            "escaped": True,
            "strip": {"open": opener.strip, "close": closer.strip},
        }
        name = sexpr["id"]["original"]

        program = {"type": "program", "statements": self._parse_statements(in_block=True)}
        inverse = None
        if self._at_inverse_marker():
            self._skip_inverse_marker()
            inverse = {"type": "program", "statements": self._parse_statements(in_block=True)}

        end = self._current()
        if end.type != TokenType.OPEN_ENDBLOCK:
            self._error(f"Unclosed block '{name}'", opener)
        self._advance()

        close_name = self._current()
        if close_name.type not in (TokenType.ID, TokenType.DATA):
            self._error("Expected block name in closing tag", close_name)
        self._advance()
        if close_name.value != name:
            self._error(f"{name} doesn't match {close_name.value}", close_name)
        self._expect(TokenType.CLOSE)

        if opener.type == TokenType.OPEN_INVERSE:
            program, inverse = None, program
        self.depth -= 1

        return {
            "type": "block",
            "mustache": mustache,
            "program": program,
            "inverse": inverse,
        }

    def _parse_partial(self) -> dict:
        opener = self._advance()
        token = self._current()
        if token.type not in (TokenType.ID, TokenType.STRING):
            self._error("Expected partial name", token)
        self._advance()
        partial_name = {"type": "PARTIAL_NAME", "name": token.value}

        context = None
        pairs = []
        while self._current().type not in _CLOSERS:
            current = self._current()
            if current.type == TokenType.KEY:
                self._advance()
                pairs.append([current.value, self._parse_param(opener)])
            elif context is None:
                context = self._parse_param(opener)
            else:
                self._error("Partials accept a single context", current)
        self._expect(TokenType.CLOSE)

        return {
            "type": "partial",
            "partialName": partial_name,
            "context": context,
            "hash": {"type": "hash", "pairs": pairs} if pairs else None,
        }

    # --- Expressions ---

    def _parse_sexpr(self, opener: Token, end_type: Optional[TokenType] = None) -> dict:
        """
        Parse a helper path followed by params and hash pairs.

        Stops before the tag closer, or consumes end_type (the ')' of a
        subexpression) when given.
        """
        head = self._current()
        if head.type not in (TokenType.ID, TokenType.DATA):
            self._error("Expected helper name or path", head)
        self._advance()

        params = []
        pairs = []
        block_params = None
        while True:
            token = self._current()
            if end_type is not None and token.type == end_type:
                self._advance()
                break
            if end_type is None and token.type in _CLOSERS:
                break
            if token.type == TokenType.BLOCK_PARAMS:
                if opener.type != TokenType.OPEN_BLOCK or end_type is not None:
                    self._error("Block params are only allowed on block helpers", token)
                self._advance()
                block_params = token.value.split()
            elif token.type == TokenType.KEY:
                self._advance()
                pairs.append([token.value, self._parse_param(opener)])
            else:
                params.append(self._parse_param(opener))

        return {
            "type": "sexpr",
            "id": _path_node(head),
            "params": params,
            "hash": {"type": "hash", "pairs": pairs} if pairs else None,
            "blockParams": block_params,
        }

    def _parse_param(self, opener: Token) -> dict:
        token = self._current()

        if token.type == TokenType.OPEN_SEXPR:
            self._advance()
            self._enter(token)
            sexpr = self._parse_sexpr(opener, end_type=TokenType.CLOSE_SEXPR)
            self.depth -= 1
            return sexpr
        if token.type in (TokenType.ID, TokenType.DATA):
            self._advance()
            return _path_node(token)
        if token.type in _LITERAL_PARAMS:
            self._advance()
            return _literal_node(token)
        if token.type == TokenType.EOF:
            self._error("Unclosed mustache", opener)
        self._error(f"Unexpected {token.type.name}", token)

    # --- Token helpers ---

    def _enter(self, token: Token) -> None:
        """Count one more nesting level, refusing trees deeper than the limit."""
        self.depth += 1
        if self.depth > MAX_TEMPLATE_NESTING:
            self._error(f"Nested too deeply (more than {MAX_TEMPLATE_NESTING} levels)", token)

    def _current(self) -> Token:
        return self.tokens[self.position]

    def _peek(self, offset: int) -> Token:
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def _advance(self) -> Token:
        token = self.tokens[self.position]
        if token.type != TokenType.EOF:
            self.position += 1
        return token

    def _expect(self, token_type: TokenType) -> Token:
        token = self._current()
        if token.type != token_type:
            self._error(f"Expected {token_type.name}, got {token.type.name}", token)
        return self._advance()

    def _expect_closer(self, opener: Token) -> Token:
        expected = TokenType.CLOSE_UNESCAPED if opener.type == TokenType.OPEN_UNESCAPED else TokenType.CLOSE
        token = self._current()
        if token.type != expected:
            self._error(f"Mismatched braces for {opener.value!r}", token)
        return self._advance()

    def _at_inverse_marker(self) -> bool:
        """True at '{{else}}' or '{{^}}'."""
        token = self._current()
        if token.type == TokenType.OPEN_INVERSE:
            return self._peek(1).type == TokenType.CLOSE
        if token.type == TokenType.OPEN:
            following = self._peek(1)
            return (
                following.type == TokenType.ID
                and following.value == "else"
                and self._peek(2).type == TokenType.CLOSE
            )
        return False

    def _skip_inverse_marker(self) -> None:
        while self._advance().type != TokenType.CLOSE:
            pass

    def _error(self, message: str, token: Token) -> None:
        line, column = _line_and_column(self.text, token.position)
        raise TemplateSyntaxError(message, line, column)


def _path_node(token: Token) -> dict:
    if token.type == TokenType.DATA:
        return {"type": "DATA", "original": token.value}
    parts = [part for part in PATH_SEPARATOR.split(token.value) if part and part not in (".", "..", "this")]
    return {"type": "ID", "original": token.value, "parts": parts}


def _literal_node(token: Token) -> dict:
    node = {"type": token.type.value, "original": token.value}
    if token.type == TokenType.STRING:
        node["string"] = token.value
    elif token.type == TokenType.NUMBER:
        node["number"] = float(token.value) if "." in token.value else int(token.value)
    elif token.type == TokenType.BOOLEAN:
        node["bool"] = token.value == "true"
    return node


def parse_template(text: str) -> dict:
    """
    Parse Handlebars source into a program node.

    Raises:
        TemplateSyntaxError: If the text is not valid Handlebars
    """
    tokens = TemplateLexer(text).tokenize()
    logger.debug("Tokenized template into %d tokens", len(tokens))
    return TemplateParser(tokens, text).parse()
