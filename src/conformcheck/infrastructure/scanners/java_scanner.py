"""Java language adapter.

Two phases:
1. Tokenize (java_tokenizer) - the only phase that can fail.
2. Walk the token stream by brace structure, extracting type, method,
   constructor and field declarations and the facts of method bodies.

The walk is tolerant: unbalanced braces, unknown constructs and
truncated files end the current scope instead of failing the scan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from conformcheck.domain.exceptions.source import MalformedSourceError
from conformcheck.domain.model.enums import DeclarationKind, Feature, Visibility
from conformcheck.domain.model.source_unit import SourceUnit
from conformcheck.domain.model.taxonomy import Taxonomy
from conformcheck.infrastructure.scanners.base import DeclarationCollector, read_source
from conformcheck.infrastructure.scanners.java_tokenizer import Token, tokenize

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

MODIFIERS = frozenset(
    {
        "public",
        "protected",
        "private",
        "static",
        "final",
        "abstract",
        "native",
        "synchronized",
        "transient",
        "volatile",
        "strictfp",
        "default",
        "sealed",
    }
)

_VISIBILITY = {
    "public": Visibility.PUBLIC,
    "protected": Visibility.PROTECTED,
    "private": Visibility.PRIVATE,
}

_TYPE_KEYWORDS = frozenset({"class", "interface", "enum", "record"})

# Tokens allowed between '<' and '>' of a type argument list
_GENERIC_TOKENS = frozenset({".", ",", "?", "[", "]", "&", "extends", "super", "<", ">"})

_OPENERS = {"(": ")", "[": "]", "{": "}"}


@dataclass(frozen=True, slots=True)
class _Scope:
    """Enclosing type declaration."""

    qualified_name: str
    simple_name: str
    keyword: str  # class/interface/enum/record/@interface

    @property
    def members_public_by_default(self) -> bool:
        return self.keyword in ("interface", "@interface")


@dataclass(frozen=True, slots=True)
class _Header:
    """Annotations and modifiers preceding a declaration."""

    start: int  # index of first token (doc flag lives here)
    annotations: frozenset[str]
    modifiers: frozenset[str]


class JavaScanner:
    """Language adapter for Java sources.

    Stateless between scan() calls.
    """

    suffixes = frozenset({".java"})

    def __init__(self, taxonomy: Taxonomy | None = None) -> None:
        """Initialize scanner.

        Args:
            taxonomy: Vocabulary for broad exceptions, resources and
                test annotations. Defaults to Taxonomy.java().
        """
        self.taxonomy = taxonomy or Taxonomy.java()

    def scan(self, path: Path) -> SourceUnit:
        """Scan one Java file.

        Raises:
            UnreadableSourceError: If path cannot be read
            MalformedSourceError: On unterminated comment or literal
        """
        source = read_source(path)
        return self.scan_source(source, path)

    def scan_source(self, source: str, path: Path) -> SourceUnit:
        """Scan Java source text already in memory.

        Raises:
            MalformedSourceError: On unterminated comment or literal, or
                type declarations nested too deeply to walk
        """
        tokens = tokenize(source, path)
        collector = DeclarationCollector(path)
        try:
            _StructureWalker(tokens, collector, self.taxonomy).walk()
        except RecursionError as e:
            raise MalformedSourceError(path, "type declarations nested too deeply") from e
        unit = SourceUnit(path=path, language=self.taxonomy.language, declarations=collector.declarations())
        logger.debug("scanned %s: %d declarations", path, len(unit))
        return unit


class _StructureWalker:
    """Single-use walker over one file's tokens."""

    def __init__(self, tokens: tuple[Token, ...], collector: DeclarationCollector, taxonomy: Taxonomy) -> None:
        self._tokens = tokens
        self._collector = collector
        self._taxonomy = taxonomy
        self._pos = 0

    # -- token helpers --------------------------------------------------------

    def _text(self, index: int) -> str:
        if 0 <= index < len(self._tokens):
            return self._tokens[index].text
        return ""

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _skip_balanced(self, index: int) -> int:
        """Index after the group opened at index (or end of file)."""
        return _skip_balanced(self._tokens, index)

    # -- members ---------------------------------------------------------------

    def walk(self) -> None:
        self._members(None)

    def _members(self, scope: _Scope | None) -> None:
        """Parse member declarations until the scope's closing brace."""
        while not self._at_end():
            text = self._text(self._pos)

            if text == "}":
                self._pos += 1
                if scope is not None:
                    return
                continue  # stray brace at top level
            if text == ";":
                self._pos += 1
                continue
            if scope is None and text in ("package", "import"):
                self._skip_statement()
                continue

            header = self._header()
            text = self._text(self._pos)

            if text in _TYPE_KEYWORDS and self._is_type_declaration():
                self._type_declaration(header, scope, text)
            elif text == "@" and self._text(self._pos + 1) == "interface":
                self._pos += 1
                self._type_declaration(header, scope, "@interface")
            elif text == "{":
                self._pos = self._skip_balanced(self._pos)  # initializer block
            elif self._at_end():
                return
            else:
                self._member(header, scope)

    def _header(self) -> _Header:
        start = self._pos
        annotations: set[str] = set()
        modifiers: set[str] = set()

        while not self._at_end():
            text = self._text(self._pos)
            if text == "@" and self._text(self._pos + 1) != "interface":
                self._pos += 1
                name = self._qualified_name()
                if name:
                    annotations.add(name.rsplit(".", 1)[-1])
                if self._text(self._pos) == "(":
                    self._pos = self._skip_balanced(self._pos)
            elif text in MODIFIERS:
                modifiers.add(text)
                self._pos += 1
            elif text == "non" and self._text(self._pos + 1) == "-" and self._text(self._pos + 2) == "sealed":
                modifiers.add("non-sealed")
                self._pos += 3
            else:
                break

        return _Header(start=start, annotations=frozenset(annotations), modifiers=frozenset(modifiers))

    def _qualified_name(self) -> str:
        parts: list[str] = []
        while not self._at_end() and self._tokens[self._pos].is_ident:
            parts.append(self._text(self._pos))
            self._pos += 1
            if self._text(self._pos) == "." and self._pos + 1 < len(self._tokens) and self._tokens[self._pos + 1].is_ident:
                self._pos += 1
            else:
                break
        return ".".join(parts)

    def _is_type_declaration(self) -> bool:
        """'record' is contextual: a type only when followed by Name ( or Name <."""
        keyword = self._text(self._pos)
        nxt = self._tokens[self._pos + 1] if self._pos + 1 < len(self._tokens) else None
        if nxt is None or not nxt.is_ident:
            return False
        if keyword == "record":
            return self._text(self._pos + 2) in ("(", "<")
        return True

    def _skip_statement(self) -> None:
        while not self._at_end() and self._text(self._pos) != ";":
            self._pos += 1
        self._pos += 1

    def _visibility(self, header: _Header, scope: _Scope | None) -> Visibility:
        for modifier, visibility in _VISIBILITY.items():
            if modifier in header.modifiers:
                return visibility
        if scope is not None and scope.members_public_by_default:
            return Visibility.PUBLIC
        return Visibility.PACKAGE

    def _documented(self, header: _Header) -> bool:
        return self._tokens[header.start].doc

    # -- type declarations -----------------------------------------------------

    def _type_declaration(self, header: _Header, scope: _Scope | None, keyword: str) -> None:
        keyword_token = self._tokens[self._pos]
        self._pos += 1
        name = self._text(self._pos)
        qualified = f"{scope.qualified_name}.{name}" if scope else name
        self._pos += 1

        self._collector.add(
            name=name,
            qualified_name=qualified,
            kind=DeclarationKind.CLASS,
            visibility=self._visibility(header, scope),
            documented=self._documented(header),
            features=frozenset(),
            line=keyword_token.line,
            column=self._tokens[header.start].column,
        )

        # Skip type parameters, record components, extends/implements/permits
        while not self._at_end() and self._text(self._pos) not in ("{", ";", "}"):
            if self._text(self._pos) in ("(", "["):
                self._pos = self._skip_balanced(self._pos)
            else:
                self._pos += 1

        if self._text(self._pos) != "{":
            return  # truncated or malformed header: nothing to descend into

        self._pos += 1
        inner = _Scope(qualified_name=qualified, simple_name=name, keyword=keyword)
        if keyword == "enum" and self._enum_constants():
            return
        self._members(inner)

    def _enum_constants(self) -> bool:
        """Skip enum constants. True if the enum body also ended."""
        while not self._at_end():
            text = self._text(self._pos)
            if text == ";":
                self._pos += 1
                return False
            if text == "}":
                self._pos += 1
                return True
            if text in _OPENERS:
                self._pos = self._skip_balanced(self._pos)
            else:
                self._pos += 1
        return True

    # -- methods and fields ----------------------------------------------------

    def _member(self, header: _Header, scope: _Scope | None) -> None:
        """Classify member at current position as method or field."""
        index = self._pos
        tokens = self._tokens

        while index < len(tokens):
            text = tokens[index].text
            if text == "<":
                end = _skip_generic(tokens, index)
                index = end if end is not None else index + 1
                continue
            if text == "(":
                if index > self._pos and tokens[index - 1].is_ident:
                    self._method(header, scope, index)
                else:
                    self._pos = self._skip_balanced(index)
                return
            if text in ("=", ";", ","):
                self._fields(header, scope)
                return
            if text in ("{", "}"):
                # Unknown construct: resume at the brace
                self._pos = index
                if text == "{":
                    self._pos = self._skip_balanced(index)
                return
            index += 1

        self._pos = index

    def _method(self, header: _Header, scope: _Scope | None, paren: int) -> None:
        tokens = self._tokens
        name_token = tokens[paren - 1]
        name = name_token.text

        if scope is not None and name == scope.simple_name:
            kind = DeclarationKind.CONSTRUCTOR
        elif scope is None:
            kind = DeclarationKind.FUNCTION
        else:
            kind = DeclarationKind.METHOD

        visibility = self._visibility(header, scope)
        if kind == DeclarationKind.CONSTRUCTOR and scope is not None and scope.keyword == "enum":
            visibility = Visibility.PRIVATE

        features: set[Feature] = set()
        if "Override" in header.annotations:
            features.add(Feature.OVERRIDE)
        if header.annotations & self._taxonomy.test_markers:
            features.add(Feature.TEST)

        # Parameters, then throws clause / default value until body or ';'
        index = _skip_balanced(tokens, paren)
        while index < len(tokens) and tokens[index].text not in ("{", ";", "}"):
            index = _skip_balanced(tokens, index) if tokens[index].text in ("(", "[") else index + 1

        if index < len(tokens) and tokens[index].text == "{":
            end = _skip_balanced(tokens, index)
            closed = tokens[end - 1].text == "}"
            body = tokens[index + 1 : end - 1] if closed else tokens[index + 1 : end]
            features |= analyze_body(body, self._taxonomy)
            self._pos = end
        elif index < len(tokens) and tokens[index].text == ";":
            self._pos = index + 1
        else:
            self._pos = index

        qualified = f"{scope.qualified_name}.{name}" if scope else name
        self._collector.add(
            name=name,
            qualified_name=qualified,
            kind=kind,
            visibility=visibility,
            documented=self._documented(header),
            features=frozenset(features),
            line=name_token.line,
            column=name_token.column,
        )

    def _fields(self, header: _Header, scope: _Scope | None) -> None:
        """One FIELD declaration per declarator: `int a = 1, b;`."""
        tokens = self._tokens
        mutable = "final" not in header.modifiers and not (scope is not None and scope.members_public_by_default)
        features = frozenset({Feature.MUTABLE}) if mutable else frozenset()
        visibility = self._visibility(header, scope)
        documented = self._documented(header)

        names: list[Token] = []
        last_ident: Token | None = None
        index = self._pos

        while index < len(tokens):
            text = tokens[index].text
            if text == "<":
                end = _skip_generic(tokens, index)
                index = end if end is not None else index + 1
                continue
            if text == "=":
                if last_ident is not None:
                    names.append(last_ident)
                    last_ident = None
                index = _skip_initializer(tokens, index + 1)
                continue
            if text in (",", ";"):
                if last_ident is not None:
                    names.append(last_ident)
                    last_ident = None
                index += 1
                if text == ";":
                    break
                continue
            if text == "}":
                break  # truncated declaration; the scope closes here
            if text == "[":
                index = _skip_balanced(tokens, index)
                continue
            if tokens[index].is_ident:
                last_ident = tokens[index]
            index += 1

        self._pos = index
        for name_token in names:
            name = name_token.text
            self._collector.add(
                name=name,
                qualified_name=f"{scope.qualified_name}.{name}" if scope else name,
                kind=DeclarationKind.FIELD,
                visibility=visibility,
                documented=documented,
                features=features,
                line=name_token.line,
                column=name_token.column,
            )


# =============================================================================
# Token-stream helpers
# =============================================================================


def _skip_balanced(tokens: tuple[Token, ...], index: int) -> int:
    """Index after the (), [] or {} group opened at index.

    Returns len(tokens) if the group never closes.
    """
    stack = [_OPENERS[tokens[index].text]]
    index += 1
    while index < len(tokens) and stack:
        text = tokens[index].text
        if text in _OPENERS:
            stack.append(_OPENERS[text])
        elif text == stack[-1]:
            stack.pop()
        elif text in (")", "]", "}"):
            # Mismatched closer: resynchronize on braces only
            if text == "}" and "}" in stack:
                while stack and stack[-1] != "}":
                    stack.pop()
                stack.pop()
        index += 1
    return index


def _skip_generic(tokens: tuple[Token, ...], index: int) -> int | None:
    """Index after a type-argument list opened at index, or None.

    Returns None when the tokens do not look like type arguments
    (e.g. a less-than comparison).
    """
    depth = 0
    while index < len(tokens):
        token = tokens[index]
        if token.text == "<":
            depth += 1
        elif token.text == ">":
            depth -= 1
            if depth == 0:
                return index + 1
        elif token.text == ">=":
            return None
        elif not token.is_ident and token.text not in _GENERIC_TOKENS:
            return None
        index += 1
    return None


def _skip_initializer(tokens: tuple[Token, ...], index: int) -> int:
    """Index of the ',' or ';' ending a field initializer.

    Stops at an unmatched '}' so a truncated scope still closes.
    """
    while index < len(tokens):
        text = tokens[index].text
        if text in (",", ";", "}"):
            return index
        if text in _OPENERS:
            index = _skip_balanced(tokens, index)
            continue
        if text == "<" and index > 0 and _opens_type_arguments(tokens[index - 1]):
            end = _skip_generic(tokens, index)
            if end is not None:
                index = end
                continue
        index += 1
    return index


def _opens_type_arguments(previous: Token) -> bool:
    """`new HashMap<`, `Foo.<T>bar` - not `a < b`."""
    if previous.text == ".":
        return True
    return previous.is_ident and previous.text[:1].isupper()


# =============================================================================
# Method body facts
# =============================================================================


def analyze_body(body: tuple[Token, ...], taxonomy: Taxonomy) -> frozenset[Feature]:
    """Extract facts from method body tokens (braces excluded).

    Args:
        body: Tokens between the method's braces
        taxonomy: Broad exception and resource vocabulary

    Returns:
        Features found in the body
    """
    features: set[Feature] = set()
    scoped = _try_resource_ranges(body)

    index = 0
    while index < len(body):
        text = body[index].text

        if text == "catch" and index + 1 < len(body) and body[index + 1].text == "(":
            index = _catch_clause(body, index + 1, taxonomy, features)
            continue

        if text == "throw" and _text(body, index + 1) == "new":
            type_name, _ = _type_after(body, index + 2)
            if type_name and taxonomy.is_broad(type_name):
                features.add(Feature.THROWS_BROAD)

        elif text == "new":
            type_name, _ = _type_after(body, index + 1)
            if type_name and taxonomy.is_resource(type_name):
                _classify_acquisition(body, index, scoped, features)

        elif body[index].is_ident and _text(body, index + 1) == "(" and _text(body, index - 1) == ".":
            if f"{_text(body, index - 2)}.{text}" in taxonomy.resource_types:
                _classify_acquisition(body, index, scoped, features)

        index += 1

    return frozenset(features)


def _text(tokens: tuple[Token, ...], index: int) -> str:
    if 0 <= index < len(tokens):
        return tokens[index].text
    return ""


def _type_after(tokens: tuple[Token, ...], index: int) -> tuple[str, int]:
    """Dotted type name starting at index, and index after it."""
    parts: list[str] = []
    while index < len(tokens) and tokens[index].is_ident:
        parts.append(tokens[index].text)
        index += 1
        if _text(tokens, index) == "." and index + 1 < len(tokens) and tokens[index + 1].is_ident:
            index += 1
        else:
            break
    return ".".join(parts), index


def _catch_clause(body: tuple[Token, ...], paren: int, taxonomy: Taxonomy, features: set[Feature]) -> int:
    """Inspect `catch (T1 | T2 name) { ... }`. Returns index of the block.

    The block itself is left to the caller so nested catches, throws
    and acquisitions inside it are still seen.
    """
    end = _skip_balanced(body, paren)
    params = [t for t in body[paren + 1 : end - 1] if t.text != "final"]

    # Drop annotations: '@' Name
    cleaned: list[Token] = []
    skip_next = False
    for token in params:
        if skip_next:
            skip_next = False
            continue
        if token.text == "@":
            skip_next = True
            continue
        cleaned.append(token)

    if cleaned and cleaned[-1].is_ident:
        cleaned = cleaned[:-1]  # variable name

    alternatives = "".join(t.text for t in cleaned).split("|")
    if any(alt and taxonomy.is_broad(alt) for alt in alternatives):
        features.add(Feature.CATCHES_BROAD)

    if _text(body, end) == "{" and _text(body, end + 1) == "}":
        features.add(Feature.SWALLOWS_EXCEPTION)
    return end


def _try_resource_ranges(body: tuple[Token, ...]) -> tuple[range, ...]:
    """Token ranges of try-with-resources headers: `try ( ... )`."""
    ranges: list[range] = []
    for index, token in enumerate(body):
        if token.text == "try" and _text(body, index + 1) == "(":
            ranges.append(range(index + 1, _skip_balanced(body, index + 1)))
    return tuple(ranges)


def _classify_acquisition(
    body: tuple[Token, ...],
    index: int,
    scoped: tuple[range, ...],
    features: set[Feature],
) -> None:
    if any(index in r for r in scoped):
        features.add(Feature.SCOPED_RESOURCE)
    elif _statement_keyword(body, index) == "return":
        features.add(Feature.RETURNS_RESOURCE)
    else:
        features.add(Feature.UNSCOPED_RESOURCE)


def _statement_keyword(body: tuple[Token, ...], index: int) -> str:
    """First token of the statement containing index."""
    depth = 0
    while index > 0:
        text = body[index - 1].text
        if text in (")", "]"):
            depth += 1
        elif text in ("(", "["):
            depth = max(depth - 1, 0)  # leaving call arguments keeps walking out
        elif text in (";", "{", "}") and depth == 0:
            break
        index -= 1
    return _text(body, index)

