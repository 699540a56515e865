"""Python language adapter using the stdlib AST.

Declarations: classes, methods, module functions, class-level fields.
Body facts are collected per function without entering nested
functions, classes or lambdas (they are separate scopes).

A file that tokenizes but does not parse, or is nested too deeply for
the parser, degrades to a unit with no declarations. Only a tokenizer failure is malformed.
"""

from __future__ import annotations

import ast
import io
import logging
import tokenize
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from conformcheck.domain.exceptions.source import MalformedSourceError
from conformcheck.domain.model.enums import DeclarationKind, Feature, Visibility
from conformcheck.domain.model.source_unit import SourceUnit
from conformcheck.domain.model.taxonomy import Taxonomy
from conformcheck.infrastructure.scanners.base import DeclarationCollector, read_source

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# Base classes whose class-level names are not mutable instance state
_IMMUTABLE_BASES = frozenset(
    {"Enum", "IntEnum", "StrEnum", "Flag", "IntFlag", "NamedTuple", "TypedDict", "Protocol"}
)

type _FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


class PythonScanner:
    """Language adapter for Python sources.

    Stateless between scan() calls.
    """

    suffixes = frozenset({".py"})

    def __init__(self, taxonomy: Taxonomy | None = None) -> None:
        """Initialize scanner.

        Args:
            taxonomy: Vocabulary for broad exceptions, resource callables
                and test name prefixes. Defaults to Taxonomy.python().
        """
        self.taxonomy = taxonomy or Taxonomy.python()

    def scan(self, path: Path) -> SourceUnit:
        """Scan one Python file.

        Raises:
            UnreadableSourceError: If path cannot be read
            MalformedSourceError: If the source cannot be tokenized
        """
        source = read_source(path)
        return self.scan_source(source, path)

    def scan_source(self, source: str, path: Path) -> SourceUnit:
        """Scan Python source text already in memory."""
        collector = DeclarationCollector(path)

        try:
            tree = ast.parse(source, filename=str(path))
        except SyntaxError as e:
            _check_tokenizes(source, path)
            logger.warning("%s: syntax error at line %s, no facts extracted: %s", path, e.lineno, e.msg)
            return SourceUnit(path=path, language=self.taxonomy.language, declarations=())
        except (MemoryError, RecursionError) as e:
            # CPython reports over-deep expressions as "Parser stack overflowed"
            logger.warning("%s: too deeply nested to parse, no facts extracted: %s", path, e)
            return SourceUnit(path=path, language=self.taxonomy.language, declarations=())

        _ModuleVisitor(collector, self.taxonomy, is_test_module=_is_test_module(path)).visit_body(
            tree.body, scope=None
        )
        unit = SourceUnit(path=path, language=self.taxonomy.language, declarations=collector.declarations())
        logger.debug("scanned %s: %d declarations", path, len(unit))
        return unit


def _check_tokenizes(source: str, path: Path) -> None:
    """Raise MalformedSourceError if source cannot be tokenized."""
    try:
        for _ in tokenize.generate_tokens(io.StringIO(source).readline):
            pass
    except (tokenize.TokenError, SyntaxError) as e:
        line = getattr(e, "lineno", None)
        if line is None and isinstance(e, tokenize.TokenError) and len(e.args) > 1:
            line = e.args[1][0]
        raise MalformedSourceError(path, str(e.args[0]) if e.args else "tokenizer failure", line or None) from e


def _is_test_module(path: Path) -> bool:
    return path.name.startswith("test_") or path.stem.endswith("_test") or path.name == "conftest.py"


def get_visibility(name: str) -> Visibility:
    """Determine visibility from Python naming convention.

    Rules:
        __name__ (dunder) -> PUBLIC (special methods)
        __name (not __name__) -> PRIVATE (mangled)
        _name -> PROTECTED
        name -> PUBLIC
    """
    if name.startswith("__") and name.endswith("__"):
        return Visibility.PUBLIC
    if name.startswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def dotted_name(node: ast.expr) -> str | None:
    """Dotted path ("a.b.c") of a Name/Attribute chain, else None."""
    parts: list[str] = []
    while isinstance(node, ast.Attribute):
        parts.append(node.attr)
        node = node.value
    if isinstance(node, ast.Name):
        parts.append(node.id)
        return ".".join(reversed(parts))
    return None


class _ModuleVisitor:
    """Emits declarations in source order (pre-order)."""

    def __init__(self, collector: DeclarationCollector, taxonomy: Taxonomy, *, is_test_module: bool) -> None:
        self._collector = collector
        self._taxonomy = taxonomy
        self._is_test_module = is_test_module

    def visit_body(self, body: list[ast.stmt], scope: ast.ClassDef | None, prefix: str = "") -> None:
        for node in body:
            match node:
                case ast.ClassDef():
                    self._class(node, prefix)
                case ast.FunctionDef() | ast.AsyncFunctionDef():
                    self._function(node, scope, prefix)
                case ast.Assign(targets=targets) if scope is not None:
                    for target in targets:
                        if isinstance(target, ast.Name):
                            self._field(target.id, node, None, scope, prefix)
                case ast.AnnAssign(target=ast.Name(id=name), annotation=annotation) if scope is not None:
                    self._field(name, node, annotation, scope, prefix)

    def _class(self, node: ast.ClassDef, prefix: str) -> None:
        qualified = f"{prefix}{node.name}"
        self._collector.add(
            name=node.name,
            qualified_name=qualified,
            kind=DeclarationKind.CLASS,
            visibility=get_visibility(node.name),
            documented=ast.get_docstring(node) is not None,
            features=frozenset(),
            line=node.lineno,
            column=node.col_offset,
        )
        self.visit_body(node.body, node, f"{qualified}.")

    def _function(self, node: _FunctionNode, scope: ast.ClassDef | None, prefix: str) -> None:
        if scope is None:
            kind = DeclarationKind.FUNCTION
        elif node.name == "__init__":
            kind = DeclarationKind.CONSTRUCTOR
        else:
            kind = DeclarationKind.METHOD

        features = set(analyze_body(node.body, self._taxonomy))
        decorators = {dotted_name(d.func if isinstance(d, ast.Call) else d) for d in node.decorator_list}
        if _is_dunder(node.name) or decorators & {"override", "typing.override", "typing_extensions.override"}:
            features.add(Feature.OVERRIDE)
        if self._is_test(node, scope):
            features.add(Feature.TEST)

        self._collector.add(
            name=node.name,
            qualified_name=f"{prefix}{node.name}",
            kind=kind,
            visibility=get_visibility(node.name),
            documented=ast.get_docstring(node) is not None,
            features=frozenset(features),
            line=node.lineno,
            column=node.col_offset,
        )

    def _is_test(self, node: _FunctionNode, scope: ast.ClassDef | None) -> bool:
        if not self._is_test_module:
            return False
        if scope is not None and not scope.name.startswith("Test"):
            return False
        return any(node.name.startswith(marker) for marker in self._taxonomy.test_markers)

    def _field(
        self,
        name: str,
        node: ast.Assign | ast.AnnAssign,
        annotation: ast.expr | None,
        scope: ast.ClassDef,
        prefix: str,
    ) -> None:
        if _is_dunder(name):
            return  # __slots__, __match_args__ and friends are class protocol, not state

        mutable = not (name.isupper() or _is_final(annotation) or _is_immutable_class(scope))
        self._collector.add(
            name=name,
            qualified_name=f"{prefix}{name}",
            kind=DeclarationKind.FIELD,
            visibility=get_visibility(name),
            documented=False,
            features=frozenset({Feature.MUTABLE}) if mutable else frozenset(),
            line=node.lineno,
            column=node.col_offset,
        )


def _is_final(annotation: ast.expr | None) -> bool:
    """Final, typing.Final, Final[int], ClassVar[Final[int]]."""
    if annotation is None:
        return False
    for sub in ast.walk(annotation):
        name = dotted_name(sub) if isinstance(sub, ast.Name | ast.Attribute) else None
        if name is not None and name.rsplit(".", 1)[-1] == "Final":
            return True
    return False


def _is_immutable_class(node: ast.ClassDef) -> bool:
    """Frozen dataclass, enum, NamedTuple, TypedDict or Protocol."""
    for base in node.bases:
        name = dotted_name(base.value if isinstance(base, ast.Subscript) else base)
        if name is not None and name.rsplit(".", 1)[-1] in _IMMUTABLE_BASES:
            return True

    for decorator in node.decorator_list:
        if not isinstance(decorator, ast.Call):
            continue
        name = dotted_name(decorator.func)
        if name is None or name.rsplit(".", 1)[-1] != "dataclass":
            continue
        for keyword in decorator.keywords:
            if keyword.arg == "frozen" and isinstance(keyword.value, ast.Constant) and keyword.value.value is True:
                return True
    return False


# =============================================================================
# Function body facts
# =============================================================================


def shallow_walk(body: Iterable[ast.stmt]) -> Iterator[ast.AST]:
    """Walk AST nodes in body without entering nested scopes.

    Yields nested FunctionDef, AsyncFunctionDef, ClassDef and Lambda
    nodes but not their children.
    """
    stack: list[ast.AST] = list(reversed(list(body)))

    while stack:
        node = stack.pop()
        yield node

        match node:
            case ast.FunctionDef() | ast.AsyncFunctionDef() | ast.ClassDef() | ast.Lambda():
                pass
            case _:
                stack.extend(reversed(list(ast.iter_child_nodes(node))))


def analyze_body(body: list[ast.stmt], taxonomy: Taxonomy) -> frozenset[Feature]:
    """Extract facts from a function body.

    Args:
        body: Function body statements
        taxonomy: Broad exception and resource vocabulary

    Returns:
        Features found in the body
    """
    nodes = list(shallow_walk(body))
    scoped: set[int] = set()
    returned: set[int] = set()
    features: set[Feature] = set()

    for node in nodes:
        match node:
            case ast.With(items=items) | ast.AsyncWith(items=items):
                for item in items:
                    scoped.update(id(sub) for sub in ast.walk(item.context_expr))
                    if _is_broad_suppress(item.context_expr, taxonomy):
                        features.add(Feature.CATCHES_BROAD)
            case ast.Return(value=value) if value is not None:
                returned.add(id(value))  # `return open(p).read()` still leaks the handle

    for node in nodes:
        match node:
            case ast.ExceptHandler(type=exc_type, body=handler_body):
                if exc_type is None or _names_broad(exc_type, taxonomy):
                    features.add(Feature.CATCHES_BROAD)
                if all(_is_noop(stmt) for stmt in handler_body):
                    features.add(Feature.SWALLOWS_EXCEPTION)

            case ast.Raise(exc=exc) if exc is not None:
                target = exc.func if isinstance(exc, ast.Call) else exc
                name = dotted_name(target)
                if name is not None and taxonomy.is_broad(name):
                    features.add(Feature.THROWS_BROAD)

            case ast.Call(func=func):
                name = dotted_name(func)
                if name is None or name not in taxonomy.resource_types:
                    continue
                if id(node) in scoped:
                    features.add(Feature.SCOPED_RESOURCE)
                elif id(node) in returned:
                    features.add(Feature.RETURNS_RESOURCE)
                else:
                    features.add(Feature.UNSCOPED_RESOURCE)

    return frozenset(features)


def _names_broad(node: ast.expr, taxonomy: Taxonomy) -> bool:
    candidates = node.elts if isinstance(node, ast.Tuple) else [node]
    for candidate in candidates:
        name = dotted_name(candidate)
        if name is not None and taxonomy.is_broad(name):
            return True
    return False


def _is_broad_suppress(expr: ast.expr, taxonomy: Taxonomy) -> bool:
    """contextlib.suppress(Exception) is a broad catch in disguise."""
    if not isinstance(expr, ast.Call):
        return False
    name = dotted_name(expr.func)
    if name is None or name.rsplit(".", 1)[-1] != "suppress":
        return False
    return any(_names_broad(arg, taxonomy) for arg in expr.args)


def _is_noop(stmt: ast.stmt) -> bool:
    """`pass` or a bare `...`."""
    match stmt:
        case ast.Pass():
            return True
        case ast.Expr(value=ast.Constant(value=value)) if value is Ellipsis:
            return True
    return False
