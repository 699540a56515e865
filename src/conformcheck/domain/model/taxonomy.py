"""Language taxonomy: vocabulary mapping source constructs to facts.

The scanner is language-specific; rules are not. A Taxonomy tells an
adapter which names mean "the broad error type", "a resource that must
be released", and "this is a test".
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Taxonomy:
    """Fixed vocabulary supplied to a language adapter at construction.

    Attributes:
        language: Language name (e.g. "java", "python")
        broad_exceptions: Simple names of root/universal error types
        resource_types: Types (Java) or callables (Python) whose result
            must be released on every exit path
        test_markers: Annotations (Java) or name prefixes (Python)
            marking a test
    """

    language: str
    broad_exceptions: frozenset[str]
    resource_types: frozenset[str]
    test_markers: frozenset[str]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.language:
            raise ValueError("language must not be empty")
        if not self.broad_exceptions:
            raise ValueError("broad_exceptions must not be empty")

    def is_broad(self, type_name: str) -> bool:
        """True if type_name (possibly qualified) is a broad exception type."""
        return simple_name(type_name) in self.broad_exceptions

    def is_resource(self, type_name: str) -> bool:
        """True if type_name (possibly qualified) acquires a resource."""
        return type_name in self.resource_types or simple_name(type_name) in self.resource_types

    @classmethod
    def java(cls) -> Taxonomy:
        """Taxonomy for Java sources."""
        return cls(
            language="java",
            broad_exceptions=frozenset({"Throwable", "Exception", "RuntimeException", "Error"}),
            resource_types=frozenset(
                {
                    "FileInputStream",
                    "FileOutputStream",
                    "FileReader",
                    "FileWriter",
                    "BufferedReader",
                    "BufferedWriter",
                    "InputStreamReader",
                    "OutputStreamWriter",
                    "PrintWriter",
                    "RandomAccessFile",
                    "Scanner",
                    "Socket",
                    "ServerSocket",
                    "ZipFile",
                    "JarFile",
                    "ObjectInputStream",
                    "ObjectOutputStream",
                    "Files.newBufferedReader",
                    "Files.newBufferedWriter",
                    "Files.newInputStream",
                    "Files.newOutputStream",
                    "Files.lines",
                    "Files.list",
                    "Files.walk",
                    "DriverManager.getConnection",
                }
            ),
            test_markers=frozenset({"Test", "ParameterizedTest", "RepeatedTest", "TestFactory"}),
        )

    @classmethod
    def python(cls) -> Taxonomy:
        """Taxonomy for Python sources."""
        return cls(
            language="python",
            broad_exceptions=frozenset({"BaseException", "Exception"}),
            resource_types=frozenset(
                {
                    "open",
                    "io.open",
                    "socket.socket",
                    "socket.create_connection",
                    "sqlite3.connect",
                    "tempfile.TemporaryFile",
                    "tempfile.NamedTemporaryFile",
                    "urllib.request.urlopen",
                    "urlopen",
                    "zipfile.ZipFile",
                    "tarfile.open",
                }
            ),
            test_markers=frozenset({"test"}),
        )


def simple_name(type_name: str) -> str:
    """Last dotted component: "java.lang.Exception" -> "Exception"."""
    return type_name.rsplit(".", 1)[-1]
