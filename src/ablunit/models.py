from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based (line, column) position in a source file."""
    line: int
    column: int


@dataclass(frozen=True)
class Range:
    """A span between two positions on the same or different lines."""
    start: Position
    end: Position

    @classmethod
    def on_line(cls, line: int, start_column: int, end_column: int) -> "Range":
        return cls(Position(line, start_column), Position(line, end_column))


@dataclass
class LocatedEntity:
    """A discovered test construct (suite, class, method, procedure, ...)."""
    kind: str
    name: str
    range: Range
    parent: str = ""  # Owning class/program/method name, empty when not applicable
    path: str = ""


@dataclass
class SuiteMember:
    """A class or procedure named inside a @testsuite annotation."""
    kind: str  # "classes" or "procedures"
    name: str
    range: Range


@dataclass
class AssertCall:
    """An assertion call site, e.g. OpenEdge.Core.Assert:Equals(a, b)."""
    range: Range
    text: str


@dataclass(frozen=True)
class SourceText:
    """File content plus the relative path used for classification and labels."""
    text: str
    relative_path: str

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")
