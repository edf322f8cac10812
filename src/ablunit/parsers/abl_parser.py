"""Line-oriented discovery of ABLUnit tests in OpenEdge ABL sources.

Test constructs are recognised with regular expressions applied one line at a
time rather than by parsing the language:

- ``.cls`` files: the first ``class Name:`` header, then every
  ``method public void Name`` declared directly below a ``@Test.`` line.
- ``.p`` files: every ``procedure Name:`` declared directly below a
  ``@Test.`` line.
- ``@testsuite(classes="A,B")`` annotations in a ``.cls`` file: the suite is
  anchored at the class header that follows and its members are reported as
  test classes.

Scanning never raises on malformed input; lines that do not match simply
contribute nothing.
"""

import logging
import re

from ablunit.config import DiscoveryConfig
from ablunit.models import AssertCall, Range, SourceText, SuiteMember
from ablunit.parsers.base import BaseParser
from ablunit.sink import DiscoverySink

logger = logging.getLogger(__name__)

TEST_MARKER = "@test."
SUITE_MARKER = "@testsuite"
COMMENT_PREFIX = "//"

# No pattern has adjacent ambiguous quantifiers, so matching stays linear on long lines
CLASS_PATTERN = re.compile(r"^\s*class\s+(\S+)\s*:", re.IGNORECASE)
METHOD_PATTERN = re.compile(r"(?<!\s)\s+method\s+(public\s*)?void\s*(\S[^\s(]+)", re.IGNORECASE)
PROCEDURE_PATTERN = re.compile(r"(?:^|\s)procedure\s+(\S+)\s*:", re.IGNORECASE)
ASSERT_PATTERN = re.compile(r"OpenEdge\.Core\.Assert:[^\s(]+\s*\(.*\)", re.IGNORECASE)

SUITE_PATTERN = re.compile(r"@testsuite\((.*)\)")
SUITE_PATTERN_ANY_CASE = re.compile(SUITE_PATTERN.pattern, re.IGNORECASE)
SUITE_ITEM_PATTERN = re.compile(r'(classes|procedures)="([^"]*)"', re.IGNORECASE)
SUITE_EXTRA_ITEM_PATTERN = re.compile(r',(classes|procedures)="([^"]*)"', re.IGNORECASE)


def _has_marker(text: str, marker: str) -> bool:
    return marker in text.lower()


def find_asserts(source_code: str) -> list[AssertCall]:
    """Find assertion call sites such as ``OpenEdge.Core.Assert:Equals(a, b)``.

    Only the first assertion on each line is reported.

    Args:
        source_code: ABL source text

    Returns:
        AssertCall per matching line, in line order
    """
    calls = []
    for line_no, line in enumerate(source_code.split("\n")):
        match = ASSERT_PATTERN.search(line)
        if match:
            calls.append(AssertCall(
                range=Range.on_line(line_no, match.start(), match.end()),
                text=match.group(0)
            ))
    return calls


class AblParser(BaseParser):
    """Scanner for ABLUnit test classes, methods, procedures and suites."""

    def __init__(self, config: DiscoveryConfig | None = None):
        self.config = config or DiscoveryConfig()

    def scan(self, source_code: str, file_path: str, sink: DiscoverySink) -> None:
        """Classify a file and report its test entities to ``sink``.

        Args:
            source_code: Full file content
            file_path: Relative path, used for suffix matching and suite labels
            sink: Receives the discovered entities in line order
        """
        source = SourceText(source_code, file_path)
        is_suite = _has_marker(source_code, SUITE_MARKER)

        if file_path.endswith(self.config.class_extension):
            if is_suite:
                self._scan_suite_class(source, sink)
            else:
                self._scan_class(source, sink)
        elif file_path.endswith(self.config.program_extension):
            if is_suite:
                self._scan_suite_program(source, sink)
            else:
                self._scan_program(source, sink)
        else:
            logger.debug(f"Skipping {file_path}: not an ABL class or program file")

    def extract_asserts(self, source_code: str) -> list[AssertCall]:
        """Find assertion call sites in source code."""
        return find_asserts(source_code)

    def _name_range(self, line_no: int, line: str, name: str) -> Range:
        """Range of the first occurrence of ``name`` on a header line."""
        start = line.find(name)
        if self.config.legacy_ranges:
            return Range.on_line(line_no, start, len(name))
        return Range.on_line(line_no, start, start + len(name))

    def _scan_class(self, source: SourceText, sink: DiscoverySink) -> None:
        if not _has_marker(source.text, TEST_MARKER):
            return

        lines = source.lines
        class_name = None

        for line_no, line in enumerate(lines):
            # First find the class statement
            if class_name is None:
                match = CLASS_PATTERN.match(line)
                if match:
                    class_name = match.group(1)
                    sink.on_test_class(self._name_range(line_no, line, class_name), class_name)
                continue

            # Then every method annotated with @Test. on the line above
            if not _has_marker(lines[line_no - 1], TEST_MARKER):
                continue
            match = METHOD_PATTERN.search(line)
            if match:
                method_name = match.group(2)
                sink.on_test_method(
                    Range.on_line(line_no, 0, len(match.group(0))),
                    class_name,
                    method_name
                )

    def _scan_program(self, source: SourceText, sink: DiscoverySink) -> None:
        if not _has_marker(source.text, TEST_MARKER):
            return

        lines = source.lines
        for line_no in range(1, len(lines)):
            if not _has_marker(lines[line_no - 1], TEST_MARKER):
                continue
            match = PROCEDURE_PATTERN.search(lines[line_no])
            if match:
                procedure_name = match.group(1)
                sink.on_test_procedure(
                    self._name_range(line_no, lines[line_no], procedure_name),
                    "",
                    procedure_name
                )

    def _scan_suite_class(self, source: SourceText, sink: DiscoverySink) -> None:
        sink.on_test_suite(Range.on_line(0, 0, 0), f"[suite] {source.relative_path}")

        lines = source.lines
        members: list[SuiteMember] = []
        suite_pattern = SUITE_PATTERN if self.config.suite_case_sensitive else SUITE_PATTERN_ANY_CASE

        for line_no in range(1, len(lines)):
            line = lines[line_no]
            if line.strip().startswith(COMMENT_PREFIX):
                continue

            if _has_marker(line, SUITE_MARKER):
                members.extend(_suite_members(line_no, line, suite_pattern))
                continue

            match = CLASS_PATTERN.match(line)
            if match:
                class_name = match.group(1)
                sink.on_test_suite(self._name_range(line_no, line, class_name), class_name)
                for member in members:
                    sink.on_test_class(member.range, member.name)
                return

        if members:
            logger.debug(
                f"{source.relative_path}: @TestSuite without a class header, "
                f"{len(members)} member(s) not reported"
            )

    def _scan_suite_program(self, source: SourceText, sink: DiscoverySink) -> None:
        # TODO: report suite programs once the procedure-suite parameter syntax is settled
        logger.debug(f"{source.relative_path}: test suite programs are not supported yet")


def _suite_members(line_no: int, line: str, suite_pattern: re.Pattern) -> list[SuiteMember]:
    """Extract the classes/procedures named in a @testsuite(...) line.

    Only the first attribute and one further comma-prefixed attribute are read.
    """
    suite = suite_pattern.search(line)
    if not suite:
        return []

    params = suite.group(1)
    members = []
    for pattern in (SUITE_ITEM_PATTERN, SUITE_EXTRA_ITEM_PATTERN):
        match = pattern.search(params)
        if not match:
            continue
        kind, names = match.group(1), match.group(2)
        for name in names.split(","):
            start = line.find(name)
            members.append(SuiteMember(
                kind=kind,
                name=name,
                range=Range.on_line(line_no, start, start + len(name))
            ))
    return members


def scan(
    text: str,
    relative_path: str,
    sink: DiscoverySink,
    config: DiscoveryConfig | None = None
) -> None:
    """Scan one file's text and report its test entities to ``sink``."""
    AblParser(config).scan(text, relative_path, sink)
