"""JaCoCo XML report parser.

JaCoCo is the standard Java coverage tool, used via Maven and Gradle.

Structure:
<report name="...">
  <sessioninfo id="..." start="..." dump="..."/>
  <package name="com/example">
    <class name="com/example/Foo" sourcefilename="Foo.java">
      <method name="bar" desc="()V" line="10">
        <counter type="LINE" missed="5" covered="10"/>
      </method>
      <counter type="LINE" missed="10" covered="50"/>
    </class>
    <sourcefile name="Foo.java">
      <line nr="1" mi="0" ci="1" mb="0" cb="0"/>
      <counter type="LINE" missed="10" covered="50"/>
    </sourcefile>
    <counter type="LINE" missed="10" covered="50"/>
  </package>
  <counter type="LINE" missed="100" covered="400"/>
</report>

The whole tree is decoded as-is. Package, class and method counters are
JaCoCo's own pre-aggregated summaries; nothing here recomputes them from the
per-line data.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from defusedxml import DefusedXmlException, ElementTree

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element


class InvalidReportError(Exception):
    """The input is not a JaCoCo XML report.

    Deliberately carries no detail: malformed XML, an unexpected schema and
    an unknown counter type all look the same to the caller.
    """

    def __str__(self) -> str:
        return "invalid report"


class CounterType(Enum):
    INSTRUCTION = "INSTRUCTION"
    LINE = "LINE"
    COMPLEXITY = "COMPLEXITY"
    METHOD = "METHOD"
    CLASS = "CLASS"

    @classmethod
    def decode(cls, token: str) -> CounterType:
        """Decode a ``counter@type`` token; unknown tokens are rejected."""
        try:
            return cls(token)
        except ValueError:
            raise InvalidReportError from None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Counter:
    type: CounterType
    missed: int
    covered: int


@dataclass(frozen=True, slots=True)
class Method:
    name: str
    descriptor: str
    line: int
    counters: tuple[Counter, ...] = ()


@dataclass(frozen=True, slots=True)
class Class:
    name: str
    file_name: str
    methods: tuple[Method, ...] = ()
    counters: tuple[Counter, ...] = ()


@dataclass(frozen=True, slots=True)
class Line:
    """Per-line instruction and branch counts (``<line nr mi ci mb cb>``)."""

    number: int
    missed_instructions: int
    covered_instructions: int
    missed_branches: int
    covered_branches: int

    @property
    def hit_calls(self) -> int:
        return self.covered_instructions

    @property
    def missed_calls(self) -> int:
        return self.missed_instructions


@dataclass(frozen=True, slots=True)
class SourceFile:
    name: str
    lines: tuple[Line, ...] = ()
    counters: tuple[Counter, ...] = ()


@dataclass(frozen=True, slots=True)
class Package:
    name: str
    counters: tuple[Counter, ...] = ()
    classes: tuple[Class, ...] = ()
    source_files: tuple[SourceFile, ...] = ()


@dataclass(frozen=True, slots=True)
class Report:
    name: str
    counters: tuple[Counter, ...] = ()
    packages: tuple[Package, ...] = ()


# Everything parse_report can raise for bad input.
PARSE_ERRORS: tuple[type[Exception], ...] = (InvalidReportError,)


def parse_report(data: bytes) -> Report:
    """Decode a JaCoCo XML report.

    Raises:
        InvalidReportError: On any decode failure.
    """
    try:
        # Reports are often emitted with leading whitespace before the XML
        # declaration, which expat rejects.
        root = ElementTree.fromstring(bytes(data).lstrip())
    except (ElementTree.ParseError, DefusedXmlException, ValueError):
        raise InvalidReportError from None

    if root.tag != "report":
        raise InvalidReportError
    return _decode_report(root)


def _int_attr(elem: Element, key: str) -> int:
    raw = elem.get(key)
    if raw is None:
        return 0
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        raise InvalidReportError
    try:
        return int(raw)
    except ValueError:
        # Longer than the interpreter's int conversion limit.
        raise InvalidReportError from None


def _decode_counters(parent: Element) -> tuple[Counter, ...]:
    counters: list[Counter] = []
    for elem in parent.findall("counter"):
        token = elem.get("type")
        if token is None:
            raise InvalidReportError
        counters.append(
            Counter(
                type=CounterType.decode(token),
                missed=_int_attr(elem, "missed"),
                covered=_int_attr(elem, "covered"),
            )
        )
    return tuple(counters)


def _decode_method(elem: Element) -> Method:
    return Method(
        name=elem.get("name", ""),
        descriptor=elem.get("desc", ""),
        line=_int_attr(elem, "line"),
        counters=_decode_counters(elem),
    )


def _decode_class(elem: Element) -> Class:
    return Class(
        name=elem.get("name", ""),
        file_name=elem.get("sourcefilename", ""),
        methods=tuple(_decode_method(m) for m in elem.findall("method")),
        counters=_decode_counters(elem),
    )


def _decode_line(elem: Element) -> Line:
    # Line numbers are 1-based; a missing or zero nr cannot be placed.
    number = _int_attr(elem, "nr")
    if number < 1:
        raise InvalidReportError
    return Line(
        number=number,
        missed_instructions=_int_attr(elem, "mi"),
        covered_instructions=_int_attr(elem, "ci"),
        missed_branches=_int_attr(elem, "mb"),
        covered_branches=_int_attr(elem, "cb"),
    )


def _decode_source_file(elem: Element) -> SourceFile:
    return SourceFile(
        name=elem.get("name", ""),
        lines=tuple(_decode_line(ln) for ln in elem.findall("line")),
        counters=_decode_counters(elem),
    )


def _decode_package(elem: Element) -> Package:
    return Package(
        name=elem.get("name", ""),
        counters=_decode_counters(elem),
        classes=tuple(_decode_class(c) for c in elem.findall("class")),
        source_files=tuple(_decode_source_file(sf) for sf in elem.findall("sourcefile")),
    )


def _decode_report(root: Element) -> Report:
    return Report(
        name=root.get("name", ""),
        counters=_decode_counters(root),
        packages=tuple(_decode_package(p) for p in root.findall("package")),
    )
