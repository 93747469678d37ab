"""
Parsing and serialization of index key definitions.

A definition is written as a document literal, e.g.

    { chapter: 1, "variables.symbol": -1 }

and parses into an ordered list of (field, direction) pairs. Order matters:
{ a: 1, b: 1 } and { b: 1, a: 1 } are different indexes.
"""

import json
import re

from index_errors import InvalidDefinition


WHITESPACE = re.compile(r'\s*')
BARE_FIELD = re.compile(r'[A-Za-z_$][\w$.]*', re.ASCII)
QUOTED_FIELD = re.compile(r'"(?:[^"\\]|\\.)*"')
NUMBER = re.compile(r'[+-]?\d+(\.\d+)?([eE][+-]?\d+)?')


class _Scanner:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def skip_whitespace(self):
        self.pos = WHITESPACE.match(self.text, self.pos).end()

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos:self.pos + 1]

    def expect(self, char: str):
        self.skip_whitespace()
        if self.peek() != char:
            found = repr(self.peek()) if self.peek() else "end of input"
            raise self.error(f"expected '{char}' but found {found}")
        self.pos += 1

    def match(self, pattern):
        self.skip_whitespace()
        found = pattern.match(self.text, self.pos)
        if found:
            self.pos = found.end()
        return found

    def error(self, reason: str) -> InvalidDefinition:
        return InvalidDefinition(f"Invalid index definition {self.text!r}: {reason} at position {self.pos}")


def _parse_field(scanner: _Scanner) -> str:
    found = scanner.match(QUOTED_FIELD)
    if found:
        try:
            field = json.loads(found.group(0))
        except json.JSONDecodeError:
            raise scanner.error(f"bad escape in field name {found.group(0)}")
    else:
        found = scanner.match(BARE_FIELD)
        if not found:
            raise scanner.error("expected a field name")
        field = found.group(0)

    if not field:
        raise scanner.error("field name must not be empty")
    return field


def _parse_direction(scanner: _Scanner, field: str) -> int:
    found = scanner.match(NUMBER)
    if not found:
        raise scanner.error(f"expected an integer direction for field '{field}'")

    literal = found.group(0)
    if found.group(1) is None and found.group(2) is None:
        return int(literal)

    # 1.0 and 1e0 are the same direction as 1
    value = float(literal)
    if not value.is_integer():
        raise scanner.error(f"direction {literal} for field '{field}' is not an integer")
    return int(value)


def parse_definition(text: str) -> list[tuple[str, int]]:
    """
    Parse a definition string into an ordered list of (field, direction).

    Raises InvalidDefinition on malformed input. An empty mapping "{}" is
    valid and yields an empty list.
    """
    if not isinstance(text, str):
        raise InvalidDefinition(f"Index definition must be a string, got {type(text).__name__}")

    scanner = _Scanner(text)
    scanner.expect('{')

    keys = []
    seen = set()
    scanner.skip_whitespace()
    if scanner.peek() == '}':
        scanner.pos += 1
    else:
        while True:
            field = _parse_field(scanner)
            if field in seen:
                raise scanner.error(f"duplicate field '{field}'")
            seen.add(field)

            scanner.expect(':')
            keys.append((field, _parse_direction(scanner, field)))

            scanner.skip_whitespace()
            if scanner.peek() == ',':
                scanner.pos += 1
                continue
            scanner.expect('}')
            break

    scanner.skip_whitespace()
    if not scanner.at_end():
        raise scanner.error("unexpected trailing characters")

    return keys


def _format_direction(direction) -> str:
    # Server-reported 1.0 is written as 1; index types like "text" stay strings
    if isinstance(direction, bool):
        return json.dumps(direction)
    if isinstance(direction, float) and direction.is_integer():
        return str(int(direction))
    if isinstance(direction, (int, float)):
        return str(direction)
    return json.dumps(str(direction))


def serialize_definition(keys) -> str:
    """
    Canonical string form of a key sequence: {"field1": 1, "field2": -1}

    Accepts a list of (field, direction) pairs or an ordered mapping.
    """
    if hasattr(keys, "items"):
        keys = keys.items()
    parts = [f"{json.dumps(field)}: {_format_direction(direction)}" for field, direction in keys]
    return "{" + ", ".join(parts) + "}"


def canonicalize_definition(text: str) -> str:
    """Parse a definition and return its canonical form."""
    return serialize_definition(parse_definition(text))
