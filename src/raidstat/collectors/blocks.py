"""Line dispatch shared by the record builders."""

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..errors import MissingFieldError
from ..fields import parse_field
from ..grammar import FieldKey, Grammar

# handler(values, line, field, grammar) stores parsed attributes into values
Handler = Callable[[dict, str, FieldKey, Grammar], None]


def string_setter(attr: str) -> Handler:
    def handler(values: dict, line: str, field: FieldKey, grammar: Grammar) -> None:
        values[attr] = parse_field(line, field.kind, field.key, grammar).as_str()
    return handler


def int_setter(attr: str) -> Handler:
    def handler(values: dict, line: str, field: FieldKey, grammar: Grammar) -> None:
        values[attr] = parse_field(line, field.kind, field.key, grammar).as_int()
    return handler


def dispatch_table(
    fields: Dict[str, FieldKey],
    handlers: Dict[str, Handler],
) -> List[Tuple[FieldKey, Handler]]:
    """Pair each vocabulary entry of the grammar with the builder's handler for it."""
    return [(field, handlers[name]) for name, field in fields.items() if name in handlers]


def parse_block(
    block: str,
    table: List[Tuple[FieldKey, Handler]],
    grammar: Grammar,
    required: Iterable[str] = (),
    fields: Optional[Dict[str, FieldKey]] = None,
) -> dict:
    """
    Run every line of block through the first matching handler.

    Lines no vocabulary entry matches are ignored. Parse errors propagate so
    that a malformed block never yields a half-filled record, and so does a
    block that leaves any name in required unset.
    """
    values: dict = {}
    for line in block.splitlines():
        line = line.strip()
        if not line:
            continue
        for field, handler in table:
            if field.matches(line):
                handler(values, line, field, grammar)
                break

    for name in required:
        if name not in values:
            key = fields[name].key if fields and name in fields else name
            head = block.strip().splitlines()[0] if block.strip() else ""
            raise MissingFieldError(key, head)
    return values
