"""
Split raw MegaCli responses into per-record text blocks.

MegaCli prints repeating records with no framing besides the first line of
each record. A record starts at a sentinel (e.g. "Enclosure Device ID:") and
runs until the next sentinel; the text before the first sentinel is preamble.
"""

from typing import List

from .errors import ExternalToolFailure, MalformedOutput
from .grammar import MEGACLI_GRAMMAR, Grammar


def split_blocks(text: str, sentinel: str, marker: str) -> List[str]:
    """
    Return one block per record, in source order.

    A fragment is a record only if it also contains marker; this drops the
    preamble and any stray use of the sentinel text. str.split consumes the
    sentinel, so it is put back in front of every accepted block.
    """
    blocks = []
    for fragment in text.split(sentinel):
        if marker in fragment:
            blocks.append(sentinel + fragment)
    return blocks


def split_exit_result(output: str, query: str, grammar: Grammar = MEGACLI_GRAMMAR) -> str:
    """
    Check the trailing "Exit Code: 0x.." of a response and return the body before it.

    Raises MalformedOutput when the token is missing and ExternalToolFailure when
    the code is anything but grammar.success_code.
    """
    parts = output.split(grammar.exit_token, 1)
    if len(parts) != 2:
        raise MalformedOutput(query, f"no {grammar.exit_token!r} trailer")
    code = parts[1].strip()
    if code != grammar.success_code:
        raise ExternalToolFailure(query, code)
    return parts[0]
