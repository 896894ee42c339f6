"""Exceptions raised while querying MegaCli and parsing its output."""


class RaidstatError(Exception):
    """Base class for every collection failure."""


class MalformedOutput(RaidstatError):
    """The response carries no exit token at all."""

    def __init__(self, query: str, detail: str = ""):
        self.query = query
        message = f"MegaCli output illegal for {query}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ExternalToolFailure(RaidstatError):
    """The response ended with an exit code other than success."""

    def __init__(self, query: str, code: str):
        self.query = query
        self.code = code
        super().__init__(f"MegaCli returned error for {query}: {code}")


class FieldFormatError(RaidstatError):
    """A recognised line does not have the Key: Value shape."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"format illegal: {line!r}")


class FieldParseError(RaidstatError):
    """A field value cannot be coerced to its declared kind."""

    def __init__(self, key: str, value: str, expected: str):
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(f"cannot parse {key!r} value {value!r} as {expected}")


class MissingFieldError(FieldParseError):
    """A block lacks a line every record of its kind must carry."""

    def __init__(self, key: str, block_head: str):
        self.key = key
        self.value = ""
        self.expected = "a required field"
        self.block_head = block_head
        RaidstatError.__init__(self, f"{key!r} missing from block {block_head!r}")
