"""Path Parameters — blank-tolerant segment convertor and required-param check.

Invariants:
    - "{name:segment}" matches any single path segment, including the empty one
    - require_path_param raises MissingParameterError (400) for empty/blank values

Design Decisions:
    - Starlette's default str convertor rejects "" and the route would 404;
      accepting it lets handlers answer 400 "<name> is required." instead
"""

from starlette.convertors import Convertor, register_url_convertor

from relay.core.errors import MissingParameterError


class SegmentConvertor(Convertor):
    regex = "[^/]*"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


register_url_convertor("segment", SegmentConvertor())


def require_path_param(value: str | None, name: str) -> str:
    """Return the stripped value or raise when it is absent."""
    if value is None or not value.strip():
        raise MissingParameterError(name)
    return value.strip()
