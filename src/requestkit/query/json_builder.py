"""Query builder rendering nested values as JSON text."""

import json
from typing import Any

from pydantic_core import to_jsonable_python

from .base import AbstractQueryBuilder


def _public_attributes(value: Any) -> dict[str, Any]:
    if not hasattr(value, "__dict__"):
        raise TypeError(f"{type(value).__name__} is not JSON serializable")
    return {k: v for k, v in vars(value).items() if not k.startswith("_") and not callable(v)}


class JsonQueryBuilder(AbstractQueryBuilder):
    """
    Default query builder.

    Top-level primitives become plain strings; lists, dicts, nested models
    and dataclasses become compact JSON (non-ASCII characters are kept
    as-is and percent-encoded later with the Request charset).

    Example:
        @dataclass
        class Search:
            q: str
            tags: list[str]

        JsonQueryBuilder().build_primary_map(Search("cats", ["a", "b"]))
        # {"q": "cats", "tags": '["a","b"]'}
    """

    def build_secondary_value(self, value: Any, charset: str) -> str:
        jsonable = to_jsonable_python(value, fallback=_public_attributes)
        return json.dumps(jsonable, ensure_ascii=False, separators=(",", ":"))
