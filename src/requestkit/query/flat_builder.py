"""Query builder flattening nested values into dotted keys."""

from typing import Any

from pydantic_core import to_jsonable_python

from .base import has_fields
from .json_builder import JsonQueryBuilder, _public_attributes

SEQUENCE_TYPES = (list, tuple, set, frozenset)


class FlatQueryBuilder(JsonQueryBuilder):
    """
    Query builder for servers that expect flat form-style parameters.

    - Nested models, dataclasses and mappings expand into dotted keys
      (``address.city=Paris``)
    - Sequences are joined with ``separator`` (``tags=a,b``)
    - Anything else falls back to its JSON rendering, unquoted when it
      is a plain string (dates, UUIDs, paths)

    Example:
        builder = FlatQueryBuilder(separator="|")
        builder.build_primary_map({"user": {"name": "ann"}, "ids": [1, 2]})
        # {"user.name": "ann", "ids": "1|2"}
    """

    def __init__(self, separator: str = ",", key_separator: str = ".") -> None:
        """
        Initialize the builder.

        Args:
            separator: Joins the items of a sequence value
            key_separator: Joins parent and child field names
        """
        self.separator = separator
        self.key_separator = key_separator

    def put_complex(self, result: dict[str, str], key: str, value: Any, charset: str) -> None:
        if isinstance(value, SEQUENCE_TYPES) or not has_fields(value):
            result[key] = self.build_secondary_value(value, charset)
            return

        for name, sub_value in self.iter_fields(value):
            if sub_value is None:
                continue
            self.put_value(result, f"{key}{self.key_separator}{name}", sub_value, charset)

    def build_secondary_value(self, value: Any, charset: str) -> str:
        if isinstance(value, SEQUENCE_TYPES):
            return self.separator.join(self._render_item(item, charset) for item in value if item is not None)
        return self._render_item(value, charset)

    def _render_item(self, value: Any, charset: str) -> str:
        text = self.render_primitive(value, charset)
        if text is not None:
            return text
        jsonable = to_jsonable_python(value, fallback=_public_attributes)
        if isinstance(jsonable, str):
            return jsonable
        return super().build_secondary_value(value, charset)
