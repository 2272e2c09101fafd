"""Base query builder walking the fields of a parameter model."""

import dataclasses
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

from ..errors import ParameterTranslationError
from ..models.config import DEFAULT_CHARSET

logger = logging.getLogger(__name__)


def has_fields(value: Any) -> bool:
    """Check whether a value can be walked field by field."""
    if callable(getattr(value, "query_fields", None)):
        return True
    if isinstance(value, (Mapping, BaseModel)):
        return True
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return hasattr(value, "__dict__") and not isinstance(value, type)


class AbstractQueryBuilder(ABC):
    """Base class for query builders.

    Walks the eligible fields of a parameter model in declaration order.
    ``None`` values are dropped, primitives are rendered directly and
    anything else is handed to ``build_secondary_value()``, which is what
    subclasses decide.

    Field discovery, first match wins:
        1. ``query_fields()`` method on the model (mapping or pairs)
        2. Mapping
        3. pydantic model (field alias preferred over field name)
        4. dataclass
        5. public, non-callable instance attributes
    """

    def build_primary_map(
        self,
        param_model: Any,
        *,
        charset: str = DEFAULT_CHARSET,
    ) -> Optional[dict[str, str]]:
        """
        Translate a parameter model into an ordered parameter map.

        Args:
            param_model: The typed parameter object, may be None
            charset: Charset used to decode bytes values

        Returns:
            Ordered parameter map, or None if param_model is None

        Raises:
            ParameterTranslationError: If the model cannot be translated
        """
        if param_model is None:
            return None

        result: dict[str, str] = {}
        try:
            for name, value in self.iter_fields(param_model):
                if value is None:
                    continue
                self.put_value(result, name, value, charset)
        except ParameterTranslationError:
            raise
        except Exception as e:
            raise ParameterTranslationError.for_model(param_model, f"{type(e).__name__}: {e}") from e

        logger.debug(f"{type(self).__name__} translated {type(param_model).__name__} into {len(result)} parameters")
        return result

    def iter_fields(self, model: Any) -> Iterator[tuple[str, Any]]:
        """
        Yield (name, value) pairs for the eligible fields of a model.

        Args:
            model: Object to introspect

        Yields:
            Field name and value, in declaration order

        Raises:
            ParameterTranslationError: If the object exposes no fields
        """
        query_fields = getattr(model, "query_fields", None)
        if callable(query_fields):
            fields = query_fields()
            pairs = fields.items() if isinstance(fields, Mapping) else fields
            for name, value in pairs:
                yield str(name), value
        elif isinstance(model, Mapping):
            for name, value in model.items():
                yield str(name), value
        elif isinstance(model, BaseModel):
            for name, field_info in type(model).model_fields.items():
                yield field_info.alias or name, getattr(model, name)
        elif dataclasses.is_dataclass(model) and not isinstance(model, type):
            for f in dataclasses.fields(model):
                yield f.name, getattr(model, f.name)
        elif has_fields(model):
            for name, value in vars(model).items():
                if name.startswith("_") or callable(value):
                    continue
                yield name, value
        else:
            raise ParameterTranslationError.for_model(model, "object exposes no fields")

    def render_primitive(self, value: Any, charset: str) -> Optional[str]:
        """
        Render a primitive value as a string.

        Returns:
            The rendered string, or None if the value is not primitive
        """
        if isinstance(value, Enum):
            value = value.value
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode(charset)
        return None

    def put_value(self, result: dict[str, str], key: str, value: Any, charset: str) -> None:
        text = self.render_primitive(value, charset)
        if text is not None:
            result[key] = text
        else:
            self.put_complex(result, key, value, charset)

    def put_complex(self, result: dict[str, str], key: str, value: Any, charset: str) -> None:
        """Store a non-primitive value. Subclasses may expand it into several keys."""
        result[key] = self.build_secondary_value(value, charset)

    @abstractmethod
    def build_secondary_value(self, value: Any, charset: str) -> str:
        """Render a nested or collection value as a single string.

        Args:
            value: Non-primitive field value
            charset: Request charset

        Returns:
            String form of the value
        """
        pass
