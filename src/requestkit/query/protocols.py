"""Protocol definitions for translating parameter models into query maps."""

from typing import Any, Optional, Protocol, runtime_checkable

from ..models.config import DEFAULT_CHARSET


@runtime_checkable
class QueryBuilder(Protocol):
    """
    Protocol for query builders.

    A query builder turns a typed parameter model (a dataclass, a pydantic
    model, a mapping, or any object exposing ``query_fields()``) into an
    ordered ``str -> str`` map. Request merges that map over its explicit
    parameters when building the URL.

    Implementations are swappable per Request, so this abstraction allows for:
    - Different renderings of nested values (JSON text, dotted keys, ...)
    - Mock implementations in tests
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
            charset: The Request charset, used for any byte-level decoding

        Returns:
            Ordered map of parameters, or None when there is nothing to add

        Raises:
            ParameterTranslationError: If the model cannot be introspected
                or one of its values cannot be rendered
        """
        ...
