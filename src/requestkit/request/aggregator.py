"""Merging of explicit parameters with parameters derived from a model."""

from collections.abc import Mapping
from typing import Any, Optional

from ..errors import ParameterTranslationError, RequestKitError
from ..query.protocols import QueryBuilder


def aggregate_params(
    param_map: Optional[Mapping[str, str]],
    param_model: Any,
    query_builder: QueryBuilder,
    charset: str,
) -> dict[str, str]:
    """
    Merge explicit parameters with the map built from a parameter model.

    The explicit map is copied first, in its insertion order. The model map
    is then merged on top, so on a shared key the model value wins while
    the key keeps the position the explicit map gave it. Keys only one
    source has are all kept; model-only keys follow the explicit ones.

    Args:
        param_map: Parameters added one by one with add_param()
        param_model: Typed parameter object, may be None
        query_builder: Translates param_model into a map
        charset: Request charset handed to the builder

    Returns:
        A new ordered map, safe for the caller to mutate

    Raises:
        ParameterTranslationError: If the builder fails on param_model
    """
    merged: dict[str, str] = dict(param_map) if param_map else {}

    try:
        model_map = query_builder.build_primary_map(param_model, charset=charset)
    except RequestKitError:
        raise
    except Exception as e:
        raise ParameterTranslationError.for_model(param_model, f"{type(e).__name__}: {e}") from e

    if model_map:
        merged.update(model_map)
    return merged
