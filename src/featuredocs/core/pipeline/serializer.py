from __future__ import annotations

"""
Documentation Tree Serializer.

Converts domain objects into JSON-compatible structures for the rendering
layer. Scenarios additionally expose their effective (inherited) tags.
"""

import dataclasses
from typing import Any

from featuredocs.domain.document_models import ScenarioLike

_JSON_SCALARS = (str, int, float, bool)


def to_jsonable(obj: Any) -> Any:
    """
    Recursively convert dataclasses, lists and dicts into plain data.

    Values that JSON cannot represent, such as the datetimes captured by
    typed step patterns, are converted with str().

    Args:
        obj: Domain object or plain value.

    Returns:
        Any: Structure made of dicts, lists and scalars.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        out = {f.name: to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
        if isinstance(obj, ScenarioLike):
            out["effective_tags"] = to_jsonable(obj.effective_tags)
        return out
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): to_jsonable(value) for key, value in obj.items()}
    if obj is None or isinstance(obj, _JSON_SCALARS):
        return obj
    # Typed step arguments (dates, decimals, ...) are kept as text
    return str(obj)
