"""
Table <-> dataclass mapping shared by the manifest models.

Each model field declares its TOML key and a parser through
``toml_field``. ``parse_table`` fills a model from a plain dict and keeps
unrecognised keys in the model's ``extra`` dict. ``dump_table`` writes a
model back out, extras last.
"""

from dataclasses import MISSING, field, fields
from typing import Any, Callable, Dict, List

from cargokit.core.exceptions import ManifestFormatError


def toml_field(
    parse: Callable[[Any, str], Any],
    key: str = None,
    dump: Callable[[Any], Any] = None,
    required: bool = False,
    **kwargs,
):
    """dataclasses.field() carrying TOML mapping metadata."""
    metadata = {"parse": parse, "key": key, "dump": dump, "required": required}
    return field(metadata=metadata, **kwargs)


def _toml_key(f) -> str:
    return f.metadata.get("key") or f.name.replace("_", "-")


def _default_of(f):
    if f.default is not MISSING:
        return f.default
    if f.default_factory is not MISSING:
        return f.default_factory()
    return MISSING


def _invalid(context: str, expected: str, value: Any) -> ManifestFormatError:
    return ManifestFormatError(
        f"invalid type for `{context or 'manifest'}`: expected {expected}, "
        f"found {type(value).__name__}"
    )


# ============================================================================
# Value parsers
# ============================================================================


def as_str(value: Any, context: str) -> str:
    if not isinstance(value, str):
        raise _invalid(context, "a string", value)
    return value


def as_bool(value: Any, context: str) -> bool:
    if not isinstance(value, bool):
        raise _invalid(context, "a boolean", value)
    return value


def as_str_list(value: Any, context: str) -> List[str]:
    if not isinstance(value, list):
        raise _invalid(context, "an array of strings", value)
    return [as_str(item, f"{context}[{i}]") for i, item in enumerate(value)]


def as_table(value: Any, context: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise _invalid(context, "a table", value)
    return dict(value)


def as_any(value: Any, context: str) -> Any:
    return value


def as_model(model) -> Callable[[Any, str], Any]:
    def parse(value: Any, context: str):
        return parse_table(model, value, context)

    return parse


def as_model_list(model) -> Callable[[Any, str], list]:
    def parse(value: Any, context: str):
        if not isinstance(value, list):
            raise _invalid(context, "an array of tables", value)
        return [parse_table(model, item, f"{context}[{i}]") for i, item in enumerate(value)]

    return parse


# ============================================================================
# Model mapping
# ============================================================================


def parse_table(model, data: Any, context: str):
    """
    Build ``model`` from a TOML table.

    Raises:
        ManifestFormatError: If a field has the wrong type or a required
            field is missing
    """
    if not isinstance(data, dict):
        raise _invalid(context, "a table", data)

    remaining = dict(data)
    kwargs = {}
    for f in fields(model):
        if f.name == "extra":
            continue
        key = _toml_key(f)
        if key not in remaining:
            if f.metadata.get("required"):
                raise ManifestFormatError(f"missing field `{key}` in `{context}`")
            continue
        subcontext = f"{context}.{key}" if context else key
        kwargs[f.name] = f.metadata["parse"](remaining.pop(key), subcontext)

    return model(extra=remaining, **kwargs)


def dump_table(obj) -> Dict[str, Any]:
    """Inverse of parse_table; fields left at their default are omitted."""
    out: Dict[str, Any] = {}
    for f in fields(obj):
        if f.name == "extra":
            continue
        value = getattr(obj, f.name)
        if value is None or value == _default_of(f):
            continue
        dump = f.metadata.get("dump")
        out[_toml_key(f)] = dump(value) if dump else value
    out.update(obj.extra)
    return out
