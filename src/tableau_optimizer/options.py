from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from .schemas import SolveOptions

OptionsLike = Union[SolveOptions, Mapping[str, Any], None]

BACKUP_DEFAULT_OPTIONS = SolveOptions()

_default_options: SolveOptions = BACKUP_DEFAULT_OPTIONS


def get_default_options() -> SolveOptions:
    return _default_options


def set_default_options(options: OptionsLike = None, **overrides: Any) -> SolveOptions:
    """
    Replace the process-wide defaults used by ``solve``.

    Only explicitly supplied fields change; everything else keeps its built-in
    value. Returns the new defaults.
    """
    global _default_options
    _default_options = _merge(BACKUP_DEFAULT_OPTIONS, options, overrides)
    return _default_options


def reset_default_options() -> SolveOptions:
    global _default_options
    _default_options = BACKUP_DEFAULT_OPTIONS
    return _default_options


def resolve_options(options: OptionsLike = None) -> SolveOptions:
    """Built-in defaults < process defaults < per-call options."""
    return _merge(_default_options, options, {})


def _merge(base: SolveOptions, options: OptionsLike, overrides: Mapping[str, Any]) -> SolveOptions:
    update = dict(_explicit_fields(options))
    update.update(_explicit_fields(overrides))
    if not update:
        return base
    # Revalidate so aliases and constraints apply to the merged value.
    merged = base.model_dump()
    merged.update(update)
    return SolveOptions.model_validate(merged)


def _explicit_fields(options: OptionsLike) -> Mapping[str, Any]:
    if options is None:
        return {}
    if isinstance(options, SolveOptions):
        return options.model_dump(include=options.model_fields_set)
    # Validate alone first to normalise camelCase keys to field names.
    parsed = SolveOptions.model_validate(dict(options))
    return parsed.model_dump(include=parsed.model_fields_set)
