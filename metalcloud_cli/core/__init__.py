"""
Core — Argument extraction, entity resolution and confirmation
"""

from .arguments import (
    ArgKind,
    ArgValue,
    get_bool_param,
    get_bool_param_ok,
    get_id_from_string_ok,
    get_id_or_do,
    get_int_param,
    get_int_param_ok,
    get_param,
    get_string_param,
    get_string_param_ok,
    id_or_label,
    id_or_label_string,
    require_int_param,
    require_string_param,
    update_if_bool_param_set,
    update_if_int_param_set,
    update_if_string_param_set,
)
from .confirm import confirm_command, require_confirmation
from .resolver import ResolveResult, ResolveStatus, get_entity_from_command, resolve_label

__all__ = [
    "ArgKind", "ArgValue",
    "get_param", "get_int_param", "get_int_param_ok", "get_string_param", "get_string_param_ok",
    "get_bool_param", "get_bool_param_ok", "require_int_param", "require_string_param",
    "update_if_int_param_set", "update_if_string_param_set", "update_if_bool_param_set",
    "get_id_from_string_ok", "id_or_label", "id_or_label_string", "get_id_or_do",
    "confirm_command", "require_confirmation",
    "ResolveStatus", "ResolveResult", "resolve_label", "get_entity_from_command",
]
