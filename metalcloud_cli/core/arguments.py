"""
Arguments — Typed optional values and the accessors commands use

A command's arguments are a dict of internal key -> ArgValue. An ArgValue is
one of ABSENT, INT, STR or BOOL. ABSENT means the flag was declared but not
given on the command line; a key missing from the dict means the command
never declared it.

Accessors mirror each other:
    get_int_param(v)        -> int (0 when absent)
    get_int_param_ok(v)     -> (int, present)
    get_param(cmd, key, fl) -> raw value, or ArgumentError if missing/invalid

Booleans are always present once declared: absence and False are the same.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple, Union

from ..errors import ArgumentError

if TYPE_CHECKING:
    from ..commands.base import Command


class ArgKind(Enum):
    """Tag of an argument value."""
    ABSENT = "absent"
    INT = "int"
    STR = "str"
    BOOL = "bool"


@dataclass(frozen=True)
class ArgValue:
    """A tagged, optionally present argument value."""
    kind: ArgKind
    value: Any = None

    @classmethod
    def absent(cls) -> "ArgValue":
        return cls(ArgKind.ABSENT)

    @classmethod
    def of_int(cls, value: int) -> "ArgValue":
        return cls(ArgKind.INT, int(value))

    @classmethod
    def of_str(cls, value: str) -> "ArgValue":
        return cls(ArgKind.STR, str(value))

    @classmethod
    def of_bool(cls, value: bool) -> "ArgValue":
        return cls(ArgKind.BOOL, bool(value))

    @classmethod
    def wrap(cls, value: Any) -> "ArgValue":
        """Wrap a plain Python value (None means absent)."""
        if value is None:
            return cls.absent()
        if isinstance(value, ArgValue):
            return value
        if isinstance(value, bool):
            return cls.of_bool(value)
        if isinstance(value, int):
            return cls.of_int(value)
        if isinstance(value, str):
            return cls.of_str(value)
        raise TypeError(f"unsupported argument value {value!r}")

    @property
    def present(self) -> bool:
        return self.kind is not ArgKind.ABSENT


MaybeArg = Optional[ArgValue]

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


# =============================================================================
# Typed getters
# =============================================================================

def _unwrap(v: MaybeArg, kind: ArgKind) -> Tuple[Any, bool]:
    if v is None or not v.present:
        return None, False
    if v.kind is not kind:
        raise ArgumentError(f"expected a {kind.value} argument, got {v.kind.value} ({v.value!r})")
    return v.value, True


def get_int_param_ok(v: MaybeArg) -> Tuple[int, bool]:
    value, ok = _unwrap(v, ArgKind.INT)
    return (value, True) if ok else (0, False)


def get_string_param_ok(v: MaybeArg) -> Tuple[str, bool]:
    value, ok = _unwrap(v, ArgKind.STR)
    return (value, True) if ok else ("", False)


def get_bool_param_ok(v: MaybeArg) -> Tuple[bool, bool]:
    value, ok = _unwrap(v, ArgKind.BOOL)
    return (value, True) if ok else (False, False)


def get_int_param(v: MaybeArg) -> int:
    return get_int_param_ok(v)[0]


def get_string_param(v: MaybeArg) -> str:
    return get_string_param_ok(v)[0]


def get_bool_param(v: MaybeArg) -> bool:
    return get_bool_param_ok(v)[0]


def update_if_int_param_set(v: MaybeArg, obj: Any, attr: str) -> None:
    """Set obj.attr only when the argument is present."""
    value, ok = get_int_param_ok(v)
    if ok:
        setattr(obj, attr, value)


def update_if_string_param_set(v: MaybeArg, obj: Any, attr: str) -> None:
    """Set obj.attr only when the argument is present."""
    value, ok = get_string_param_ok(v)
    if ok:
        setattr(obj, attr, value)


def update_if_bool_param_set(v: MaybeArg, obj: Any, attr: str) -> None:
    """Set obj.attr only when the argument is present."""
    value, ok = get_bool_param_ok(v)
    if ok:
        setattr(obj, attr, value)


# =============================================================================
# Required parameters
# =============================================================================

def get_param(command: "Command", key: str, flag_name: str) -> Union[int, str, bool]:
    """
    Get a required argument.

    Args:
        command: Command holding the arguments
        key: Internal argument key (e.g. "variable_id_or_name")
        flag_name: User facing flag name used in error messages (e.g. "id")

    Returns:
        The raw int, str or bool value

    Raises:
        ArgumentError: If the key is missing, the flag was not given,
            an int is <= 0 or a string is empty
    """
    v = command.arguments.get(key)
    if v is None:
        raise ArgumentError(f"--{flag_name} cannot be nil")
    if not v.present:
        raise ArgumentError(f"--{flag_name} is required")
    if v.kind is ArgKind.INT and v.value <= 0:
        raise ArgumentError(f"--{flag_name} cannot be <=0")
    if v.kind is ArgKind.STR and v.value == "":
        raise ArgumentError(f"--{flag_name} cannot be empty")
    return v.value


def require_string_param(command: "Command", key: str, flag_name: str) -> str:
    """Get a string argument that must be present (may not be empty)."""
    value, ok = get_string_param_ok(command.arguments.get(key))
    if not ok:
        raise ArgumentError(f"--{flag_name} is required")
    if value == "":
        raise ArgumentError(f"--{flag_name} cannot be empty")
    return value


def require_int_param(command: "Command", key: str, flag_name: str) -> int:
    """Get an int argument that must be present."""
    value, ok = get_int_param_ok(command.arguments.get(key))
    if not ok:
        raise ArgumentError(f"--{flag_name} is required")
    return value


# =============================================================================
# id-or-label
# =============================================================================

def get_id_from_string_ok(s: str) -> Tuple[int, bool]:
    """Parse a decimal integer; (0, False) when s is not one."""
    if _INT_PATTERN.fullmatch(s):
        return int(s), True
    return 0, False


def id_or_label_string(s: str) -> Tuple[int, str, bool]:
    """Return (id, "", True) for a numeric string, else (0, s, False)."""
    i, ok = get_id_from_string_ok(s)
    if ok:
        return i, "", True
    return 0, s, False


def id_or_label(value: Union[int, str, ArgValue]) -> Tuple[int, str, bool]:
    """
    Interpret a value as either a numeric id or a label.

    Ints are always ids. Strings that parse as integers are ids; any other
    string is a label.

    Returns:
        (id, label, is_id)

    Raises:
        ArgumentError: If the value is neither an int nor a str
    """
    if isinstance(value, ArgValue):
        value = value.value

    if isinstance(value, bool):
        raise ArgumentError(f"cannot use {value!r} as an id or label")
    if isinstance(value, int):
        return value, "", True
    if isinstance(value, str):
        return id_or_label_string(value)

    raise ArgumentError(f"cannot use {value!r} as an id or label")


def get_id_or_do(token: str, fn: Callable[[str], int]) -> int:
    """Return the id in token, or fn(label) when token is a label."""
    i, label, is_id = id_or_label_string(token)
    if not is_id:
        return fn(label)
    return i
