"""
Entity Resolver — id-or-label lookup shared by all commands

Enables users to reference entities by:
- Numeric id (fetched directly)
- Label (resolved by scanning the full listing)

A label shared by several entities is reported as ambiguous; the resolver
never picks one on the user's behalf.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Optional

import structlog

from ..errors import AmbiguousLabelError, EntityNotFoundError
from .arguments import get_param, id_or_label

if TYPE_CHECKING:
    from ..commands.base import Command

logger = structlog.get_logger()


class ResolveStatus(Enum):
    """Resolution outcome."""
    FOUND = "found"
    AMBIGUOUS = "ambiguous"
    NOT_FOUND = "not_found"


@dataclass
class ResolveResult:
    """Result of label resolution."""
    status: ResolveStatus
    entity: Any = None
    candidates: List[Any] = None
    query: str = ""

    def __post_init__(self):
        if self.candidates is None:
            self.candidates = []


def resolve_label(
    label: str,
    entities: Iterable[Any],
    label_of: Callable[[Any], str],
) -> ResolveResult:
    """
    Find the entity whose label equals the query exactly.

    Args:
        label: Label supplied by the user
        entities: Full listing to scan
        label_of: Extracts the label of one entity

    Returns:
        ResolveResult with FOUND (entity set), AMBIGUOUS (candidates set)
        or NOT_FOUND
    """
    matches = [e for e in entities if label_of(e) == label]

    if len(matches) == 1:
        return ResolveResult(status=ResolveStatus.FOUND, entity=matches[0], query=label)
    if len(matches) > 1:
        return ResolveResult(status=ResolveStatus.AMBIGUOUS, candidates=matches, query=label)
    return ResolveResult(status=ResolveStatus.NOT_FOUND, query=label)


def get_entity_from_command(
    command: "Command",
    key: str,
    flag_name: str,
    entity_name: str,
    get_by_id: Callable[[int], Any],
    list_all: Callable[[], Iterable[Any]],
    label_of: Callable[[Any], str],
    id_of: Optional[Callable[[Any], int]] = None,
) -> Any:
    """
    Resolve the id-or-label argument of a command to an entity.

    Args:
        command: Command holding the arguments
        key: Internal argument key (e.g. "template_id_or_name")
        flag_name: Flag shown in errors (e.g. "id")
        entity_name: Singular entity name shown in errors (e.g. "template")
        get_by_id: API call fetching one entity by id
        list_all: API call listing all entities (used for labels)
        label_of: Extracts an entity's label
        id_of: Extracts an entity's id (used in the ambiguity message)

    Returns:
        The entity record

    Raises:
        ArgumentError: If the argument is missing or invalid
        EntityNotFoundError: If no entity carries the label
        AmbiguousLabelError: If several entities carry the label
    """
    value = get_param(command, key, flag_name)
    entity_id, label, is_id = id_or_label(value)

    if is_id:
        return get_by_id(entity_id)

    result = resolve_label(label, list_all(), label_of)

    if result.status is ResolveStatus.FOUND:
        logger.debug("label_resolved", entity=entity_name, label=label)
        return result.entity

    if result.status is ResolveStatus.AMBIGUOUS:
        message = f"{entity_name} label '{label}' is ambiguous ({len(result.candidates)} matches)"
        if id_of is not None:
            ids = ", ".join(str(id_of(e)) for e in result.candidates)
            message += f": ids {ids}. Use the id instead"
        raise AmbiguousLabelError(message)

    raise EntityNotFoundError(f"Could not locate {entity_name} with id/label {label}")
