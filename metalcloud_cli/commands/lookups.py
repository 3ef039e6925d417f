"""
Lookups — Resolve a command's id-or-label flag to an entity record

One helper per entity. Each reads an internal argument key, fetches by id
when the value is numeric and otherwise scans the full listing for the
label. Ambiguous labels are errors.
"""

from ..api.client import MetalCloudClient
from ..api.models import Infrastructure, OSAsset, OSTemplate, Variable
from ..core.arguments import get_param, id_or_label
from ..core.resolver import get_entity_from_command
from .base import Command


def get_variable_from_command(
    c: Command,
    client: MetalCloudClient,
    flag_name: str = "id",
    key: str = "variable_id_or_name",
) -> Variable:
    return get_entity_from_command(
        c, key, flag_name, "variable",
        get_by_id=client.variable_get,
        list_all=lambda: client.variables(""),
        label_of=lambda v: v.name,
        id_of=lambda v: v.variable_id,
    )


def get_os_asset_from_command(
    c: Command,
    client: MetalCloudClient,
    flag_name: str = "id",
    key: str = "asset_id_or_name",
) -> OSAsset:
    """Assets are labelled by their file name."""
    return get_entity_from_command(
        c, key, flag_name, "asset",
        get_by_id=client.os_asset_get,
        list_all=client.os_assets,
        label_of=lambda a: a.file_name,
        id_of=lambda a: a.os_asset_id,
    )


def get_os_template_from_command(
    c: Command,
    client: MetalCloudClient,
    flag_name: str = "id",
    decrypt_passwd: bool = False,
    key: str = "template_id_or_name",
) -> OSTemplate:
    """
    The listing never carries decrypted credentials, so a template found by
    label is fetched again by id when decrypt_passwd is set.
    """
    template = get_entity_from_command(
        c, key, flag_name, "template",
        get_by_id=lambda template_id: client.os_template_get(template_id, decrypt_passwd),
        list_all=client.os_templates,
        label_of=lambda t: t.label,
        id_of=lambda t: t.volume_template_id,
    )

    _, _, is_id = id_or_label(get_param(c, key, flag_name))
    if decrypt_passwd and not is_id:
        template = client.os_template_get(template.volume_template_id, True)

    return template


def get_infrastructure_from_command(
    c: Command,
    client: MetalCloudClient,
    flag_name: str = "id",
    key: str = "infrastructure_id_or_label",
) -> Infrastructure:
    return get_entity_from_command(
        c, key, flag_name, "infrastructure",
        get_by_id=client.infrastructure_get,
        list_all=client.infrastructures,
        label_of=lambda i: i.label,
        id_of=lambda i: i.infrastructure_id,
    )
