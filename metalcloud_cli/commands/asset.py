"""
Asset commands — boot assets (bootloaders, iPXE configs, installers)

Assets are either uploaded (content from the terminal or a pipe, sent as
base64) or referenced by a source URL. They become part of a template's
boot process once associated with it at a path.
"""

import base64
from typing import Optional

from ..api.client import MetalCloudClient
from ..api.models import OSAsset
from ..console import Console, get_console
from ..core.arguments import (
    ArgKind,
    get_bool_param,
    get_string_param,
    get_string_param_ok,
    require_string_param,
)
from ..core.confirm import require_confirmation
from ..output import FieldType, SchemaField, TableSorter, render_table
from .base import Command, Flag, autoconfirm_flag, format_flag, return_id_flag
from .lookups import get_os_asset_from_command, get_os_template_from_command

ASSET_USAGES = ("bootloader", "ipxe_config_local_install", "ipxe_config_os_boot", "onie_installer")


def assets_list_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    usage = get_string_param(c.arguments.get("usage"))

    assets = client.os_assets()

    schema = [
        SchemaField("ID", FieldType.INT, 2),
        SchemaField("FILENAME", FieldType.STRING, 20),
        SchemaField("FILE_SIZE_BYTES", FieldType.INT, 4),
        SchemaField("FILE_MIME", FieldType.STRING, 20),
        SchemaField("USAGE", FieldType.STRING, 5),
        SchemaField("SOURCE_URL", FieldType.STRING, 5),
        SchemaField("CHECKSUM_SHA256", FieldType.STRING, 5),
    ]

    data = []
    for a in assets:
        if usage and a.usage != usage:
            continue
        data.append([
            a.os_asset_id,
            a.file_name,
            a.file_size_bytes,
            a.file_mime,
            a.usage,
            a.source_url,
            a.contents_sha256_hex,
        ])

    TableSorter(schema).order_by(schema[0].field_name).sort(data)

    return render_table("Assets", "", get_string_param(c.arguments.get("format")), data, schema)


def asset_create_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    asset = OSAsset(
        file_name=get_string_param(c.arguments.get("filename")),
        usage=get_string_param(c.arguments.get("usage")),
        file_mime=get_string_param(c.arguments.get("mime")),
    )

    url, has_url = get_string_param_ok(c.arguments.get("url"))
    if has_url:
        asset.source_url = url
    else:
        console = console or get_console()
        if get_bool_param(c.arguments.get("read_content_from_pipe")):
            content = console.read_pipe()
        else:
            content = console.request_input_silent("Asset content:")

        asset.contents_base64 = base64.b64encode(content).decode("ascii")

    created = client.os_asset_create(asset)

    if get_bool_param(c.arguments.get("return_id")):
        return str(created.os_asset_id)

    return ""


def asset_delete_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    asset = get_os_asset_from_command(c, client)

    require_confirmation(
        c,
        lambda: (
            f"Deleting asset {asset.file_name} ({asset.os_asset_id}).  "
            f"Are you sure? Type \"yes\" to continue:"
        ),
        console,
    )

    client.os_asset_delete(asset.os_asset_id)
    return ""


def associate_asset_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    asset = get_os_asset_from_command(c, client)
    template = get_os_template_from_command(c, client, flag_name="template-id")
    path = require_string_param(c, "path", "path")

    client.os_template_add_os_asset(template.volume_template_id, asset.os_asset_id, path)
    return ""


def template_list_associated_assets_cmd(
    c: Command,
    client: MetalCloudClient,
    console: Optional[Console] = None,
) -> str:
    template = get_os_template_from_command(c, client)

    assets = client.os_template_os_assets(template.volume_template_id)

    schema = [
        SchemaField("PATH", FieldType.STRING, 5),
        SchemaField("ID", FieldType.INT, 2),
        SchemaField("FILENAME", FieldType.STRING, 20),
        SchemaField("FILE_SIZE_BYTES", FieldType.INT, 4),
        SchemaField("FILE_MIME", FieldType.STRING, 20),
        SchemaField("USAGE", FieldType.STRING, 5),
        SchemaField("SOURCE_URL", FieldType.STRING, 5),
    ]

    data = [
        [path, a.os_asset_id, a.file_name, a.file_size_bytes, a.file_mime, a.usage, a.source_url]
        for path, a in assets.items()
    ]

    TableSorter(schema).order_by(schema[0].field_name, schema[1].field_name).sort(data)

    top_line = f"Assets associated to template ({template.label} #{template.volume_template_id})"

    return render_table("assets", top_line, get_string_param(c.arguments.get("format")), data, schema)


COMMANDS = [
    Command(
        description="Lists available assets",
        subject="asset",
        alt_subject="assets",
        predicate="list",
        alt_predicate="ls",
        flags=[
            format_flag(),
            Flag("usage", "usage", ArgKind.STR, "Asset's usage"),
        ],
        execute=assets_list_cmd,
    ),
    Command(
        description="Create asset",
        subject="asset",
        alt_subject="assets",
        predicate="create",
        alt_predicate="new",
        flags=[
            Flag("filename", "filename", ArgKind.STR, "Asset's filename"),
            Flag("usage", "usage", ArgKind.STR,
                 "Asset's usage. Possible values: " + ", ".join(f'"{u}"' for u in ASSET_USAGES)),
            Flag("mime", "mime", ArgKind.STR,
                 "Required. Asset's mime type. Possible values: \"text/plain\",\"application/octet-stream\""),
            Flag("url", "url", ArgKind.STR, "Asset's source url. If present it will not read content anymore"),
            Flag("pipe", "read_content_from_pipe", ArgKind.BOOL,
                 "Read asset's content from pipe instead of terminal input"),
            return_id_flag(),
        ],
        execute=asset_create_cmd,
    ),
    Command(
        description="Delete asset",
        subject="asset",
        alt_subject="assets",
        predicate="delete",
        alt_predicate="rm",
        flags=[
            Flag("id", "asset_id_or_name", ArgKind.STR, "Asset's id or filename"),
            autoconfirm_flag(),
        ],
        execute=asset_delete_cmd,
    ),
    Command(
        description="Add (associate) asset to template",
        subject="asset",
        alt_subject="assets",
        predicate="associate",
        alt_predicate="assign",
        flags=[
            Flag("id", "asset_id_or_name", ArgKind.STR, "Asset's id or filename"),
            Flag("template-id", "template_id_or_name", ArgKind.STR, "Template's id or label"),
            Flag("path", "path", ArgKind.STR, "Path to associate asset to"),
        ],
        execute=associate_asset_cmd,
    ),
    Command(
        description="List associated assets",
        subject="asset",
        alt_subject="assets",
        predicate="associated",
        alt_predicate="template",
        flags=[
            Flag("id", "template_id_or_name", ArgKind.STR, "Template's id or label"),
            format_flag(),
        ],
        execute=template_list_associated_assets_cmd,
    ),
]
