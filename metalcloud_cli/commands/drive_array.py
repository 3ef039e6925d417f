"""
Drive array commands — list an infrastructure's drive arrays, get one
"""

from typing import Optional

from ..api.client import MetalCloudClient
from ..console import Console
from ..core.arguments import ArgKind, get_param, get_string_param
from ..output import FieldType, SchemaField, TableSorter, render_table, render_transposed_table
from .base import Command, Flag, format_flag
from .infrastructure import effective_status
from .lookups import get_infrastructure_from_command


def _schema() -> list:
    return [
        SchemaField("ID", FieldType.INT, 6),
        SchemaField("LABEL", FieldType.STRING, 15),
        SchemaField("STATUS", FieldType.STRING, 5),
        SchemaField("DRIVES", FieldType.INT, 5),
        SchemaField("SIZE_MBYTES", FieldType.INT, 5),
        SchemaField("STORAGE_TYPE", FieldType.STRING, 5),
        SchemaField("TEMPLATE_ID", FieldType.INT, 5),
        SchemaField("INSTANCE_ARRAY_ID", FieldType.INT, 5),
    ]


def _row(da) -> list:
    current = da.operation or da
    return [
        da.drive_array_id,
        current.label,
        effective_status(da.service_status, da.operation),
        current.drive_count,
        current.drive_size_mbytes_default,
        current.drive_storage_type,
        current.volume_template_id,
        current.instance_array_id,
    ]


def drive_array_list_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    infrastructure = get_infrastructure_from_command(c, client, flag_name="infra")

    schema = _schema()
    data = [_row(da) for da in client.drive_arrays(infrastructure.infrastructure_id)]

    TableSorter(schema).order_by(schema[0].field_name).sort(data)

    top_line = f"Drive arrays of infrastructure {infrastructure.label} ({infrastructure.infrastructure_id})"

    return render_table("drive arrays", top_line, get_string_param(c.arguments.get("format")), data, schema)


def drive_array_get_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    drive_array_id = get_param(c, "drive_array_id", "id")

    da = client.drive_array_get(drive_array_id)

    top_line = f"Drive array {(da.operation or da).label} ({da.drive_array_id})"

    return render_transposed_table(
        "fields", top_line, get_string_param(c.arguments.get("format")), [_row(da)], _schema(),
    )


COMMANDS = [
    Command(
        description="Lists an infrastructure's drive arrays",
        subject="drive-array",
        alt_subject="da",
        predicate="list",
        alt_predicate="ls",
        flags=[
            Flag("infra", "infrastructure_id_or_label", ArgKind.STR, "Infrastructure's id or label"),
            format_flag(),
        ],
        execute=drive_array_list_cmd,
    ),
    Command(
        description="Get a drive array",
        subject="drive-array",
        alt_subject="da",
        predicate="get",
        alt_predicate="show",
        flags=[
            Flag("id", "drive_array_id", ArgKind.INT, "Drive array's id"),
            format_flag(),
        ],
        execute=drive_array_get_cmd,
    ),
]
