"""
Instance array commands — list an infrastructure's instance arrays, get one
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
        SchemaField("INSTANCES", FieldType.INT, 5),
        SchemaField("RAM_GBYTES", FieldType.INT, 5),
        SchemaField("CORES", FieldType.INT, 5),
        SchemaField("DISKS", FieldType.INT, 5),
    ]


def _row(ia) -> list:
    current = ia.operation or ia
    return [
        ia.instance_array_id,
        current.label,
        effective_status(ia.service_status, ia.operation),
        current.instance_count,
        current.ram_gbytes,
        current.processor_core_count,
        current.disk_count,
    ]


def instance_array_list_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    infrastructure = get_infrastructure_from_command(c, client, flag_name="infra")

    schema = _schema()
    data = [_row(ia) for ia in client.instance_arrays(infrastructure.infrastructure_id)]

    TableSorter(schema).order_by(schema[0].field_name).sort(data)

    top_line = f"Instance arrays of infrastructure {infrastructure.label} ({infrastructure.infrastructure_id})"

    return render_table("instance arrays", top_line, get_string_param(c.arguments.get("format")), data, schema)


def instance_array_get_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    instance_array_id = get_param(c, "instance_array_id", "id")

    ia = client.instance_array_get(instance_array_id)

    top_line = f"Instance array {(ia.operation or ia).label} ({ia.instance_array_id})"

    return render_transposed_table(
        "fields", top_line, get_string_param(c.arguments.get("format")), [_row(ia)], _schema(),
    )


COMMANDS = [
    Command(
        description="Lists an infrastructure's instance arrays",
        subject="instance-array",
        alt_subject="ia",
        predicate="list",
        alt_predicate="ls",
        flags=[
            Flag("infra", "infrastructure_id_or_label", ArgKind.STR, "Infrastructure's id or label"),
            format_flag(),
        ],
        execute=instance_array_list_cmd,
    ),
    Command(
        description="Get an instance array",
        subject="instance-array",
        alt_subject="ia",
        predicate="get",
        alt_predicate="show",
        flags=[
            Flag("id", "instance_array_id", ArgKind.INT, "Instance array's id"),
            format_flag(),
        ],
        execute=instance_array_get_cmd,
    ),
]
