"""
Variable commands — list, create and delete template variables
"""

from typing import Optional

import orjson

from ..api.client import MetalCloudClient
from ..api.models import Variable
from ..console import Console, get_console
from ..core.arguments import ArgKind, get_bool_param, get_string_param, require_string_param
from ..core.confirm import require_confirmation
from ..errors import ArgumentError
from ..output import FieldType, SchemaField, TableSorter, render_table
from .base import Command, Flag, autoconfirm_flag, format_flag, return_id_flag
from .lookups import get_variable_from_command


def variables_list_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    usage = get_string_param(c.arguments.get("usage"))

    variables = client.variables(usage)

    schema = [
        SchemaField("ID", FieldType.INT, 6),
        SchemaField("NAME", FieldType.STRING, 20),
        SchemaField("USAGE", FieldType.STRING, 20),
        SchemaField("CREATED", FieldType.STRING, 20),
        SchemaField("UPDATED", FieldType.STRING, 20),
    ]

    data = [
        [v.variable_id, v.name, v.usage, v.created_timestamp, v.updated_timestamp]
        for v in variables
    ]

    TableSorter(schema).order_by(schema[0].field_name).sort(data)

    return render_table("Variables", "", get_string_param(c.arguments.get("format")), data, schema)


def variable_create_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    console = console or get_console()

    variable = Variable(name=require_string_param(c, "name", "name"))
    variable.usage = get_string_param(c.arguments.get("usage"))

    if get_bool_param(c.arguments.get("read_content_from_pipe")):
        content = console.read_pipe()
    else:
        content = console.request_input("Variable content:")

    if len(content) == 0:
        raise ArgumentError("Content cannot be empty")

    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ArgumentError("Variable content must be UTF-8 text") from e

    variable.json = orjson.dumps(text).decode("utf-8")

    created = client.variable_create(variable)

    if get_bool_param(c.arguments.get("return_id")):
        return str(created.variable_id)

    return ""


def variable_delete_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    variable = get_variable_from_command(c, client)

    require_confirmation(
        c,
        lambda: (
            f"Deleting variable {variable.name} ({variable.variable_id}).  "
            f"Are you sure? Type \"yes\" to continue:"
        ),
        console,
    )

    client.variable_delete(variable.variable_id)
    return ""


COMMANDS = [
    Command(
        description="Lists available variables",
        subject="variable",
        alt_subject="var",
        predicate="list",
        alt_predicate="ls",
        flags=[
            format_flag(),
            Flag("usage", "usage", ArgKind.STR, "Variable's usage"),
        ],
        execute=variables_list_cmd,
    ),
    Command(
        description="Create variable",
        subject="variable",
        alt_subject="var",
        predicate="create",
        alt_predicate="new",
        flags=[
            Flag("name", "name", ArgKind.STR, "Variable's name"),
            Flag("usage", "usage", ArgKind.STR, "Variable's usage"),
            Flag("pipe", "read_content_from_pipe", ArgKind.BOOL,
                 "Read variable's content from pipe instead of terminal input"),
            return_id_flag(),
        ],
        execute=variable_create_cmd,
    ),
    Command(
        description="Delete variable",
        subject="variable",
        alt_subject="var",
        predicate="delete",
        alt_predicate="rm",
        flags=[
            Flag("id", "variable_id_or_name", ArgKind.STR, "Variable's id or name"),
            autoconfirm_flag(),
        ],
        execute=variable_delete_cmd,
    ),
]
