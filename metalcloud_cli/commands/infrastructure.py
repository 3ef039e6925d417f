"""
Infrastructure commands — list, create, get, deploy, revert and delete

An infrastructure groups instance arrays and drive arrays. Edits to its
elements are staged as pending operations until the infrastructure is
deployed; revert drops them.
"""

from typing import List, Optional

from ..api.client import MetalCloudClient
from ..api.models import DriveArray, Infrastructure, InstanceArray, ShutdownOptions
from ..console import Console
from ..core.arguments import (
    ArgKind,
    get_bool_param,
    get_bool_param_ok,
    get_int_param_ok,
    get_string_param,
    require_string_param,
)
from ..core.confirm import require_confirmation
from ..output import FieldType, SchemaField, TableSorter, render_table
from .base import Command, Flag, autoconfirm_flag, format_flag, return_id_flag
from .lookups import get_infrastructure_from_command

DEFAULT_SOFT_SHUTDOWN_TIMEOUT = 180


def effective_status(service_status: str, operation) -> str:
    """
    Status shown for an instance or drive array.

    An element that is already provisioned but has a pending, not yet
    started edit is reported as "edited".
    """
    if (
        service_status != "ordered"
        and operation is not None
        and operation.deploy_type == "edit"
        and operation.deploy_status == "not_started"
    ):
        return "edited"
    return service_status


def _confirmation(action: str, infrastructure: Infrastructure, warning: str = "") -> str:
    return (
        f"{action} infrastructure {infrastructure.label} ({infrastructure.infrastructure_id}).  "
        f"{warning}Are you sure? Type \"yes\" to continue:"
    )


# =============================================================================
# Executors
# =============================================================================

def infrastructure_list_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    infrastructures = client.infrastructures()

    schema = [
        SchemaField("ID", FieldType.INT, 5),
        SchemaField("LABEL", FieldType.STRING, 15),
        SchemaField("OWNER", FieldType.STRING, 20),
        SchemaField("DATACENTER", FieldType.STRING, 10),
        SchemaField("STATUS", FieldType.STRING, 5),
        SchemaField("CREATED", FieldType.STRING, 5),
        SchemaField("UPDATED", FieldType.STRING, 5),
    ]

    data = [
        [
            i.infrastructure_id,
            i.label,
            i.user_email_owner,
            i.datacenter_name,
            i.service_status,
            i.created_timestamp,
            i.updated_timestamp,
        ]
        for i in infrastructures
    ]

    TableSorter(schema).order_by(schema[0].field_name).sort(data)

    return render_table("Infrastructures", "", get_string_param(c.arguments.get("format")), data, schema)


def infrastructure_create_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    infrastructure = Infrastructure(
        label=require_string_param(c, "infrastructure_label", "label"),
        datacenter_name=require_string_param(c, "datacenter", "datacenter"),
    )

    created = client.infrastructure_create(infrastructure)

    if get_bool_param(c.arguments.get("return_id")):
        return str(created.infrastructure_id)

    return ""


def _instance_array_row(ia: InstanceArray) -> list:
    current = ia.operation or ia
    details = (
        f"{current.instance_count} instances "
        f"({current.ram_gbytes} GB RAM, {current.processor_core_count} cores, {current.disk_count} disks)"
    )
    return [
        ia.instance_array_id,
        "InstanceArray",
        current.label,
        details,
        effective_status(ia.service_status, ia.operation),
    ]


def _drive_array_row(da: DriveArray, instance_array_labels: dict) -> list:
    current = da.operation or da
    details = f"{current.drive_count} drives - {current.drive_size_mbytes_default} MB {current.drive_storage_type}"
    attached = instance_array_labels.get(current.instance_array_id)
    if attached:
        details += f" attached to: {attached}"
    return [
        da.drive_array_id,
        "DriveArray",
        current.label,
        details,
        effective_status(da.service_status, da.operation),
    ]


def infrastructure_get_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    infrastructure = get_infrastructure_from_command(c, client)

    schema = [
        SchemaField("ID", FieldType.INT, 6),
        SchemaField("OBJECT_TYPE", FieldType.STRING, 15),
        SchemaField("LABEL", FieldType.STRING, 15),
        SchemaField("DETAILS", FieldType.STRING, 20),
        SchemaField("STATUS", FieldType.STRING, 5),
    ]

    instance_arrays = sorted(
        client.instance_arrays(infrastructure.infrastructure_id),
        key=lambda ia: ia.instance_array_id,
    )
    drive_arrays = sorted(
        client.drive_arrays(infrastructure.infrastructure_id),
        key=lambda da: da.drive_array_id,
    )

    instance_array_labels = {
        ia.instance_array_id: (ia.operation or ia).label for ia in instance_arrays
    }

    data: List[list] = [_instance_array_row(ia) for ia in instance_arrays]
    data.extend(_drive_array_row(da, instance_array_labels) for da in drive_arrays)

    top_line = (
        f"Infrastructure {infrastructure.label} ({infrastructure.infrastructure_id}) - "
        f"datacenter {infrastructure.datacenter_name} owner {infrastructure.user_email_owner}"
    )

    return render_table("elements", top_line, get_string_param(c.arguments.get("format")), data, schema)


def infrastructure_deploy_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    infrastructure = get_infrastructure_from_command(c, client)

    timeout, ok = get_int_param_ok(c.arguments.get("soft_shutdown_timeout_seconds"))
    if not ok:
        timeout = DEFAULT_SOFT_SHUTDOWN_TIMEOUT

    # unset shutdown flags keep the ShutdownOptions defaults
    defaults = ShutdownOptions()
    hard_shutdown, ok = get_bool_param_ok(c.arguments.get("hard_shutdown_after_timeout"))
    if not ok:
        hard_shutdown = defaults.hard_shutdown_after_timeout
    soft_shutdown, ok = get_bool_param_ok(c.arguments.get("attempt_soft_shutdown"))
    if not ok:
        soft_shutdown = defaults.attempt_soft_shutdown

    shutdown_options = ShutdownOptions(
        hard_shutdown_after_timeout=hard_shutdown,
        attempt_soft_shutdown=soft_shutdown,
        soft_shutdown_timeout_seconds=timeout,
    )

    require_confirmation(c, lambda: _confirmation("Deploying", infrastructure), console)

    client.infrastructure_deploy(
        infrastructure.infrastructure_id,
        shutdown_options,
        get_bool_param(c.arguments.get("allow_data_loss")),
        get_bool_param(c.arguments.get("skip_ansible")),
    )
    return ""


def infrastructure_revert_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    infrastructure = get_infrastructure_from_command(c, client)

    require_confirmation(
        c,
        lambda: _confirmation(
            "Reverting", infrastructure, "All changes not yet deployed will be lost. ",
        ),
        console,
    )

    client.infrastructure_operation_cancel(infrastructure.infrastructure_id)
    return ""


def infrastructure_delete_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    infrastructure = get_infrastructure_from_command(c, client)

    require_confirmation(c, lambda: _confirmation("Deleting", infrastructure), console)

    client.infrastructure_delete(infrastructure.infrastructure_id)
    return ""


# =============================================================================
# Registration
# =============================================================================

def _id_flag() -> Flag:
    return Flag("id", "infrastructure_id_or_label", ArgKind.STR, "Infrastructure's id or label")


COMMANDS = [
    Command(
        description="Lists all infrastructures",
        subject="infrastructure",
        alt_subject="infra",
        predicate="list",
        alt_predicate="ls",
        flags=[format_flag()],
        execute=infrastructure_list_cmd,
    ),
    Command(
        description="Create an infrastructure",
        subject="infrastructure",
        alt_subject="infra",
        predicate="create",
        alt_predicate="new",
        flags=[
            Flag("label", "infrastructure_label", ArgKind.STR, "(Required) Infrastructure's label"),
            Flag("datacenter", "datacenter", ArgKind.STR, "(Required) Infrastructure datacenter"),
            return_id_flag(),
        ],
        execute=infrastructure_create_cmd,
    ),
    Command(
        description="Get an infrastructure's instance arrays and drive arrays",
        subject="infrastructure",
        alt_subject="infra",
        predicate="get",
        alt_predicate="show",
        flags=[_id_flag(), format_flag()],
        execute=infrastructure_get_cmd,
    ),
    Command(
        description="Deploy an infrastructure",
        subject="infrastructure",
        alt_subject="infra",
        predicate="deploy",
        alt_predicate="apply",
        flags=[
            _id_flag(),
            Flag("allow-data-loss", "allow_data_loss", ArgKind.BOOL,
                 "(Flag) If set, deploy will not throw an error if data loss is expected"),
            Flag("hard-shutdown-after-timeout", "hard_shutdown_after_timeout", ArgKind.BOOL,
                 "Issue a hard shutdown when the soft shutdown times out (default on; --no-hard-shutdown-after-timeout disables)",
                 negatable=True),
            Flag("attempt-soft-shutdown", "attempt_soft_shutdown", ArgKind.BOOL,
                 "Attempt a soft (ACPI) shutdown first (default on; --no-attempt-soft-shutdown disables)",
                 negatable=True),
            Flag("soft-shutdown-timeout-seconds", "soft_shutdown_timeout_seconds", ArgKind.INT,
                 f"Timeout to wait for the soft shutdown (default {DEFAULT_SOFT_SHUTDOWN_TIMEOUT})"),
            Flag("skip-ansible", "skip_ansible", ArgKind.BOOL,
                 "(Flag) If set, some automatic provisioning steps will be skipped"),
            autoconfirm_flag(),
        ],
        execute=infrastructure_deploy_cmd,
    ),
    Command(
        description="Revert all changes of an infrastructure to the deployed state",
        subject="infrastructure",
        alt_subject="infra",
        predicate="revert",
        alt_predicate="undo",
        flags=[_id_flag(), autoconfirm_flag()],
        execute=infrastructure_revert_cmd,
    ),
    Command(
        description="Delete an infrastructure",
        subject="infrastructure",
        alt_subject="infra",
        predicate="delete",
        alt_predicate="rm",
        flags=[_id_flag(), autoconfirm_flag()],
        execute=infrastructure_delete_cmd,
    ),
]
