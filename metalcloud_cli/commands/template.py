"""
OS template commands — list, create, update, get and delete

A template bundles an operating system description, the credentials used
to verify an install, and optional bootloader assets (referenced by asset
id or file name).
"""

from typing import Callable, Dict, Optional, Tuple

from ..api.client import MetalCloudClient
from ..api.models import OperatingSystem, OSTemplate, OSTemplateCredentials
from ..console import Console
from ..core.arguments import (
    ArgKind,
    get_bool_param,
    get_int_param_ok,
    get_string_param,
    get_string_param_ok,
)
from ..core.confirm import require_confirmation
from ..errors import ArgumentError
from ..output import FieldType, SchemaField, TableSorter, render_table, render_transposed_table
from .base import Command, Flag, autoconfirm_flag, format_flag, return_id_flag
from .lookups import get_os_asset_from_command, get_os_template_from_command

INSTALL_BOOTLOADER_KEY = "os_asset_id_bootloader_local_install_id_or_name"
OS_BOOT_BOOTLOADER_KEY = "os_asset_id_bootloader_os_boot_id_or_name"


# =============================================================================
# Display helpers
# =============================================================================

def _os_details(template: OSTemplate) -> str:
    if template.operating_system is None:
        return ""
    return str(template.operating_system)


def _asset_file_name_getter(client: MetalCloudClient) -> Callable[[int], str]:
    """Return a function mapping an asset id to its file name (0 -> "")."""
    cache: Dict[int, str] = {}

    def file_name(asset_id: int) -> str:
        if not asset_id:
            return ""
        if asset_id not in cache:
            cache[asset_id] = client.os_asset_get(asset_id).file_name
        return cache[asset_id]

    return file_name


def _credentials_details(credentials: Optional[OSTemplateCredentials]) -> str:
    if credentials is None:
        return ""
    return (
        f"user:{credentials.initial_user} (port {credentials.initial_ssh_port}) "
        f"passwd:{credentials.initial_password} "
        f"(change_password_after_install:{str(credentials.change_password_after_deploy).lower()})"
    )


# =============================================================================
# Executors
# =============================================================================

def templates_list_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    templates = client.os_templates()
    asset_file_name = _asset_file_name_getter(client)

    schema = [
        SchemaField("ID", FieldType.INT, 2),
        SchemaField("LABEL", FieldType.STRING, 5),
        SchemaField("NAME", FieldType.STRING, 5),
        SchemaField("DESCRIPTION", FieldType.STRING, 5),
        SchemaField("SIZE_MBYTES", FieldType.INT, 5),
        SchemaField("BOOT_METHODS", FieldType.STRING, 5),
        SchemaField("OS", FieldType.STRING, 5),
        SchemaField("INSTALL_BOOTLOADER", FieldType.STRING, 5),
        SchemaField("OS_BOOTLOADER", FieldType.STRING, 5),
        SchemaField("USER_ID", FieldType.INT, 5),
        SchemaField("CREATED", FieldType.STRING, 5),
        SchemaField("UPDATED", FieldType.STRING, 5),
    ]

    data = []
    for t in templates:
        data.append([
            t.volume_template_id,
            t.label,
            t.display_name,
            t.description,
            t.size_mbytes,
            t.boot_methods_supported,
            _os_details(t),
            asset_file_name(t.os_asset_bootloader_local_install),
            asset_file_name(t.os_asset_bootloader_os_boot),
            t.user_id,
            t.created_timestamp,
            t.updated_timestamp,
        ])

    TableSorter(schema).order_by(schema[0].field_name).sort(data)

    return render_table("Templates", "", get_string_param(c.arguments.get("format")), data, schema)


def _string_arg(c: Command, key: str, flag_name: str, required: bool) -> Tuple[str, bool]:
    value, ok = get_string_param_ok(c.arguments.get(key))
    if not ok and required:
        raise ArgumentError(f"--{flag_name} is required")
    return value, ok


def _int_arg(c: Command, key: str, flag_name: str, required: bool) -> Tuple[int, bool]:
    value, ok = get_int_param_ok(c.arguments.get(key))
    if not ok and required:
        raise ArgumentError(f"--{flag_name} is required")
    return value, ok


def update_template_from_command(
    template: OSTemplate,
    c: Command,
    client: MetalCloudClient,
    check_required: bool,
) -> OSTemplate:
    """
    Copy the flags given on the command line onto a template record.

    Args:
        template: Record to update in place
        c: Command holding the arguments
        client: Used to resolve bootloader assets given by file name
        check_required: If True (create), missing required flags are errors

    Returns:
        The updated template
    """
    label, ok = _string_arg(c, "label", "label", check_required)
    if ok:
        template.label = label

    display_name, ok = _string_arg(c, "display_name", "display-name", check_required)
    if ok:
        template.display_name = display_name

    size, ok = _int_arg(c, "size", "size", False)
    if ok:
        template.size_mbytes = size

    if get_bool_param(c.arguments.get("local_disk_supported")):
        template.local_disk_supported = True

    template.is_os_template = True

    boot_methods, ok = _string_arg(c, "boot_methods_supported", "boot-methods-supported", False)
    if ok:
        template.boot_methods_supported = boot_methods

    boot_type, ok = _string_arg(c, "boot_type", "boot-type", check_required)
    if ok:
        template.boot_type = boot_type

    description, ok = _string_arg(c, "description", "description", False)
    if ok:
        template.description = description

    # Operating system
    os_fields = [
        ("os_type", "os-type", "type"),
        ("os_version", "os-version", "version"),
        ("os_architecture", "os-architecture", "architecture"),
    ]
    for key, flag_name, attr in os_fields:
        value, ok = _string_arg(c, key, flag_name, check_required)
        if ok:
            if template.operating_system is None:
                template.operating_system = OperatingSystem()
            setattr(template.operating_system, attr, value)

    # Boot assets
    if get_string_param_ok(c.arguments.get(INSTALL_BOOTLOADER_KEY))[1]:
        asset = get_os_asset_from_command(
            c, client, flag_name="install-bootloader-asset", key=INSTALL_BOOTLOADER_KEY,
        )
        template.os_asset_bootloader_local_install = asset.os_asset_id

    if get_string_param_ok(c.arguments.get(OS_BOOT_BOOTLOADER_KEY))[1]:
        asset = get_os_asset_from_command(
            c, client, flag_name="os-boot-bootloader-asset", key=OS_BOOT_BOOTLOADER_KEY,
        )
        template.os_asset_bootloader_os_boot = asset.os_asset_id

    # Credentials
    user, has_user = _string_arg(c, "initial_user", "initial-user", check_required)
    password, has_password = _string_arg(c, "initial_password", "initial-password", check_required)
    ssh_port, has_port = _int_arg(c, "initial_ssh_port", "initial-ssh-port", check_required)
    change_password = get_bool_param(c.arguments.get("change_password_after_deploy"))

    if has_user or has_password or has_port or change_password:
        if template.credentials is None:
            template.credentials = OSTemplateCredentials()
        if has_user:
            template.credentials.initial_user = user
        if has_password:
            template.credentials.initial_password = password
        if has_port:
            template.credentials.initial_ssh_port = ssh_port
        if change_password:
            template.credentials.change_password_after_deploy = True

    repo_url, ok = _string_arg(c, "repo_url", "repo-url", False)
    if ok:
        template.repo_url = repo_url

    return template


def template_create_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    template = update_template_from_command(OSTemplate(), c, client, check_required=True)

    created = client.os_template_create(template)

    if get_bool_param(c.arguments.get("return_id")):
        return str(created.volume_template_id)

    return ""


def template_edit_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    existing = get_os_template_from_command(c, client)

    changes = update_template_from_command(OSTemplate(), c, client, check_required=False)

    client.os_template_update(existing.volume_template_id, changes)
    return ""


def template_get_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    show_credentials = get_bool_param(c.arguments.get("show_credentials"))

    template = get_os_template_from_command(c, client, decrypt_passwd=show_credentials)
    asset_file_name = _asset_file_name_getter(client)

    schema = [
        SchemaField("ID", FieldType.INT, 2),
        SchemaField("LABEL", FieldType.STRING, 5),
        SchemaField("NAME", FieldType.STRING, 5),
        SchemaField("DESCRIPTION", FieldType.STRING, 5),
        SchemaField("SIZE_MBYTES", FieldType.INT, 5),
        SchemaField("BOOT_METHODS", FieldType.STRING, 5),
        SchemaField("OS", FieldType.STRING, 5),
        SchemaField("USER_ID", FieldType.INT, 5),
        SchemaField("INSTALL_BOOTLOADER", FieldType.STRING, 5),
        SchemaField("OS_BOOTLOADER", FieldType.STRING, 5),
        SchemaField("CREATED", FieldType.STRING, 5),
        SchemaField("UPDATED", FieldType.STRING, 5),
    ]

    row = [
        template.volume_template_id,
        template.label,
        template.display_name,
        template.description,
        template.size_mbytes,
        template.boot_methods_supported,
        _os_details(template),
        template.user_id,
        asset_file_name(template.os_asset_bootloader_local_install),
        asset_file_name(template.os_asset_bootloader_os_boot),
        template.created_timestamp,
        template.updated_timestamp,
    ]

    if show_credentials:
        schema.append(SchemaField("CREDENTIALS", FieldType.STRING, 5))
        row.append(_credentials_details(template.credentials))

    top_line = f"Template {template.label} ({template.volume_template_id})"

    return render_transposed_table(
        "fields", top_line, get_string_param(c.arguments.get("format")), [row], schema,
    )


def template_delete_cmd(c: Command, client: MetalCloudClient, console: Optional[Console] = None) -> str:
    template = get_os_template_from_command(c, client)

    require_confirmation(
        c,
        lambda: (
            f"Deleting template {template.display_name} ({template.volume_template_id}).  "
            f"Are you sure? Type \"yes\" to continue:"
        ),
        console,
    )

    client.os_template_delete(template.volume_template_id)
    return ""


# =============================================================================
# Registration
# =============================================================================

def _template_flags(required: str) -> list:
    """Flags shared by create and update; `required` prefixes required help."""
    return [
        Flag("label", "label", ArgKind.STR, f"{required}Template's label"),
        Flag("display-name", "display_name", ArgKind.STR, f"{required}Template's display name"),
        Flag("size", "size", ArgKind.INT, "Template's size (MB)"),
        Flag("local-disk-supported", "local_disk_supported", ArgKind.BOOL,
             "Template supports local disk install. Default false"),
        Flag("boot-methods-supported", "boot_methods_supported", ArgKind.STR,
             "Template boot methods supported. Defaults to pxe_iscsi."),
        Flag("boot-type", "boot_type", ArgKind.STR,
             f"{required}Template boot type. Possible values: 'uefi_only','legacy_only','hybrid'"),
        Flag("description", "description", ArgKind.STR, "Template description"),
        Flag("os-type", "os_type", ArgKind.STR,
             f"{required}Template operating system type. For example, Ubuntu or CentOS."),
        Flag("os-version", "os_version", ArgKind.STR, f"{required}Template operating system version."),
        Flag("os-architecture", "os_architecture", ArgKind.STR,
             f"{required}Template operating system architecture. Possible values: none, unknown, x86, x86_64."),
        Flag("initial-user", "initial_user", ArgKind.STR,
             f"{required}Template's initial username, used to verify install."),
        Flag("initial-password", "initial_password", ArgKind.STR,
             f"{required}Template's initial password, used to verify install."),
        Flag("initial-ssh-port", "initial_ssh_port", ArgKind.INT,
             f"{required}Template's initial ssh port, used to verify install."),
        Flag("change-password-after-deploy", "change_password_after_deploy", ArgKind.BOOL,
             "Option to change the initial_user password on the installed OS after deploy."),
        Flag("repo-url", "repo_url", ArgKind.STR, "Template's location the repository"),
        Flag("install-bootloader-asset", INSTALL_BOOTLOADER_KEY, ArgKind.STR,
             "Template's bootloader asset id or file name during install"),
        Flag("os-boot-bootloader-asset", OS_BOOT_BOOTLOADER_KEY, ArgKind.STR,
             "Template's bootloader asset id or file name during regular server boot"),
    ]


COMMANDS = [
    Command(
        description="Lists available templates",
        subject="os-template",
        alt_subject="template",
        predicate="list",
        alt_predicate="ls",
        flags=[format_flag()],
        execute=templates_list_cmd,
    ),
    Command(
        description="Create template",
        subject="os-template",
        alt_subject="template",
        predicate="create",
        alt_predicate="new",
        flags=_template_flags("(Required) ") + [return_id_flag()],
        execute=template_create_cmd,
    ),
    Command(
        description="Edit template",
        subject="os-template",
        alt_subject="template",
        predicate="update",
        alt_predicate="edit",
        flags=[Flag("id", "template_id_or_name", ArgKind.STR, "(Required) Template's id or label")]
        + _template_flags(""),
        execute=template_edit_cmd,
    ),
    Command(
        description="Get template",
        subject="os-template",
        alt_subject="template",
        predicate="get",
        alt_predicate="show",
        flags=[
            Flag("id", "template_id_or_name", ArgKind.STR, "Template's id or label"),
            format_flag(),
            Flag("show-credentials", "show_credentials", ArgKind.BOOL,
                 "(Flag) If set returns the template's initial ssh credentials"),
        ],
        execute=template_get_cmd,
    ),
    Command(
        description="Delete template",
        subject="os-template",
        alt_subject="template",
        predicate="delete",
        alt_predicate="rm",
        flags=[
            Flag("id", "template_id_or_name", ArgKind.STR, "Template's id or label"),
            autoconfirm_flag(),
        ],
        execute=template_delete_cmd,
    ),
]
