"""
metalcloud-cli — Command line client for a bare-metal provisioning API

Lists, creates and deletes infrastructures, instance arrays, drive arrays,
OS templates, boot assets and variables. Entities are referenced by id or
label; results are printed as text tables, JSON or CSV.

Usage:
    metalcloud-cli infrastructure list
    metalcloud-cli infra get --id my-infra --format json
    metalcloud-cli variable create --name ssh_keys --pipe < keys.json
    metalcloud-cli os-template delete --id 42 --autoconfirm
    metalcloud-cli help
"""

__version__ = "0.1.0"

# Errors
from .errors import (
    MetalCloudCLIError,
    ArgumentError,
    EntityNotFoundError,
    AmbiguousLabelError,
    NotConfirmedError,
    RenderError,
    UnknownCommandError,
    AmbiguousCommandError,
    ConfigError,
)

# Rendering
from .output import FieldType, SchemaField, TableSorter, render_table, render_transposed_table

# Arguments and resolution
from .core.arguments import ArgKind, ArgValue, get_param, id_or_label
from .core.confirm import confirm_command
from .core.resolver import ResolveStatus, get_entity_from_command

# Commands
from .commands import Command, Flag, find_command, get_commands

# I/O, API and configuration
from .console import Console, get_console, set_console
from .api import MetalCloudClient, load_client
from .config import Config, ConfigManager, get_config

__all__ = [
    "__version__",
    "MetalCloudCLIError", "ArgumentError", "EntityNotFoundError", "AmbiguousLabelError",
    "NotConfirmedError", "RenderError", "UnknownCommandError", "AmbiguousCommandError", "ConfigError",
    "FieldType", "SchemaField", "TableSorter", "render_table", "render_transposed_table",
    "ArgKind", "ArgValue", "get_param", "id_or_label", "confirm_command",
    "ResolveStatus", "get_entity_from_command",
    "Command", "Flag", "find_command", "get_commands",
    "Console", "get_console", "set_console",
    "MetalCloudClient", "load_client",
    "Config", "ConfigManager", "get_config",
]
