"""
Models — Records returned by and sent to the provisioning API

Plain dataclasses with defaults so commands can build partial records
(e.g. for create/update) and tests can build fixtures with only the
fields they care about.
"""

from dataclasses import dataclass, field
from typing import Optional


# =============================================================================
# Variables
# =============================================================================

@dataclass
class Variable:
    """A named JSON value usable in templates."""
    variable_id: int = 0
    name: str = ""
    usage: str = ""
    json: str = ""
    user_id_owner: int = 0
    created_timestamp: str = ""
    updated_timestamp: str = ""


# =============================================================================
# OS assets and templates
# =============================================================================

@dataclass
class OSAsset:
    """A boot asset (bootloader, iPXE config, installer) served during deploys."""
    os_asset_id: int = 0
    file_name: str = ""
    file_size_bytes: int = 0
    file_mime: str = ""
    usage: str = ""
    source_url: str = ""
    contents_base64: str = ""
    contents_sha256_hex: str = ""
    user_id_owner: int = 0


@dataclass
class OperatingSystem:
    type: str = ""
    version: str = ""
    architecture: str = ""

    def __str__(self) -> str:
        return f"{self.type} {self.version} {self.architecture}"


@dataclass
class OSTemplateCredentials:
    """Initial login used to verify an install."""
    initial_user: str = ""
    initial_password: str = ""
    initial_ssh_port: int = 0
    change_password_after_deploy: bool = False


@dataclass
class OSTemplate:
    """An operating system template (a volume template flagged as OS template)."""
    volume_template_id: int = 0
    label: str = ""
    display_name: str = ""
    description: str = ""
    size_mbytes: int = 0
    local_disk_supported: bool = False
    is_os_template: bool = True
    boot_methods_supported: str = ""
    boot_type: str = ""
    repo_url: str = ""
    operating_system: Optional[OperatingSystem] = None
    credentials: Optional[OSTemplateCredentials] = None
    os_asset_bootloader_local_install: int = 0
    os_asset_bootloader_os_boot: int = 0
    user_id: int = 0
    created_timestamp: str = ""
    updated_timestamp: str = ""


# =============================================================================
# Infrastructures
# =============================================================================

@dataclass
class Infrastructure:
    infrastructure_id: int = 0
    label: str = ""
    datacenter_name: str = ""
    user_email_owner: str = ""
    service_status: str = ""
    created_timestamp: str = ""
    updated_timestamp: str = ""


@dataclass
class ShutdownOptions:
    """How running servers are stopped when a deploy needs it."""
    hard_shutdown_after_timeout: bool = True
    attempt_soft_shutdown: bool = True
    soft_shutdown_timeout_seconds: int = 180


@dataclass
class InstanceArrayOperation:
    """Pending (not yet deployed) state of an instance array."""
    instance_array_id: int = 0
    label: str = ""
    deploy_type: str = ""
    deploy_status: str = ""
    instance_count: int = 0
    ram_gbytes: int = 0
    processor_core_count: int = 0
    disk_count: int = 0


@dataclass
class InstanceArray:
    instance_array_id: int = 0
    label: str = ""
    infrastructure_id: int = 0
    service_status: str = ""
    instance_count: int = 0
    ram_gbytes: int = 0
    processor_core_count: int = 0
    disk_count: int = 0
    operation: Optional[InstanceArrayOperation] = None


@dataclass
class DriveArrayOperation:
    """Pending (not yet deployed) state of a drive array."""
    drive_array_id: int = 0
    label: str = ""
    infrastructure_id: int = 0
    instance_array_id: int = 0
    drive_count: int = 0
    drive_size_mbytes_default: int = 0
    drive_storage_type: str = ""
    volume_template_id: int = 0
    deploy_type: str = ""
    deploy_status: str = ""


@dataclass
class DriveArray:
    drive_array_id: int = 0
    label: str = ""
    infrastructure_id: int = 0
    instance_array_id: int = 0
    drive_count: int = 0
    drive_size_mbytes_default: int = 0
    drive_storage_type: str = ""
    volume_template_id: int = 0
    service_status: str = ""
    operation: Optional[DriveArrayOperation] = field(default=None)
