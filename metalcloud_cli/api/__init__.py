"""
API — Client interface and records for the provisioning API
"""

from .client import MetalCloudClient, load_client
from .models import (
    DriveArray,
    DriveArrayOperation,
    Infrastructure,
    InstanceArray,
    InstanceArrayOperation,
    OperatingSystem,
    OSAsset,
    OSTemplate,
    OSTemplateCredentials,
    ShutdownOptions,
    Variable,
)

__all__ = [
    "MetalCloudClient", "load_client",
    "Variable", "OSAsset", "OSTemplate", "OperatingSystem", "OSTemplateCredentials",
    "Infrastructure", "ShutdownOptions",
    "InstanceArray", "InstanceArrayOperation", "DriveArray", "DriveArrayOperation",
]
