"""
Test Data Factory — Entity records and a mock API client for command tests

Provides declarative test data without a real API:
- add_* methods register records and wire the mock client's list/get calls
- command() builds a Command with an argument bag from plain values
- console() builds a Console over in-memory streams

Usage:
    def test_delete(factory):
        v = factory.add_variable(name="ssh_keys")
        cmd = factory.command(variable_id_or_name="ssh_keys", autoconfirm=True)
        variable_delete_cmd(cmd, factory.client, factory.console())
        factory.client.variable_delete.assert_called_once_with(v.variable_id)
"""

import io
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

from metalcloud_cli.api.client import MetalCloudClient
from metalcloud_cli.api.models import (
    DriveArray,
    DriveArrayOperation,
    Infrastructure,
    InstanceArray,
    InstanceArrayOperation,
    OperatingSystem,
    OSAsset,
    OSTemplate,
    OSTemplateCredentials,
    Variable,
)
from metalcloud_cli.commands.base import Command
from metalcloud_cli.console import Console
from metalcloud_cli.core.arguments import ArgValue


# User named in default table titles during tests
TEST_USER = "user@example.com"


class MetalCloudTestFactory:
    """
    Factory for creating test environments.

    The client is a Mock constrained to the MetalCloudClient interface, so
    calling a method the interface does not define fails the test. Get calls
    for unknown ids raise LookupError, like a remote "not found".
    """

    def __init__(self):
        self.client = Mock(spec=MetalCloudClient)

        self.variables: List[Variable] = []
        self.assets: List[OSAsset] = []
        self.templates: List[OSTemplate] = []
        self.infrastructures: List[Infrastructure] = []
        self.instance_arrays: List[InstanceArray] = []
        self.drive_arrays: List[DriveArray] = []
        self.associated_assets: Dict[int, Dict[str, OSAsset]] = {}

        self._next_id = 100

        self.client.variables.side_effect = lambda usage="": [
            v for v in self.variables if not usage or v.usage == usage
        ]
        self.client.variable_get.side_effect = lambda i: self._get(self.variables, "variable_id", i)

        self.client.os_assets.side_effect = lambda: list(self.assets)
        self.client.os_asset_get.side_effect = lambda i: self._get(self.assets, "os_asset_id", i)

        self.client.os_templates.side_effect = lambda: list(self.templates)
        self.client.os_template_get.side_effect = (
            lambda i, decrypt_passwd=False: self._get(self.templates, "volume_template_id", i)
        )
        self.client.os_template_os_assets.side_effect = (
            lambda i: dict(self.associated_assets.get(i, {}))
        )

        self.client.infrastructures.side_effect = lambda: list(self.infrastructures)
        self.client.infrastructure_get.side_effect = (
            lambda i: self._get(self.infrastructures, "infrastructure_id", i)
        )

        self.client.instance_arrays.side_effect = lambda infra_id: [
            ia for ia in self.instance_arrays if ia.infrastructure_id == infra_id
        ]
        self.client.instance_array_get.side_effect = (
            lambda i: self._get(self.instance_arrays, "instance_array_id", i)
        )
        self.client.drive_arrays.side_effect = lambda infra_id: [
            da for da in self.drive_arrays if da.infrastructure_id == infra_id
        ]
        self.client.drive_array_get.side_effect = (
            lambda i: self._get(self.drive_arrays, "drive_array_id", i)
        )

    def _get(self, records: list, id_attr: str, record_id: int) -> Any:
        for record in records:
            if getattr(record, id_attr) == record_id:
                return record
        raise LookupError(f"{id_attr} {record_id} not found")

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def add_variable(self, name: str = "var", usage: str = "", variable_id: Optional[int] = None,
                     **kwargs) -> Variable:
        v = Variable(variable_id=variable_id or self._new_id(), name=name, usage=usage, **kwargs)
        self.variables.append(v)
        return v

    def add_asset(self, file_name: str = "pxelinux.0", asset_id: Optional[int] = None, **kwargs) -> OSAsset:
        a = OSAsset(os_asset_id=asset_id or self._new_id(), file_name=file_name, **kwargs)
        self.assets.append(a)
        return a

    def add_template(self, label: str = "ubuntu-20-04", template_id: Optional[int] = None,
                     **kwargs) -> OSTemplate:
        kwargs.setdefault("display_name", label.replace("-", " ").title())
        kwargs.setdefault("operating_system", OperatingSystem("Ubuntu", "20.04", "x86_64"))
        kwargs.setdefault("credentials", OSTemplateCredentials("root", "secret", 22, False))
        t = OSTemplate(volume_template_id=template_id or self._new_id(), label=label, **kwargs)
        self.templates.append(t)
        return t

    def associate(self, template: OSTemplate, asset: OSAsset, path: str) -> None:
        self.associated_assets.setdefault(template.volume_template_id, {})[path] = asset

    def add_infrastructure(self, label: str = "testinfra", infrastructure_id: Optional[int] = None,
                           **kwargs) -> Infrastructure:
        i = Infrastructure(infrastructure_id=infrastructure_id or self._new_id(), label=label, **kwargs)
        self.infrastructures.append(i)
        return i

    def add_instance_array(self, infrastructure: Infrastructure, label: str = "workers",
                           instance_array_id: Optional[int] = None,
                           operation: Optional[InstanceArrayOperation] = None, **kwargs) -> InstanceArray:
        ia = InstanceArray(
            instance_array_id=instance_array_id or self._new_id(),
            label=label,
            infrastructure_id=infrastructure.infrastructure_id,
            operation=operation,
            **kwargs,
        )
        self.instance_arrays.append(ia)
        return ia

    def add_drive_array(self, infrastructure: Infrastructure, label: str = "data",
                        drive_array_id: Optional[int] = None,
                        operation: Optional[DriveArrayOperation] = None, **kwargs) -> DriveArray:
        da = DriveArray(
            drive_array_id=drive_array_id or self._new_id(),
            label=label,
            infrastructure_id=infrastructure.infrastructure_id,
            operation=operation,
            **kwargs,
        )
        self.drive_arrays.append(da)
        return da

    # -------------------------------------------------------------------------
    # Commands and I/O
    # -------------------------------------------------------------------------

    def command(self, **arguments) -> Command:
        """Command whose argument bag holds the given values (None = absent)."""
        return Command(arguments={k: ArgValue.wrap(v) for k, v in arguments.items()})

    def console(self, stdin: str = "") -> Console:
        """Console reading from the given text, writing to a StringIO."""
        return Console(stdin=io.StringIO(stdin), stdout=io.StringIO(), suppress_prompts=False)


# =============================================================================
# Client factories (api.client_factory targets)
# =============================================================================

# Client handed out by client_factory(); tests set it with monkeypatch
CURRENT_CLIENT: Optional[MetalCloudClient] = None

# (api_config, endpoint) of every client_factory() call
FACTORY_CALLS: List[tuple] = []


def client_factory(api_config, endpoint: str) -> Optional[MetalCloudClient]:
    """Use as api.client_factory = "tests.factories:client_factory"."""
    FACTORY_CALLS.append((api_config, endpoint))
    return CURRENT_CLIENT


def not_a_client_factory(api_config, endpoint: str) -> object:
    return object()
