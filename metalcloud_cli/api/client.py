"""
API Client — Interface to the provisioning API

The CLI does not speak HTTP itself. It talks to a MetalCloudClient, and the
concrete implementation (an SDK wrapper) is loaded from configuration:

    api:
      client_factory: "mypackage.sdk:make_client"

The factory is called with the ApiConfig and the endpoint the command is
served by (every command uses "extended") and must return a MetalCloudClient.
Errors raised by the client are passed through to the user unchanged.
"""

import importlib
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, List

from ..errors import ConfigError
from .models import (
    DriveArray,
    Infrastructure,
    InstanceArray,
    OSAsset,
    OSTemplate,
    ShutdownOptions,
    Variable,
)

if TYPE_CHECKING:
    from ..config import ApiConfig


class MetalCloudClient(ABC):
    """One method per remote operation the commands use."""

    # -------------------------------------------------------------------------
    # Variables
    # -------------------------------------------------------------------------

    @abstractmethod
    def variables(self, usage: str = "") -> List[Variable]:
        """List variables, optionally filtered by usage."""

    @abstractmethod
    def variable_get(self, variable_id: int) -> Variable:
        pass

    @abstractmethod
    def variable_create(self, variable: Variable) -> Variable:
        pass

    @abstractmethod
    def variable_delete(self, variable_id: int) -> None:
        pass

    # -------------------------------------------------------------------------
    # OS assets
    # -------------------------------------------------------------------------

    @abstractmethod
    def os_assets(self) -> List[OSAsset]:
        pass

    @abstractmethod
    def os_asset_get(self, os_asset_id: int) -> OSAsset:
        pass

    @abstractmethod
    def os_asset_create(self, asset: OSAsset) -> OSAsset:
        pass

    @abstractmethod
    def os_asset_delete(self, os_asset_id: int) -> None:
        pass

    # -------------------------------------------------------------------------
    # OS templates
    # -------------------------------------------------------------------------

    @abstractmethod
    def os_templates(self) -> List[OSTemplate]:
        pass

    @abstractmethod
    def os_template_get(self, template_id: int, decrypt_passwd: bool = False) -> OSTemplate:
        """Fetch a template; credentials are only decrypted on request."""

    @abstractmethod
    def os_template_create(self, template: OSTemplate) -> OSTemplate:
        pass

    @abstractmethod
    def os_template_update(self, template_id: int, template: OSTemplate) -> OSTemplate:
        pass

    @abstractmethod
    def os_template_delete(self, template_id: int) -> None:
        pass

    @abstractmethod
    def os_template_add_os_asset(self, template_id: int, os_asset_id: int, path: str) -> None:
        """Serve an asset at a path during deploys of the template."""

    @abstractmethod
    def os_template_os_assets(self, template_id: int) -> Dict[str, OSAsset]:
        """Assets associated to a template, keyed by path."""

    # -------------------------------------------------------------------------
    # Infrastructures
    # -------------------------------------------------------------------------

    @abstractmethod
    def infrastructures(self) -> List[Infrastructure]:
        pass

    @abstractmethod
    def infrastructure_get(self, infrastructure_id: int) -> Infrastructure:
        pass

    @abstractmethod
    def infrastructure_create(self, infrastructure: Infrastructure) -> Infrastructure:
        pass

    @abstractmethod
    def infrastructure_delete(self, infrastructure_id: int) -> None:
        pass

    @abstractmethod
    def infrastructure_deploy(
        self,
        infrastructure_id: int,
        shutdown_options: ShutdownOptions,
        allow_data_loss: bool,
        skip_ansible: bool,
    ) -> None:
        pass

    @abstractmethod
    def infrastructure_operation_cancel(self, infrastructure_id: int) -> None:
        """Revert all changes not yet deployed."""

    # -------------------------------------------------------------------------
    # Instance and drive arrays
    # -------------------------------------------------------------------------

    @abstractmethod
    def instance_arrays(self, infrastructure_id: int) -> List[InstanceArray]:
        pass

    @abstractmethod
    def instance_array_get(self, instance_array_id: int) -> InstanceArray:
        pass

    @abstractmethod
    def drive_arrays(self, infrastructure_id: int) -> List[DriveArray]:
        pass

    @abstractmethod
    def drive_array_get(self, drive_array_id: int) -> DriveArray:
        pass


def load_client(api_config: "ApiConfig", endpoint: str = "") -> MetalCloudClient:
    """
    Create the API client named by api.client_factory.

    Args:
        api_config: API section of the configuration
        endpoint: Endpoint suffix the command is served by

    Returns:
        Client returned by the factory

    Raises:
        ConfigError: If no factory is configured, it cannot be imported,
            or it does not return a MetalCloudClient
    """
    target = api_config.client_factory
    if not target:
        raise ConfigError(
            "No API client configured. Set api.client_factory in "
            "~/.metalcloud/config.yaml or METALCLOUD_CLIENT_FACTORY (format: module:callable)"
        )

    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"Invalid client factory '{target}'. Use 'module:callable'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Could not import client factory module '{module_name}': {e}") from e

    factory = getattr(module, attr, None)
    if factory is None or not callable(factory):
        raise ConfigError(f"'{attr}' in '{module_name}' is not callable")

    client = factory(api_config, endpoint)
    if not isinstance(client, MetalCloudClient):
        raise ConfigError(f"Client factory '{target}' did not return a MetalCloudClient")

    return client
