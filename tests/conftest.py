"""
Shared pytest fixtures for the metalcloud-cli test suite.

Usage in tests:
    def test_something(factory):
        infra = factory.add_infrastructure("prod")
        cmd = factory.command(infrastructure_id_or_label="prod", format="json")
        out = infrastructure_get_cmd(cmd, factory.client)
"""

import pytest

from metalcloud_cli.commands import reset_registry
from metalcloud_cli.config import ApiConfig, Config, set_config
from metalcloud_cli.console import reset_console
from metalcloud_cli.log import configure_logging
from tests import factories
from tests.factories import TEST_USER, MetalCloudTestFactory


@pytest.fixture(autouse=True)
def isolated_state():
    """
    Give every test a known configuration and fresh process defaults.

    Default table titles name TEST_USER; nothing is read from ~/.metalcloud.
    """
    set_config(Config(api=ApiConfig(user_email=TEST_USER)))
    configure_logging()
    yield
    set_config(None)
    reset_console()
    reset_registry()
    factories.CURRENT_CLIENT = None
    factories.FACTORY_CALLS.clear()


@pytest.fixture
def factory():
    """
    Create an empty MetalCloudTestFactory.

    Example:
        def test_list(factory):
            factory.add_variable("a")
            out = variables_list_cmd(factory.command(format="json"), factory.client)
    """
    return MetalCloudTestFactory()


@pytest.fixture
def client(factory):
    """The factory's mock MetalCloudClient."""
    return factory.client
