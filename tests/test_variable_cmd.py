"""
Tests for variable commands — list, create, delete
"""

import io

import orjson
import pytest

from metalcloud_cli.api.models import Variable
from metalcloud_cli.commands.variable import (
    variable_create_cmd,
    variable_delete_cmd,
    variables_list_cmd,
)
from metalcloud_cli.console import Console
from metalcloud_cli.errors import (
    AmbiguousLabelError,
    ArgumentError,
    EntityNotFoundError,
    NotConfirmedError,
)


class TestVariablesList:
    """variable list"""

    def test_json_sorted_by_id(self, factory):
        factory.add_variable("second", variable_id=20)
        factory.add_variable("first", usage="bootloader", variable_id=10)

        out = variables_list_cmd(factory.command(format="json", usage=None), factory.client)

        records = orjson.loads(out)
        assert [r["ID"] for r in records] == [10, 20]
        assert records[0]["NAME"] == "first"
        assert records[0]["USAGE"] == "bootloader"
        assert list(records[0]) == ["ID", "NAME", "USAGE", "CREATED", "UPDATED"]

    def test_usage_passed_to_api(self, factory):
        factory.add_variable("a", usage="x")
        factory.add_variable("b", usage="y")

        out = variables_list_cmd(factory.command(format="json", usage="y"), factory.client)

        factory.client.variables.assert_called_once_with("y")
        assert [r["NAME"] for r in orjson.loads(out)] == ["b"]

    def test_text(self, factory):
        factory.add_variable("ssh_keys")

        out = variables_list_cmd(factory.command(format=None), factory.client)

        assert out.startswith("Variables I have access to as user user@example.com:\n")
        assert "ssh_keys" in out
        assert out.endswith("Total: 1 Variables\n\n")

    def test_csv_empty(self, factory):
        out = variables_list_cmd(factory.command(format="csv"), factory.client)
        assert out == "ID,NAME,USAGE,CREATED,UPDATED\n"


class TestVariableCreate:
    """variable create"""

    def test_from_pipe(self, factory):
        factory.client.variable_create.return_value = Variable(variable_id=55, name="v")
        cmd = factory.command(name="v", usage="template", read_content_from_pipe=True, return_id=True)

        out = variable_create_cmd(cmd, factory.client, factory.console('{"a": 1}'))

        assert out == "55"
        sent = factory.client.variable_create.call_args[0][0]
        assert sent.name == "v"
        assert sent.usage == "template"
        assert orjson.loads(sent.json) == '{"a": 1}'

    def test_from_prompt(self, factory):
        factory.client.variable_create.return_value = Variable(variable_id=1)
        console = factory.console("hello\n")
        cmd = factory.command(name="v", read_content_from_pipe=False, return_id=False)

        out = variable_create_cmd(cmd, factory.client, console)

        assert out == ""
        assert console.stdout.getvalue() == "Variable content:"
        assert factory.client.variable_create.call_args[0][0].json == '"hello"'

    def test_empty_content(self, factory):
        cmd = factory.command(name="v", read_content_from_pipe=True)

        with pytest.raises(ArgumentError, match="Content cannot be empty"):
            variable_create_cmd(cmd, factory.client, factory.console(""))

        factory.client.variable_create.assert_not_called()

    def test_binary_content_rejected(self, factory):
        console = Console(stdin=io.TextIOWrapper(io.BytesIO(b"\xff\xfe\x00binary")),
                          stdout=io.StringIO(), suppress_prompts=False)
        cmd = factory.command(name="v", read_content_from_pipe=True)

        with pytest.raises(ArgumentError, match="must be UTF-8 text"):
            variable_create_cmd(cmd, factory.client, console)

        factory.client.variable_create.assert_not_called()

    def test_name_required(self, factory):
        with pytest.raises(ArgumentError, match="--name is required"):
            variable_create_cmd(factory.command(name=None), factory.client, factory.console("x"))


class TestVariableDelete:
    """variable delete"""

    def test_by_name_autoconfirm(self, factory):
        v = factory.add_variable("ssh_keys")

        cmd = factory.command(variable_id_or_name="ssh_keys", autoconfirm=True)
        variable_delete_cmd(cmd, factory.client, factory.console())

        factory.client.variable_delete.assert_called_once_with(v.variable_id)

    def test_by_id_prompts(self, factory):
        v = factory.add_variable("ssh_keys", variable_id=42)
        console = factory.console("yes\n")

        variable_delete_cmd(factory.command(variable_id_or_name="42", autoconfirm=False),
                            factory.client, console)

        assert console.stdout.getvalue() == (
            'Deleting variable ssh_keys (42).  Are you sure? Type "yes" to continue:'
        )
        factory.client.variable_delete.assert_called_once_with(v.variable_id)

    def test_declined(self, factory):
        factory.add_variable("ssh_keys")

        with pytest.raises(NotConfirmedError):
            variable_delete_cmd(factory.command(variable_id_or_name="ssh_keys", autoconfirm=False),
                                factory.client, factory.console("no\n"))

        factory.client.variable_delete.assert_not_called()

    def test_ambiguous_name(self, factory):
        factory.add_variable("dup")
        factory.add_variable("dup")

        with pytest.raises(AmbiguousLabelError):
            variable_delete_cmd(factory.command(variable_id_or_name="dup", autoconfirm=True),
                                factory.client, factory.console())

        factory.client.variable_delete.assert_not_called()

    def test_unknown_name(self, factory):
        with pytest.raises(EntityNotFoundError):
            variable_delete_cmd(factory.command(variable_id_or_name="nope", autoconfirm=True),
                                factory.client, factory.console())
