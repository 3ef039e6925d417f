"""
Command — A (subject, predicate) pair bound to its flags and executor

Each entity module declares a list of Command records:

    Command(
        description="Lists available variables",
        subject="variable", alt_subject="var",
        predicate="list", alt_predicate="ls",
        flags=[FORMAT_FLAG, Flag("usage", "usage", ArgKind.STR, "Variable's usage")],
        execute=variables_list_cmd,
    )

The front end matches argv[1:3] against subject/predicate, then calls
init() with the remaining argv to fill `arguments`, then run().
"""

import argparse
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

import structlog

from ..core.arguments import ArgKind, ArgValue

if TYPE_CHECKING:
    from ..api.client import MetalCloudClient
    from ..console import Console

logger = structlog.get_logger()


# API endpoint a command is served by (passed to the client factory)
EXTENDED_ENDPOINT = "extended"


@dataclass
class Flag:
    """
    Declaration of one command line flag.

    Attributes:
        name: Flag as typed by the user, without dashes (e.g. "return-id")
        key: Internal argument key (e.g. "return_id")
        kind: ArgKind.INT, ArgKind.STR or ArgKind.BOOL
        help: Help text
        negatable: BOOL only. Also accept --no-<name>; absent when neither is given
    """
    name: str
    key: str
    kind: ArgKind = ArgKind.STR
    help: str = ""
    negatable: bool = False


FORMAT_HELP = (
    "The output format. Supported values are 'json','csv'. "
    "The default format is human readable."
)

AUTOCONFIRM_HELP = "If true it does not ask for confirmation anymore"

RETURN_ID_HELP = "(Flag) If set will print the ID of the created object. Useful for automating tasks."


def format_flag() -> Flag:
    return Flag("format", "format", ArgKind.STR, FORMAT_HELP)


def autoconfirm_flag() -> Flag:
    return Flag("autoconfirm", "autoconfirm", ArgKind.BOOL, AUTOCONFIRM_HELP)


def return_id_flag() -> Flag:
    return Flag("return-id", "return_id", ArgKind.BOOL, RETURN_ID_HELP)


ExecuteFunc = Callable[["Command", "MetalCloudClient", Optional["Console"]], str]


@dataclass
class Command:
    """A CLI command: identifiers, flag declarations, executor and parsed arguments."""
    description: str = ""
    subject: str = ""
    alt_subject: str = ""
    predicate: str = ""
    alt_predicate: str = ""
    flags: List[Flag] = field(default_factory=list)
    execute: Optional[ExecuteFunc] = None
    arguments: Dict[str, ArgValue] = field(default_factory=dict)
    endpoint: str = EXTENDED_ENDPOINT

    @property
    def name(self) -> str:
        return f"{self.subject} {self.predicate}"

    def matches(self, subject: str, predicate: str) -> bool:
        """True if subject/predicate name this command (primary or alternate)."""
        return (
            subject in (self.subject, self.alt_subject)
            and predicate in (self.predicate, self.alt_predicate)
        )

    def build_parser(self) -> argparse.ArgumentParser:
        """Create the argparse parser for this command's flags."""
        parser = argparse.ArgumentParser(
            prog=f"metalcloud-cli {self.subject} {self.predicate}",
            description=self.description,
            allow_abbrev=False,
        )

        for flag in self.flags:
            option = f"--{flag.name}"
            if flag.kind is ArgKind.BOOL and flag.negatable:
                parser.add_argument(option, dest=flag.key, action=argparse.BooleanOptionalAction,
                                    default=None, help=flag.help)
            elif flag.kind is ArgKind.BOOL:
                parser.add_argument(option, dest=flag.key, action="store_true", help=flag.help)
            elif flag.kind is ArgKind.INT:
                parser.add_argument(option, dest=flag.key, type=int, default=None, help=flag.help)
            else:
                parser.add_argument(option, dest=flag.key, default=None, help=flag.help)

        return parser

    def init(self, argv: List[str]) -> "Command":
        """
        Parse argv into `arguments`.

        Every declared flag gets an entry: ABSENT when not given, the typed
        value otherwise. Plain booleans are always present; negatable ones are
        ABSENT unless --<name> or --no-<name> is given.

        Raises:
            SystemExit: On usage errors (argparse)
        """
        namespace = self.build_parser().parse_args(argv)
        self.arguments = {
            flag.key: ArgValue.wrap(getattr(namespace, flag.key))
            for flag in self.flags
        }
        return self

    def run(self, client: "MetalCloudClient", console: Optional["Console"] = None) -> str:
        """Execute the command and return the text to print."""
        logger.debug("command_dispatched", command=self.name, endpoint=self.endpoint)
        return self.execute(self, client, console)


def same_command(a: Command, b: Command) -> bool:
    """True if both commands have the same four identifiers."""
    return (
        a.subject == b.subject
        and a.alt_subject == b.alt_subject
        and a.predicate == b.predicate
        and a.alt_predicate == b.alt_predicate
    )
