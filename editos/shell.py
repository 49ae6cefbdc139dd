"""A minimal command shell reading lines from a terminal."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NoReturn

from editos.system import reboot, shutdown

_SEPARATORS = re.compile(r"[ \t]+")

SYS_OPT_REBOOT = "reboot"
SYS_OPT_SHUTDOWN = "shutdown"


@dataclass
class CommandContext:
    """What a command sees when it runs."""

    shell: Shell
    tty: Any
    argv: list[str]

    @property
    def argc(self) -> int:
        return len(self.argv)


@dataclass(frozen=True)
class Command:
    name: str
    help: str
    fn: Callable[[CommandContext], int]


class Shell:
    """Reads lines, splits them into words and runs the named command."""

    MAX_COMMANDS = 32
    MAX_ARGS = 32

    def __init__(self, tty: Any) -> None:
        self._tty = tty
        self._cmds: list[Command] = []
        self.prompt = "/>"

    @property
    def tty(self) -> Any:
        return self._tty

    @property
    def commands(self) -> tuple[Command, ...]:
        """Registered commands in registration order."""
        return tuple(self._cmds)

    def register_command(self, cmd: Command) -> None:
        """Add a command; raises OverflowError once MAX_COMMANDS are registered."""
        if len(self._cmds) >= self.MAX_COMMANDS:
            raise OverflowError(f"at most {self.MAX_COMMANDS} commands can be registered")
        self._cmds.append(cmd)

    def register_builtin_commands(self) -> None:
        self.register_command(Command("help", "List available commands", cmd_help))
        self.register_command(Command("echo", "Echo arguments", cmd_echo))
        self.register_command(
            Command(
                "sys",
                "Control system \n"
                "sys [COMMAND]\n"
                "Commands:\n"
                "    reboot\n"
                "    shutdown",
                cmd_sys,
            )
        )

    def run(self) -> NoReturn:
        """Read and execute lines until reading raises."""
        while True:
            self.execute_line(self._tty.readline(self.prompt))

    def set_prompt(self, prompt: str) -> None:
        self.prompt = prompt

    def find_cmd(self, name: str) -> Command | None:
        if not name:
            return None
        return next((cmd for cmd in self._cmds if cmd.name == name), None)

    def execute_line(self, line: str) -> int | None:
        """Run one line; return the command's status, or None if nothing ran."""
        argv = [word for word in _SEPARATORS.split(line) if word][: self.MAX_ARGS]
        if not argv:
            return None

        cmd = self.find_cmd(argv[0])
        if cmd is None:
            self._tty.write("Unknown command: ")
            self._tty.write_line(argv[0])
            return None

        return cmd.fn(CommandContext(self, self._tty, argv))


def cmd_help(ctx: CommandContext) -> int:
    ctx.tty.write_line("Available commands:")
    for cmd in ctx.shell.commands:
        ctx.tty.write(cmd.name)
        if cmd.help:
            ctx.tty.write_line(" - ")
            ctx.tty.write(cmd.help)
        ctx.tty.write_line("\n\n")
    return 0


def cmd_echo(ctx: CommandContext) -> int:
    args = ctx.argv[1:]
    for i, arg in enumerate(args):
        ctx.tty.write(arg)
        if i + 1 < len(args):
            ctx.tty.write(" ")
    ctx.tty.write_char("\n")
    return 0


def cmd_sys(ctx: CommandContext) -> int:
    """Reboot or power off; any prefix of an option selects it."""
    if ctx.argc != 2:
        return 1

    opt = ctx.argv[1]
    if SYS_OPT_REBOOT.startswith(opt):
        ctx.tty.write_line("Reboot...")
        reboot()
    elif SYS_OPT_SHUTDOWN.startswith(opt):
        ctx.tty.write_line("Shutdown...")
        shutdown()
    return 1