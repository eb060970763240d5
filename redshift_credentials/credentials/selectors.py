"""Strategies for choosing one Redshift target out of several.

A selector receives the candidate lines (``"[1] name\\tkind\\taddress"``) and
returns exactly one of them unchanged. Any callable with that shape works;
the two implementations here cover the command line tool:

- :class:`PromptSelector` asks on the terminal.
- :class:`CommandSelector` pipes the lines through a filter command such as
  ``peco`` or ``fzf``.
"""

import shlex
import subprocess
import sys
from typing import Callable, List, Optional, Protocol, Sequence, TextIO, Union

from redshift_credentials.common.utils import interruptible
from redshift_credentials.credentials.exceptions import SelectionFailedError


class Selector(Protocol):
    """Protocol for choosing one line out of the candidate lines."""

    def select(self, lines: Sequence[str]) -> str:
        """
        Return one of ``lines`` verbatim.

        Raises:
            Exception: If no choice could be made.
        """
        ...


SelectorLike = Union[Selector, Callable[[Sequence[str]], str]]


def match_lines(lines: Sequence[str], text: str) -> List[str]:
    """
    Find the lines matching user input.

    An exact match wins outright; otherwise every line starting with
    ``text`` or with ``[text]`` matches.

    Example:
        >>> match_lines(["[1] a\\tprovisioned cluster", "[2] b\\tserverless workgroup"], "2")
        ['[2] b\\tserverless workgroup']
    """
    found: List[str] = []
    for line in lines:
        if line == text:
            return [line]
        if line.startswith(text) or line.startswith(f"[{text}]"):
            found.append(line)
    return found


def read_line(prompt: str) -> str:
    """Prompt on stderr and read one line from stdin, keeping stdout clean for eval.

    Ctrl-C while waiting raises ``KeyboardInterrupt``.
    """
    print(prompt, end="", file=sys.stderr, flush=True)
    with interruptible():
        line = sys.stdin.readline()
    if not line:
        raise EOFError
    return line.rstrip("\n")


class PromptSelector:
    """Interactive selector that reads a number (or prefix) from the terminal."""

    title = "number"

    def __init__(
        self,
        input_func: Callable[[str], str] = read_line,
        output: Optional[TextIO] = None,
    ):
        self._input = input_func
        self._output = output

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stderr

    def select(self, lines: Sequence[str]) -> str:
        for line in lines:
            print(line, file=self.output)

        while True:
            try:
                text = self._input(f"Enter {self.title}: ").strip()
            except EOFError as e:
                raise SelectionFailedError("no selection was entered") from e
            if not text:
                continue

            found = match_lines(lines, text)
            if len(found) == 1:
                print(f"{self.title}={found[0]}", file=self.output)
                return found[0]
            if not found:
                print(f"no such item {text}", file=self.output)
            else:
                print(f"{text} is ambiguous", file=self.output)

    __call__ = select


class CommandSelector:
    """Selector that delegates to an external filter command.

    The candidate lines are written to the command's stdin, one per line, and
    its stdout (trailing newlines removed) is taken as the choice. Commands
    containing a space are run through ``sh -c``.
    """

    def __init__(self, command: str):
        self.command = command

    def _argv(self) -> List[str]:
        if " " in self.command:
            return ["sh", "-c", self.command]
        return shlex.split(self.command)

    def select(self, lines: Sequence[str]) -> str:
        try:
            with interruptible():
                completed = subprocess.run(
                    self._argv(),
                    input="\n".join(lines),
                    stdout=subprocess.PIPE,
                    stderr=None,
                    text=True,
                    check=True,
                )
        except (OSError, subprocess.CalledProcessError) as e:
            raise SelectionFailedError(
                f"failed to execute filter command, {e}"
            ) from e
        return completed.stdout.rstrip("\n")

    __call__ = select


def default_selector(filter_command: Optional[str] = None) -> Selector:
    """
    Pick the selector used by the command line tool.

    Args:
        filter_command: External filter command, usually from the ``FILTER``
            environment variable.

    Returns:
        Selector: A CommandSelector when a command is set, else a PromptSelector.
    """
    if filter_command:
        return CommandSelector(filter_command)
    return PromptSelector()
