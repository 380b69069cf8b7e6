"""Shared fixtures — an in-memory stand-in for a remote shell."""

from __future__ import annotations

import posixpath
import shlex
from typing import Callable

import pytest

CRONTAB = "/etc/crontab"


class FakeChannel:
    """Interprets the handful of shell commands the crontab protocol sends.

    Files live in ``self.files``. ``fail_if`` marks a simple command as failed
    (non-zero status, no output); ``write_filter`` rewrites content on its way
    to disk to simulate corruption.
    """

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = dict(files or {})
        self.writable: set[str] = {"/etc", CRONTAB}
        self.commands: list[str] = []
        self.fail_if: Callable[[list[str]], bool] = lambda argv: False
        self.write_filter: Callable[[str], str] = lambda content: content
        self.closed = False

    # -- Channel protocol ---------------------------------------------------

    def execute(self, command: str) -> str:
        self.commands.append(command)
        tokens = shlex.split(command)

        output = ""
        ok = True
        op = None
        segment: list[str] = []
        for token in [*tokens, None]:
            if token in ("&&", "||", None):
                should_run = op is None or (op == "&&") == ok
                if should_run:
                    ok, out = self._run(segment)
                    output += out
                op = token
                segment = []
            else:
                segment.append(token)
        return output

    def close(self) -> None:
        self.closed = True

    # -- Helpers ------------------------------------------------------------

    @property
    def crontab(self) -> str:
        return self.files.get(CRONTAB, "")

    def _run(self, argv: list[str]) -> tuple[bool, str]:
        if self.fail_if(argv):
            return False, ""

        name = argv[0]
        if name == "echo":
            return True, " ".join(argv[1:]) + "\n"
        if name == "cat":
            if argv[1] not in self.files:
                return False, ""
            return True, self.files[argv[1]]
        if name == "printf":
            content, redirect, path = argv[2], argv[3], argv[4]
            if posixpath.dirname(path) not in self.writable:
                return False, ""
            data = self.write_filter(content + "\n")
            if redirect == ">>":
                self.files[path] = self.files.get(path, "") + data
            else:
                self.files[path] = data
            return True, ""
        if name == "grep":
            text, path = argv[3], argv[4]
            matches = [
                line for line in self.files.get(path, "").splitlines() if text in line
            ]
            return bool(matches), "".join(f"{m}\n" for m in matches)
        if name == "mv":
            source, target = argv[1], argv[2]
            if source not in self.files:
                return False, ""
            self.files[target] = self.files.pop(source)
            return True, ""
        if name == "tail":
            lines = self.files.get(argv[3], "").splitlines()
            return True, (lines[-1] + "\n") if lines else ""
        if name == "test":
            flag, path = argv[1], argv[2]
            if flag == "-r":
                return path in self.files, ""
            return path in self.writable, ""
        raise AssertionError(f"Unexpected command: {argv}")


@pytest.fixture()
def fake_channel() -> FakeChannel:
    return FakeChannel({CRONTAB: ""})


@pytest.fixture()
def make_channel() -> Callable[..., FakeChannel]:
    """Build a FakeChannel whose crontab holds the given lines."""

    def _make(*lines: str) -> FakeChannel:
        content = "".join(f"{line}\n" for line in lines)
        return FakeChannel({CRONTAB: content})

    return _make
