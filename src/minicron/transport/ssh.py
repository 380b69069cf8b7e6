"""SSH transport backed by paramiko."""

from __future__ import annotations

import logging
import socket
from typing import TYPE_CHECKING

import paramiko

from minicron.crontab.errors import ExecutionError

if TYPE_CHECKING:
    from minicron.config.settings import Settings

logger = logging.getLogger(__name__)


class SSHChannel:
    """One authenticated SSH connection; every ``execute`` opens a new exec session."""

    def __init__(self, client: paramiko.SSHClient, host: str, command_timeout: float) -> None:
        self._client = client
        self._host = host
        self._command_timeout = command_timeout

    def execute(self, command: str) -> str:
        """Run ``command`` remotely and return stdout decoded as UTF-8.

        Stdout is decoded strictly: output that is not valid UTF-8 cannot be
        written back unchanged, so it fails the command instead.
        """
        try:
            _, stdout, stderr = self._client.exec_command(
                command, timeout=self._command_timeout
            )
            raw = stdout.read()
            err = stderr.read().decode("utf-8", errors="replace")
        except (paramiko.SSHException, socket.timeout, OSError) as exc:
            msg = f"Failed to run command on {self._host}: {exc}"
            raise ExecutionError(msg) from exc

        try:
            out = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Output from {self._host} is not valid UTF-8: {exc}"
            raise ExecutionError(msg) from exc

        if err.strip():
            logger.debug("stderr from %s: %s", self._host, err.strip())
        return out

    def close(self) -> None:
        self._client.close()
        logger.debug("Closed SSH connection to %s", self._host)

    def __enter__(self) -> SSHChannel:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class SSHTransport:
    """Opens :class:`SSHChannel` connections to a single host."""

    def __init__(
        self,
        host: str,
        port: int = 22,
        username: str = "root",
        password: str | None = None,
        key_filename: str | None = None,
        connect_timeout: float = 15,
        command_timeout: float = 30,
        strict_host_keys: bool = False,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self._password = password
        self._key_filename = key_filename
        self._connect_timeout = connect_timeout
        self._command_timeout = command_timeout
        self._strict_host_keys = strict_host_keys

    @classmethod
    def from_settings(cls, settings: Settings, host: str | None = None) -> SSHTransport:
        """Build a transport from settings, optionally overriding the host."""
        target = host or settings.ssh_host
        if not target:
            msg = "No SSH host configured (set SSH_HOST or pass a host)"
            raise ValueError(msg)
        return cls(
            host=target,
            port=settings.ssh_port,
            username=settings.ssh_user,
            password=settings.ssh_password or None,
            key_filename=settings.ssh_key_file or None,
            connect_timeout=settings.ssh_connect_timeout,
            command_timeout=settings.ssh_command_timeout,
            strict_host_keys=settings.ssh_strict_host_keys,
        )

    def open(self) -> SSHChannel:
        """Connect and authenticate.

        Raises:
            ExecutionError: If the connection or authentication fails.
        """
        client = paramiko.SSHClient()
        client.load_system_host_keys()
        if self._strict_host_keys:
            client.set_missing_host_key_policy(paramiko.RejectPolicy())
        else:
            client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            client.connect(
                self.host,
                port=self.port,
                username=self.username,
                password=self._password,
                key_filename=self._key_filename,
                timeout=self._connect_timeout,
            )
        except (paramiko.SSHException, socket.timeout, OSError) as exc:
            client.close()
            msg = f"Unable to connect to {self.username}@{self.host}:{self.port}: {exc}"
            raise ExecutionError(msg) from exc

        logger.debug("Opened SSH connection to %s@%s:%d", self.username, self.host, self.port)
        return SSHChannel(client, self.host, self._command_timeout)
