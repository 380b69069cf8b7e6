"""Transport package — remote-execution channels."""

from __future__ import annotations

from typing import TYPE_CHECKING

from minicron.transport.base import Channel, Transport
from minicron.transport.ssh import SSHChannel, SSHTransport

if TYPE_CHECKING:
    from minicron.config.settings import Settings

__all__ = ["Channel", "SSHChannel", "SSHTransport", "Transport", "create_transport"]


def create_transport(settings: Settings, host: str | None = None) -> Transport:
    """Return the transport for ``host`` (defaults to ``settings.ssh_host``)."""
    return SSHTransport.from_settings(settings, host=host)
