"""Reload notifier interface."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


def _as_seconds(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, str)):
        try:
            seconds = float(value)
        except (ValueError, OverflowError):
            return None
        return seconds if math.isfinite(seconds) else None
    return None


@dataclass
class GatewayStatus:
    """Health of the running gateway process.

    ``uptime`` and ``version`` come from the gateway's own output; an uptime
    that is not a number of seconds is dropped.
    """

    running: bool
    uptime: Optional[float] = None
    version: Optional[str] = None

    def __post_init__(self):
        self.running = bool(self.running)
        self.uptime = _as_seconds(self.uptime)
        if self.version is not None:
            self.version = str(self.version)


class ReloadNotifier(ABC):
    """Makes a persisted config change take effect in the running gateway."""

    @abstractmethod
    async def restart(self) -> None:
        """
        Restart (or signal) the gateway so it reloads its config.

        Raises:
            GatewayError: If the gateway cannot be restarted
        """

    @abstractmethod
    async def health(self) -> GatewayStatus:
        """
        Report whether the gateway is running.

        Raises:
            GatewayError: If the gateway cannot be reached
        """


class NullReloadNotifier(ReloadNotifier):
    """Does nothing; for dry runs and setups where reload is external."""

    async def restart(self) -> None:
        return None

    async def health(self) -> GatewayStatus:
        return GatewayStatus(running=False)
