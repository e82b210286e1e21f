"""Reload notifier that shells out to the gateway's own CLI."""

import asyncio
import json
import logging
import shlex

from tenant_admin.common.exceptions import GatewayError
from tenant_admin.gateway.base import GatewayStatus, ReloadNotifier

logger = logging.getLogger(__name__)


class CommandReloadNotifier(ReloadNotifier):
    """Runs e.g. ``openclaw gateway restart`` on the local machine."""

    def __init__(
        self,
        restart_command: str = "openclaw gateway restart",
        status_command: str = "openclaw gateway status --json",
        timeout: float = 10.0,
    ):
        self.restart_command = shlex.split(restart_command)
        self.status_command = shlex.split(status_command)
        self.timeout = timeout

    async def _run(self, argv: list[str]) -> tuple[int, str, str]:
        """Run a command, returning (returncode, stdout, stderr)."""
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise GatewayError(f"Could not run '{shlex.join(argv)}': {e}", cause=e) from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            proc.kill()
            await proc.wait()
            raise GatewayError(
                f"'{shlex.join(argv)}' timed out after {self.timeout}s", cause=e
            ) from e
        return proc.returncode, stdout.decode(errors="replace"), stderr.decode(errors="replace")

    async def restart(self) -> None:
        returncode, _, stderr = await self._run(self.restart_command)
        if returncode != 0:
            logger.error("Gateway restart exited with %s: %s", returncode, stderr.strip())
            raise GatewayError(
                f"Gateway restart failed (exit {returncode}): {stderr.strip()}"
            )
        logger.info("Gateway restarted")

    async def health(self) -> GatewayStatus:
        returncode, stdout, _ = await self._run(self.status_command)
        try:
            data = json.loads(stdout)
        except json.JSONDecodeError:
            return GatewayStatus(running=returncode == 0)
        if not isinstance(data, dict):
            return GatewayStatus(running=returncode == 0)
        return GatewayStatus(
            running=bool(data.get("running", returncode == 0)),
            uptime=data.get("uptime"),
            version=data.get("version"),
        )
