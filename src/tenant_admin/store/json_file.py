"""Config store backed by a JSON file on disk."""

import asyncio
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from tenant_admin.common.exceptions import ConfigReadError, ConfigWriteError
from tenant_admin.common.merge import deep_merge
from tenant_admin.store.base import ConfigStore

logger = logging.getLogger(__name__)


class JsonFileConfigStore(ConfigStore):
    """Reads and writes the gateway's JSON config file.

    Writes go to a temp file in the same directory and are then moved over
    the target with ``os.replace``, which is atomic on POSIX and Windows.
    """

    def __init__(self, path: str | Path, indent: int = 2):
        # a symlinked config keeps its link; the target file is rewritten
        self.path = Path(path).expanduser().resolve()
        self.indent = indent

    def _read_sync(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ConfigReadError(f"Config file not found: {self.path}", cause=e) from e
        except OSError as e:
            raise ConfigReadError(f"Could not read {self.path}: {e}", cause=e) from e
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigReadError(f"Invalid JSON in {self.path}: {e}", cause=e) from e
        if not isinstance(document, dict):
            raise ConfigReadError(f"Config root in {self.path} must be an object")
        return document

    def _write_sync(self, document: dict[str, Any]) -> None:
        try:
            # ASCII escapes keep lone surrogates in prompts writable as UTF-8
            payload = json.dumps(document, indent=self.indent, ensure_ascii=True)
        except (TypeError, ValueError) as e:
            raise ConfigWriteError(f"Config is not JSON serializable: {e}", cause=e) from e

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.write("\n")
                fh.flush()
                os.fsync(fh.fileno())
            # mkstemp creates 0600; the gateway may run as another user
            if self.path.exists():
                os.chmod(tmp_name, stat.S_IMODE(self.path.stat().st_mode))
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, ValueError) as e:
            raise ConfigWriteError(f"Could not write {self.path}: {e}", cause=e) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        logger.debug("Wrote config to %s", self.path)

    async def read(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._read_sync)

    async def write(self, document: dict[str, Any]) -> None:
        await asyncio.to_thread(self._write_sync, document)

    async def patch(self, partial: dict[str, Any]) -> None:
        try:
            current = await self.read()
        except ConfigReadError as e:
            raise ConfigWriteError(f"Could not load config to patch: {e.message}", cause=e) from e
        await self.write(deep_merge(current, partial))
