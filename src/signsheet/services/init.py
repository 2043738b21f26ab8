"""InitService: lay down signsheet.toml and an empty database.

Static because it runs before any store exists; it builds the store
from settings resolved against the new root.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from signsheet.config.discovery import CONFIG_FILENAME
from signsheet.config.settings import SignSheetSettings
from signsheet.infrastructure.store import SheetStore
from signsheet.services.result import ServiceResult, failure

logger = logging.getLogger(__name__)


def _render_config(default_owner: str | None) -> str:
    lines = [
        "# signsheet configuration. Only overrides belong here;",
        "# every key has a built-in default.",
        "",
        "[sheet]",
    ]
    if default_owner:
        # JSON string escaping is valid TOML basic-string escaping.
        lines.append(f"default_owner = {json.dumps(default_owner)}")
    else:
        lines.append('# default_owner = "default"')
    lines.append("")
    return "\n".join(lines)


class InitService:
    """Create a new signsheet root."""

    @staticmethod
    def init_store(root: Path, *, default_owner: str | None = None) -> ServiceResult:
        op = "init"
        config_path = root / CONFIG_FILENAME
        if config_path.exists():
            return failure(
                op,
                "ALREADY_INITIALIZED",
                f"{config_path} already exists",
                path=str(config_path),
            )

        root.mkdir(parents=True, exist_ok=True)
        config_path.write_text(_render_config(default_owner), encoding="utf-8")

        settings = SignSheetSettings.from_cli(config_path=str(config_path), root=root)
        store = SheetStore(settings)
        store.close()
        logger.info("Initialized signsheet root at %s", root)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "root": str(root),
                "config": str(config_path),
                "database": str(settings.db_path),
                "default_owner": settings.sheet.default_owner,
            },
        )
