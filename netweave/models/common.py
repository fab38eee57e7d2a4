import os
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import yaml
from pydantic import StringConstraints, ValidationError


if TYPE_CHECKING:
    from .config import ClientSettings


BackendURL = Annotated[str, StringConstraints(pattern=r"^https?://\S+$")]

ENV_OVERRIDES = {
    "NETWEAVE_URL": "url",
    "NETWEAVE_TOKEN": "token",
}


def load_settings(path: str | Path | None = None, **overrides: Any) -> "ClientSettings":
    """Load YAML -> ClientSettings (Pydantic).

    Values are layered: file, then ``NETWEAVE_*`` environment variables, then
    explicit overrides that are not ``None``.
    """

    from .config import ClientSettings

    data: dict[str, Any] = {}
    if path is not None:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise SystemExit(f"[Settings Validation Error]\n{path}: expected a mapping at the top level")

    for env_name, key in ENV_OVERRIDES.items():
        if env_name in os.environ:
            data[key] = os.environ[env_name]

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ClientSettings(**data)
    except ValidationError as ve:
        raise SystemExit(f"[Settings Validation Error]\n{ve}") from ve
