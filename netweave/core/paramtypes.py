"""Custom Click paramtypes with shell completion support."""

from pathlib import Path

import click
from click.shell_completion import CompletionItem


class YamlFileType(click.ParamType):
    """An existing ``.yaml``/``.yml`` file; ``kind`` names it in error messages."""

    name = "yaml_file"

    def __init__(self, kind: str = "YAML") -> None:
        super().__init__()
        self.kind = kind

    def shell_complete(self, ctx: click.Context, param: click.Parameter, incomplete: str) -> list[CompletionItem]:
        """Provide shell completion for YAML files."""

        path = Path(incomplete).expanduser() if incomplete else Path(".")
        parent = path.parent if path.name else path
        if not parent.exists():
            parent = Path(".")

        completions = []
        try:
            for item in parent.iterdir():
                if item.is_file() and item.suffix.lower() in (".yaml", ".yml"):
                    name = item.name
                    if incomplete and not name.startswith(Path(incomplete).name):
                        continue
                    completions.append(CompletionItem(name))
                elif item.is_dir() and (not incomplete or item.name.startswith(Path(incomplete).name)):
                    completions.append(CompletionItem(f"{item.name}/"))
        except PermissionError:
            pass

        return completions

    def convert(self, value: str, param: click.Parameter | None, ctx: click.Context | None) -> str:
        """Validate the file path."""

        path = Path(value).expanduser()
        if not path.exists():
            self.fail(f"{self.kind} file does not exist: {value}", param, ctx)
        if not path.is_file():
            self.fail(f"Path is not a file: {value}", param, ctx)
        if path.suffix.lower() not in (".yaml", ".yml"):
            self.fail(f"{self.kind} file must be a YAML file (.yaml or .yml): {value}", param, ctx)
        return str(path)


class SecurityType(click.Choice):
    """Wireless key management accepted by ``connect``."""

    name = "security"

    def __init__(self) -> None:
        super().__init__(["none", "owe", "ieee8021x", "wpa-psk", "sae", "wpa-eap", "wpa-eap-suite-b192"])
