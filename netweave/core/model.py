"""Enhanced BaseModel with rich display capabilities."""

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table
from rich.tree import Tree


class DisplayModel(BaseModel):
    def display(self, console: Console | None = None, title: str | None = None) -> None:
        """Display the model as a formatted table."""

        if console is None:
            console = Console()

        table = Table(title=title or self.__class__.__name__, show_header=True)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="green")

        for field_name, field_value in self._display_items().items():
            if field_value is not None:
                table.add_row(field_name, self._format_value(field_value))

        console.print(table)

    def display_tree(self, console: Console | None = None, title: str | None = None) -> None:
        """Display the model as a tree structure."""

        if console is None:
            console = Console()

        tree = Tree(f"[bold]{title or self.__class__.__name__}[/bold]")
        self._build_tree(tree, self._display_items())
        console.print(tree)

    def _display_items(self) -> dict[str, Any]:
        """Fields, extras and computed fields, in that order."""

        items = dict(self)
        for name in type(self).model_computed_fields:
            items[name] = getattr(self, name)
        return items

    @classmethod
    def display_many(
        cls,
        items: Iterable["DisplayModel"],
        columns: Sequence[str],
        console: Console | None = None,
        title: str | None = None,
    ) -> None:
        """Display a collection of models as one table, one row per model."""

        if console is None:
            console = Console()

        table = Table(title=title or cls.__name__, show_header=True)
        for column in columns:
            table.add_column(column, style="cyan" if column == columns[0] else None)

        for item in items:
            table.add_row(*(item._format_value(getattr(item, column, None)) for column in columns))

        console.print(table)

    def _format_value(self, value: Any) -> str:
        """Format a value for display."""

        if value is None:
            return ""
        if isinstance(value, Enum):
            return value.name if isinstance(value.value, int) else str(value.value)
        if isinstance(value, (list, tuple, set, frozenset)):
            if not value:
                return "[]"
            items = sorted(value, key=str) if isinstance(value, (set, frozenset)) else value
            if len(value) <= 3:
                return ", ".join(self._format_value(v) for v in items)
            return f"[{len(value)} items]"
        if isinstance(value, dict):
            if not value:
                return "{}"
            return f"{{{len(value)} keys}}"
        if isinstance(value, BaseModel):
            # value objects with their own text form (addresses) print as such
            if type(value).__str__ is not BaseModel.__str__:
                return str(value)
            return f"<{value.__class__.__name__}>"
        return str(value)

    def _build_tree(self, parent: Tree, data: dict[str, Any]) -> None:
        """Build a tree from nested data."""

        for key, value in data.items():
            if value is None:
                continue

            if isinstance(value, BaseModel) and type(value).__str__ is BaseModel.__str__:
                branch = parent.add(f"[cyan]{key}[/cyan]")
                self._build_tree(branch, dict(value))
            elif isinstance(value, (list, tuple)):
                if not value:
                    parent.add(f"[cyan]{key}[/cyan]: []")
                elif isinstance(value[0], BaseModel) and type(value[0]).__str__ is BaseModel.__str__:
                    branch = parent.add(f"[cyan]{key}[/cyan] [{len(value)} items]")
                    for i, item in enumerate(value):
                        item_branch = branch.add(f"[dim]{i}[/dim]")
                        self._build_tree(item_branch, dict(item))
                else:
                    parent.add(f"[cyan]{key}[/cyan]: {', '.join(self._format_value(v) for v in value)}")
            elif isinstance(value, dict):
                if not value:
                    parent.add(f"[cyan]{key}[/cyan]: {{}}")
                else:
                    branch = parent.add(f"[cyan]{key}[/cyan]")
                    for k, v in value.items():
                        branch.add(f"[dim]{k}[/dim]: {v}")
            else:
                parent.add(f"[cyan]{key}[/cyan]: [green]{self._format_value(value)}[/green]")
