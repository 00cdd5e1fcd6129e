"""deadref CLI - build a dead-reference registry from facts and query it."""
from typing import List

import typer
from rich.markup import escape
from rich.table import Table

from deadref.analyzer.elements import ClassRef, parse_element, parse_field, parse_method
from deadref.analyzer.reference_map import DeadReferenceMap
from deadref.config import __version__, get_config
from deadref.utils.logger import log_debug
from deadref.utils.safe_console import SafeConsole

app = typer.Typer(
    name="deadref",
    help="Query a frozen registry of dead classes, methods and fields",
    add_completion=False
)

_console = None


def get_console() -> SafeConsole:
    """Create the shared console on first use so config is read at run time."""
    global _console
    if _console is None:
        _console = SafeConsole(force_terminal=get_config().force_terminal or None)
    return _console


def build_registry(classes: List[str], methods: List[str], fields: List[str],
                   constructor_removed: List[str], delimiter: str) -> DeadReferenceMap:
    """Freeze command-line facts into a DeadReferenceMap.

    Args:
        classes: Dead class binary names
        methods: Dead methods in CLASS#NAME(SIG) notation
        fields: Dead fields in CLASS#FIELD notation
        constructor_removed: Classes whose constructor was stripped
        delimiter: Class/member separator for the notation

    Returns:
        Frozen registry with constructor-removed classes recorded

    Raises:
        ElementParseError: If a method or field fact is malformed
    """
    builder = DeadReferenceMap.builder()
    for class_id in classes or []:
        builder.add_dead_class(class_id)
    for text in methods or []:
        builder.add_dead_element(parse_method(text, delimiter))
    for text in fields or []:
        builder.add_dead_element(parse_field(text, delimiter))

    registry = builder.build()
    for class_id in constructor_removed or []:
        registry.add_constructor_removed_class(class_id)
    return registry


def _registry_from_options(classes, methods, fields, constructor_removed) -> DeadReferenceMap:
    console = get_console()
    try:
        return build_registry(classes, methods, fields, constructor_removed,
                              get_config().member_delimiter)
    except ValueError as e:
        console.error(str(e))
        raise typer.Exit(1)


@app.command()
def dump(
    classes: List[str] = typer.Option(None, "--class", "-c", help="Dead class binary name (repeatable)"),
    methods: List[str] = typer.Option(None, "--method", "-m", help="Dead method as CLASS#NAME(SIG) (repeatable)"),
    fields: List[str] = typer.Option(None, "--field", "-f", help="Dead field as CLASS#FIELD (repeatable)"),
):
    """Print the diagnostic dump of the registry built from the given facts."""
    console = get_console()
    registry = _registry_from_options(classes, methods, fields, None)

    if registry.is_empty():
        console.print("[bold green]Registry is empty: nothing is dead.[/bold green]")
        return

    console.print(str(registry), markup=False, highlight=False)


@app.command()
def query(
    elements: List[str] = typer.Argument(..., help="Elements to check: CLASS, CLASS#FIELD or CLASS#NAME(SIG)"),
    classes: List[str] = typer.Option(None, "--class", "-c", help="Dead class binary name (repeatable)"),
    methods: List[str] = typer.Option(None, "--method", "-m", help="Dead method as CLASS#NAME(SIG) (repeatable)"),
    fields: List[str] = typer.Option(None, "--field", "-f", help="Dead field as CLASS#FIELD (repeatable)"),
    constructor_removed: List[str] = typer.Option(None, "--constructor-removed", help="Class whose constructor was stripped (repeatable)"),
    fail_on_dead: bool = typer.Option(False, "--fail-on-dead", help="Exit with code 1 if any queried element is dead"),
):
    """Check whether each element would be skipped by code generation."""
    console = get_console()
    registry = _registry_from_options(classes, methods, fields, constructor_removed)
    delimiter = get_config().member_delimiter

    try:
        refs = [parse_element(text, delimiter) for text in elements]
    except ValueError as e:
        console.error(str(e))
        raise typer.Exit(1)

    table = Table(title="Dead Reference Query")
    table.add_column("Kind", style="cyan")
    table.add_column("Element", style="white")
    table.add_column("Verdict")
    table.add_column("Constructor Removed", style="dim")

    dead_count = 0
    for ref in refs:
        is_dead = registry.contains_element(ref)
        dead_count += is_dead
        if isinstance(ref, ClassRef):
            ctor = "yes" if registry.class_has_constructor_removed(ref.binary_name) else "no"
        else:
            ctor = "-"
        table.add_row(ref.kind, escape(ref.notation(delimiter)), console.verdict(is_dead), ctor)

    console.print(table)
    console.print(f"\n[bold yellow]Summary:[/bold yellow] {dead_count} of {len(refs)} element(s) dead")
    log_debug("query", f"{dead_count}/{len(refs)} dead against {registry!r}")

    if fail_on_dead and dead_count:
        raise typer.Exit(1)


@app.command()
def version():
    """Show the deadref version."""
    get_console().print(f"deadref {__version__}")


if __name__ == "__main__":
    app()
