"""CLI for typedform."""

import json
import logging
import shutil
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from typed_form import __version__
from typed_form.coercion import FieldType, coerce_value
from typed_form.io import load_field_types, read_jsonl, write_jsonl
from typed_form.normalize import Normalizer
from typed_form.registry import (
    DEFAULT_SCHEMA_PATH,
    FieldTypeRegistry,
    SpecNotFoundError,
    SpecValidationError,
)
from typedform.config import (
    REGISTRY_CONFIG_KEY,
    REGISTRY_ENV_VAR,
    ConfigError,
    get_config_path,
    get_field_type_registry_path,
    get_registry_root,
    get_typedform_home,
)

app = typer.Typer(
    name="typedform",
    help="Typed field coercion for API payloads and forms.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"typedform version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
    ] = "WARNING",
) -> None:
    """typedform: Typed field coercion for API payloads and forms."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}", param_hint="--log-level")

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def init(
    source: Annotated[
        Path | None,
        typer.Option(
            "--from",
            "-f",
            help="Source directory containing field-type-registry",
        ),
    ] = None,
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing registry",
    ),
) -> None:
    """Initialize the typedform home directory and sync the registry.

    Creates:
      $TYPEDFORM_HOME/config.yaml
      $TYPEDFORM_HOME/registry/field-type-registry/

    Examples:
        typedform init --from /workspace/typedform
        typedform init  # Uses current directory
    """
    home = get_typedform_home()
    registry_root = get_registry_root()
    registry_dest = registry_root / "field-type-registry"

    if source is None:
        source = Path.cwd()
    source_registry = source / "field-type-registry"

    if not source_registry.exists():
        console.print(f"[red]Error:[/red] field-type-registry not found at {source_registry}")
        console.print("Use --from to specify source directory")
        raise typer.Exit(1)

    if registry_dest.exists() and not force:
        console.print(f"[yellow]Warning:[/yellow] Registry already exists at {registry_dest}")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    console.print(f"[bold]Initializing typedform at {home}[/bold]")
    registry_root.mkdir(parents=True, exist_ok=True)

    if registry_dest.exists():
        shutil.rmtree(registry_dest)
    shutil.copytree(source_registry, registry_dest)
    spec_count = len(list(registry_dest.glob("specs/*")))
    console.print(f"  [green]✓[/green] {spec_count} field type specs synced")

    config_path = get_config_path()
    with open(config_path, "w") as f:
        yaml.dump({REGISTRY_CONFIG_KEY: str(registry_dest)}, f, sort_keys=False)
    console.print(f"  [green]✓[/green] Created config at {config_path}")


def _load_spec_field_types(
    spec_id: str,
    spec_version: str | None,
    registry: Path | None,
) -> dict[str, FieldType]:
    try:
        registry_path = get_field_type_registry_path(registry)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not registry_path.exists():
        console.print(f"[red]Error:[/red] Field type registry not found: {registry_path}")
        raise typer.Exit(1)

    field_registry = FieldTypeRegistry(registry_path, schema_path=DEFAULT_SCHEMA_PATH)
    try:
        if spec_version:
            spec = field_registry.get(spec_id, spec_version)
        else:
            spec = field_registry.get_latest(spec_id)
    except (SpecNotFoundError, SpecValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Loaded spec:[/green] {spec.spec_id}@{spec.version}")
    return spec.fields


@app.command()
def normalize(
    input_path: Annotated[
        Path,
        typer.Option("--in", "-i", help="Input JSONL file path"),
    ],
    output_path: Annotated[
        Path,
        typer.Option("--out", "-o", help="Output JSONL file path"),
    ],
    spec: Annotated[
        str | None,
        typer.Option("--spec", "-s", help="Field type spec ID from the registry"),
    ] = None,
    spec_version: Annotated[
        str | None,
        typer.Option("--spec-version", help="Field type spec version (default: latest)"),
    ] = None,
    types_path: Annotated[
        Path | None,
        typer.Option("--types", "-t", help="JSON or YAML file with a field type map"),
    ] = None,
    registry: Annotated[
        Path | None,
        typer.Option(
            "--registry",
            envvar=REGISTRY_ENV_VAR,
            help="Path to the field type registry",
        ),
    ] = None,
    diagnostics: Annotated[
        Path | None,
        typer.Option("--diagnostics", "-d", help="Diagnostics output JSONL path"),
    ] = None,
) -> None:
    """Normalize a JSONL file of payloads against a field type map.

    Each input line holds one payload object or a list of them. Exactly one
    of --spec or --types is required.
    """
    if (spec is None) == (types_path is None):
        console.print("[red]Error:[/red] Provide exactly one of --spec or --types")
        raise typer.Exit(1)

    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(1)

    if types_path is not None:
        try:
            field_types = load_field_types(types_path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            console.print(f"[red]Error:[/red] Cannot load field types from {types_path}: {e}")
            raise typer.Exit(1)
    else:
        field_types = _load_spec_field_types(spec, spec_version, registry)

    normalizer = Normalizer(field_types)
    diagnostic_rows: list[dict[str, Any]] = []
    payload_count = 0
    coerced_count = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Normalizing payloads...", total=None)

        def normalized_records():
            nonlocal payload_count, coerced_count
            for line_num, record in enumerate(read_jsonl(input_path), 1):
                if isinstance(record, list):
                    results = normalizer.normalize_many(record)
                    output = [r.payload for r in results]
                else:
                    results = [normalizer.normalize(record)]
                    output = results[0].payload

                payload_count += len(results)
                coerced_count += sum(len(r.changed_fields) for r in results)
                diagnostic_rows.append({
                    "line": line_num,
                    "results": [
                        r.model_dump(mode="json", exclude={"payload"}) for r in results
                    ],
                })
                progress.update(task, description=f"Normalized {line_num} lines...")
                yield output

        try:
            lines_written = write_jsonl(output_path, normalized_records())
        except ValueError as e:
            console.print(f"\n[red]Error:[/red] {e}")
            raise typer.Exit(1)

    if diagnostics:
        write_jsonl(diagnostics, diagnostic_rows)

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  Lines written: {lines_written}")
    console.print(f"  Payloads normalized: {payload_count}")
    console.print(f"  Fields coerced: {coerced_count}")
    if diagnostics:
        console.print(f"  Diagnostics written: {len(diagnostic_rows)}")


@app.command()
def validate(
    spec_path: Annotated[
        Path,
        typer.Argument(help="Path to the field type spec file"),
    ],
    schema_path: Annotated[
        Path | None,
        typer.Option("--schema", "-s", help="Path to the schema file"),
    ] = None,
) -> None:
    """Validate a field type spec file against its schema."""
    import jsonschema

    if not spec_path.exists():
        console.print(f"[red]Error:[/red] Spec file not found: {spec_path}")
        raise typer.Exit(1)

    if schema_path is None:
        schema_path = DEFAULT_SCHEMA_PATH

    if not schema_path.exists():
        console.print(f"[red]Error:[/red] Schema file not found: {schema_path}")
        raise typer.Exit(1)

    try:
        with open(spec_path) as f:
            spec_data = json.load(f)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid:[/red] Not valid JSON: {e}")
        raise typer.Exit(1)

    with open(schema_path) as f:
        schema = json.load(f)

    try:
        jsonschema.validate(spec_data, schema)
        console.print(f"[green]Valid:[/green] {spec_path}")
    except jsonschema.ValidationError as e:
        console.print(f"[red]Invalid:[/red] {e.message}")
        raise typer.Exit(1)


@app.command()
def coerce(
    value: Annotated[
        str,
        typer.Argument(help="Value to coerce"),
    ],
    field_type: Annotated[
        str,
        typer.Option("--type", "-t", help="Target type: string, number or boolean"),
    ],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Decode VALUE as JSON before coercing"),
    ] = False,
) -> None:
    """Coerce a single value and print the result with its Python type."""
    try:
        target = FieldType(field_type)
    except ValueError:
        console.print(f"[red]Error:[/red] Unknown field type: {field_type}")
        raise typer.Exit(1)

    raw: Any = value
    if as_json:
        try:
            raw = json.loads(value)
        except json.JSONDecodeError as e:
            console.print(f"[red]Error:[/red] VALUE is not valid JSON: {e}")
            raise typer.Exit(1)

    result = coerce_value(raw, target)
    console.print(f"{result!r} ({type(result).__name__})", markup=False, highlight=False)


if __name__ == "__main__":
    app()
