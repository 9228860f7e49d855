"""CLI entry point for api-descriptor-docs."""

from pathlib import Path

import click

from api_descriptor_docs.config import DEFAULT_TITLE, OUTPUT_DIR_ENV, TITLE_ENV, configure_logging
from api_descriptor_docs.errors import ApiDocsError
from api_descriptor_docs.generator.docs import ApiDocGenerator
from api_descriptor_docs.models.api import ApiDescription
from api_descriptor_docs.parser.descriptor import parse_descriptor


def _load(descriptor_path: Path) -> ApiDescription:
    try:
        return parse_descriptor(descriptor_path)
    except ApiDocsError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """API Descriptor Docs: generate AsciiDoc documentation from API descriptors."""
    configure_logging(verbose)


@main.command()
@click.argument("descriptor_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, envvar=OUTPUT_DIR_ENV, type=click.Path(file_okay=False, path_type=Path), help="Output directory for AsciiDoc files.")
@click.option("--title", default=DEFAULT_TITLE, envvar=TITLE_ENV, show_default=True, help="Title of the root document.")
def generate(descriptor_path: Path, output: Path, title: str):
    """Generate AsciiDoc documentation from an API descriptor."""
    click.echo(f"Parsing {descriptor_path}...")
    api = _load(descriptor_path)

    click.echo(f"Generating docs for {api.id}...")
    try:
        gen = ApiDocGenerator(output, title=title)
        gen.execute(api)
    except ApiDocsError as e:
        raise click.ClickException(str(e)) from e

    written = gen.written
    click.echo(f"Root document: {output / written[-1]}")
    click.echo(f"Generated {len(written)} files in {output}")


@main.command()
@click.argument("descriptor_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(descriptor_path: Path):
    """Check an API descriptor and print a summary."""
    api = _load(descriptor_path)

    click.echo(f"{api.id}: valid")
    if api.paths is None:
        click.echo("Paths: none")
    else:
        click.echo(f"Paths: {len(api.paths.root)} ({api.paths.kind})")
    click.echo(f"Definitions: {len(api.definitions.root) if api.definitions else 0}")
    click.echo(f"Errors: {len(api.errors.root) if api.errors else 0}")
