import click

from streammeta.helper.utils import format_record, read_stream
from streammeta.metadata.checksum import verify_artifact
from streammeta.metadata.errors import StreamMetadataError
from streammeta.metadata.query import (
    host_architecture,
    query_disk,
    query_single,
)


@click.group()
def artifact():
    """Query downloadable artifacts"""
    pass


def find_disk(doc, artifact_kind, format_name, architecture):
    # an explicit architecture is already the name used in the document
    arch_name = architecture or host_architecture()
    if format_name is None:
        return query_single(doc, arch_name, artifact_kind)
    return query_disk(doc, arch_name, artifact_kind, format_name)


@artifact.command()
@click.option(
    "--file",
    "stream_file",
    required=True,
    type=click.File("rb"),
    help="Stream metadata document, - for stdin",
)
@click.option(
    "--artifact", "artifact_kind", required=True, help="Artifact kind, e.g. metal"
)
@click.option(
    "--format",
    "format_name",
    required=False,
    help="Format, e.g. raw.xz. If omitted the artifact must have a single format",
)
@click.option(
    "--architecture",
    required=False,
    help="CPU architecture, defaults to the architecture of this machine",
)
@click.option(
    "--output",
    type=click.Choice(["json", "yaml"]),
    default="json",
    show_default=True,
)
def disk(stream_file, artifact_kind, format_name, architecture, output):
    """Show the disk artifact of an artifact kind"""
    try:
        doc = read_stream(stream_file)
    except StreamMetadataError as e:
        raise click.ClickException(str(e))
    result = find_disk(doc, artifact_kind, format_name, architecture)
    if result is None:
        click.echo(f"No disk found for {artifact_kind}", err=True)
        raise SystemExit(1)
    click.echo(format_record(result, output))


@artifact.command()
@click.option(
    "--file",
    "stream_file",
    required=True,
    type=click.File("rb"),
    help="Stream metadata document, - for stdin",
)
@click.option(
    "--artifact", "artifact_kind", required=True, help="Artifact kind, e.g. metal"
)
@click.option("--format", "format_name", required=True, help="Format, e.g. raw.xz")
@click.option(
    "--architecture",
    required=False,
    help="CPU architecture, defaults to the architecture of this machine",
)
@click.option(
    "--uncompressed",
    is_flag=True,
    help="Verify against the checksum of the decompressed artifact",
)
@click.argument("local_file", type=click.Path(exists=True, dir_okay=False))
def verify(
    stream_file, artifact_kind, format_name, architecture, uncompressed, local_file
):
    """Verify a downloaded disk artifact against its published checksum"""
    try:
        doc = read_stream(stream_file)
        result = find_disk(doc, artifact_kind, format_name, architecture)
        if result is None:
            raise click.ClickException(
                f"No disk found for {artifact_kind} {format_name}"
            )
        verify_artifact(result, local_file, uncompressed=uncompressed)
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(f"{local_file}: OK")
