import click

from streammeta.helper.utils import get_default_stream
from streammeta.metadata.distro import known_identifiers, resolve_stream_url
from streammeta.metadata.errors import StreamMetadataError


@click.group()
def stream():
    """Resolve stream identifiers"""
    pass


@stream.command()
@click.argument("identifier", required=False)
def url(identifier):
    """Print the metadata URL of a stream, e.g. fcos-stable or rhcos-4.10"""
    if identifier is None:
        identifier = get_default_stream()
    try:
        click.echo(resolve_stream_url(identifier))
    except StreamMetadataError as e:
        raise click.ClickException(str(e))


@stream.command(name="list")
def list_streams():
    """List all known stream identifiers"""
    for identifier in known_identifiers():
        click.echo(identifier)
