import click

from streammeta.helper.utils import (
    DEFAULT_STREAM,
    get_config,
    get_config_path,
    save_config,
)
from streammeta.metadata.distro import resolve_stream
from streammeta.metadata.errors import StreamMetadataError


@click.group()
def config():
    """Manage configuration."""
    pass


@config.command()
def show():
    """Show the current configuration."""
    config = get_config()
    click.echo(f"Config File: {get_config_path()}")
    click.echo(
        f"Default Stream: {config['DEFAULT'].get('default_stream', DEFAULT_STREAM)}"
    )


@config.command(name="set")
@click.option(
    "--default-stream",
    "default_stream",
    required=True,
    type=str,
    help="Stream used when none is given, e.g. fcos-testing",
)
def set_config(default_stream):
    """Set the configuration."""
    try:
        resolve_stream(default_stream)
    except StreamMetadataError as e:
        raise click.ClickException(str(e))
    config = get_config()
    config["DEFAULT"]["default_stream"] = default_stream
    save_config(config)
    click.echo(f"Setting default stream to {default_stream}")
