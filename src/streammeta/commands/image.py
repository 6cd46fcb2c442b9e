import click

from streammeta.helper.utils import format_record, read_stream
from streammeta.metadata.errors import StreamMetadataError
from streammeta.metadata.query import (
    host_architecture,
    query_aws_image,
    query_gcp_image,
    query_kubevirt_image,
)


@click.group()
def image():
    """Query images published to public clouds"""
    pass


def stream_options(f):
    f = click.option(
        "--output",
        type=click.Choice(["json", "yaml"]),
        default="json",
        show_default=True,
    )(f)
    f = click.option(
        "--architecture",
        required=False,
        help="CPU architecture, defaults to the architecture of this machine",
    )(f)
    f = click.option(
        "--file",
        "stream_file",
        required=True,
        type=click.File("rb"),
        help="Stream metadata document, - for stdin",
    )(f)
    return f


def load(stream_file, architecture):
    try:
        doc = read_stream(stream_file)
    except StreamMetadataError as e:
        raise click.ClickException(str(e))
    return doc, architecture or host_architecture()


def show(result, what, output):
    if result is None:
        click.echo(f"No {what} image found", err=True)
        raise SystemExit(1)
    click.echo(format_record(result, output))


@image.command()
@stream_options
@click.option("--region", required=True, help="AWS region, e.g. us-east-1")
def aws(stream_file, architecture, output, region):
    """Show the AMI published for a region"""
    doc, arch_name = load(stream_file, architecture)
    show(query_aws_image(doc, arch_name, region), "AWS", output)


@image.command()
@stream_options
def gcp(stream_file, architecture, output):
    """Show the published GCP image"""
    doc, arch_name = load(stream_file, architecture)
    show(query_gcp_image(doc, arch_name), "GCP", output)


@image.command()
@stream_options
def kubevirt(stream_file, architecture, output):
    """Show the published KubeVirt container disk"""
    doc, arch_name = load(stream_file, architecture)
    show(query_kubevirt_image(doc, arch_name), "KubeVirt", output)
