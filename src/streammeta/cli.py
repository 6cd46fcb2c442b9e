#!/bin/env python3

import logging
import sys

import click

from streammeta.commands import artifact, config, image, stream


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """CoreOS stream metadata Command Line Interface"""
    logging.basicConfig(
        stream=sys.stderr, level=logging.DEBUG if verbose else logging.WARNING
    )


cli.add_command(stream.stream)
cli.add_command(artifact.artifact)
cli.add_command(image.image)
cli.add_command(config.config)


if __name__ == "__main__":
    cli()
