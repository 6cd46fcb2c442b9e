import logging
from enum import Enum
from typing import Union

from streammeta.metadata import fcos, rhcos
from streammeta.metadata.errors import MalformedIdentifier, UnknownDistribution

logger = logging.getLogger(__name__)


class Distribution(Enum):
    FCOS = "fcos"
    RHCOS = "rhcos"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Distribution":
        try:
            return cls(text.lower())
        except ValueError:
            raise UnknownDistribution(text) from None

    @property
    def streams(self):
        return STREAM_TYPES[self]


STREAM_TYPES = {
    Distribution.FCOS: fcos.StreamID,
    Distribution.RHCOS: rhcos.StreamID,
}


def split_identifier(compound_id: str) -> tuple[str, str]:
    """
    Split ``<distro>-<stream>`` on the first dash only,
    the stream part is passed on whole, e.g. ``fcos-blah-whee`` -> ("fcos", "blah-whee")
    """
    distro_token, sep, stream_token = compound_id.partition("-")
    if not sep:
        raise MalformedIdentifier(compound_id)
    return distro_token, stream_token


def resolve_stream(compound_id: str) -> Union[fcos.StreamID, rhcos.StreamID]:
    distro_token, stream_token = split_identifier(compound_id)
    distribution = Distribution.parse(distro_token)
    stream_id = distribution.streams.parse(stream_token)
    logger.debug(f"Resolved {compound_id} to {distribution.name} stream {stream_id}")
    return stream_id


def resolve_stream_url(compound_id: str) -> str:
    return resolve_stream(compound_id).url()


def known_identifiers() -> list[str]:
    return [
        f"{distribution}-{stream_id}"
        for distribution in Distribution
        for stream_id in distribution.streams
    ]
