"""
Well-known streams for Fedora CoreOS.

For more information, see https://docs.fedoraproject.org/en-US/fedora-coreos/update-streams/
"""
from enum import Enum

from streammeta.metadata.errors import UnknownStream

STREAM_BASE_URL = "https://builds.coreos.fedoraproject.org/streams/"


class StreamID(Enum):
    Stable = "stable"
    Testing = "testing"
    Next = "next"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "StreamID":
        try:
            return cls(text)
        except ValueError:
            raise UnknownStream("fcos", text) from None

    def url(self) -> str:
        return f"{STREAM_BASE_URL}{self.value}.json"
