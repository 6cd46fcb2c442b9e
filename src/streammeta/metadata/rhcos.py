"""
Well-known streams for RHEL CoreOS.

These map to OpenShift versions, only 4.8 and newer publish stream metadata.
The metadata lives in the openshift/installer repository on the release branch.
"""
from enum import Enum

from streammeta.metadata.errors import UnknownStream

INSTALLER_GIT = "https://raw.githubusercontent.com/openshift/installer/"
LEGACY_PATH = "/data/data/rhcos-stream.json"
PATH = "/data/data/coreos/rhcos.json"


class StreamID(Enum):
    FourEight = "4.8"
    FourNine = "4.9"
    FourTen = "4.10"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "StreamID":
        try:
            return cls(text)
        except ValueError:
            raise UnknownStream("rhcos", text) from None

    def url(self) -> str:
        branch, path = SOURCES[self]
        return f"{INSTALLER_GIT}{branch}{path}"


# the metadata moved to PATH with 4.10
SOURCES = {
    StreamID.FourEight: ("release-4.8", LEGACY_PATH),
    StreamID.FourNine: ("release-4.9", LEGACY_PATH),
    StreamID.FourTen: ("release-4.10", PATH),
}
