import hashlib

from streammeta.metadata.errors import ChecksumMismatch
from streammeta.metadata.stream import Artifact

BLOCK_SIZE = 4096


def calculate_sha256(file_path: str) -> str:
    """
    Hex digest of a downloaded artifact, in the form published as ``sha256``
    and ``uncompressed-sha256`` in the stream document.
    Disk images are large, the file is hashed block by block.
    """
    digest = hashlib.sha256()
    with open(file_path, "rb") as artifact_file:
        for block in iter(lambda: artifact_file.read(BLOCK_SIZE), b""):
            digest.update(block)
    return digest.hexdigest()


def verify_sha256(checksum: str, file_path: str):
    file_checksum = calculate_sha256(file_path)
    if checksum.lower() != file_checksum:
        raise ChecksumMismatch(checksum, file_checksum)


def verify_artifact(artifact: Artifact, file_path: str, uncompressed: bool = False):
    """
    Check a downloaded file against the checksum published for the artifact.

    :param uncompressed: compare against the checksum of the decompressed artifact,
        file_path must then point to the decompressed file
    """
    if uncompressed:
        if artifact.uncompressed_sha256 is None:
            raise ValueError(
                f"No uncompressed checksum published for {artifact.location}"
            )
        verify_sha256(artifact.uncompressed_sha256, file_path)
    else:
        verify_sha256(artifact.sha256, file_path)
