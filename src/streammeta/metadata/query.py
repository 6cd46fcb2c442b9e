"""
Lookups over a parsed stream document.

The stream format is sparse, not every architecture ships every artifact in
every format, so every lookup returns None on a miss instead of raising.
"""
import logging
import platform
import sys
from typing import Optional

from streammeta.metadata.stream import (
    Arch,
    Artifact,
    ContainerImage,
    GcpImage,
    SingleImage,
    Stream,
)

logger = logging.getLogger(__name__)

DISK_ROLE = "disk"
PPC64_FAMILY = ("ppc64", "ppc64le")


def normalize_architecture(machine: str, byteorder: str = sys.byteorder) -> str:
    """
    Map a raw machine name to the RPM/GNU architecture name used as key in the
    stream document. Only 64-bit PowerPC differs, its name depends on the endianness.
    """
    if machine in PPC64_FAMILY:
        return "ppc64le" if byteorder == "little" else "ppc64"
    return machine


def host_architecture() -> str:
    return normalize_architecture(platform.machine())


def _lookup(mapping: Optional[dict], key: str, what: str):
    if mapping is None:
        return None
    value = mapping.get(key)
    if value is None:
        logger.debug(f"{what} {key} not found")
    return value


def get_architecture(doc: Stream, arch_name: str) -> Optional[Arch]:
    return _lookup(doc.architectures, arch_name, "Architecture")


def current_architecture(doc: Stream, machine: Optional[str] = None) -> Optional[Arch]:
    """
    Returns the data for the CPU architecture matching the running process.

    :param machine: raw machine name to use instead of probing the host
    """
    if machine is None:
        arch_name = host_architecture()
    else:
        arch_name = normalize_architecture(machine)
    return get_architecture(doc, arch_name)


def _disk_in_arch(
    arch: Optional[Arch], artifact_kind: str, format_name: str
) -> Optional[Artifact]:
    if arch is None:
        return None
    platform_entry = _lookup(arch.artifacts, artifact_kind, "Artifact")
    if platform_entry is None:
        return None
    bundle = _lookup(platform_entry.formats, format_name, "Format")
    return _lookup(bundle, DISK_ROLE, "Role")


def query_disk(
    doc: Stream, arch_name: str, artifact_kind: str, format_name: str
) -> Optional[Artifact]:
    return _disk_in_arch(get_architecture(doc, arch_name), artifact_kind, format_name)


def _single_disk_in_arch(arch: Optional[Arch], artifact_kind: str) -> Optional[Artifact]:
    if arch is None:
        return None
    platform_entry = _lookup(arch.artifacts, artifact_kind, "Artifact")
    if platform_entry is None:
        return None
    format_name = next(iter(platform_entry.formats), None)
    if format_name is None:
        logger.debug(f"Artifact {artifact_kind} has no formats")
        return None
    return _lookup(platform_entry.formats[format_name], DISK_ROLE, "Role")


def query_single(doc: Stream, arch_name: str, artifact_kind: str) -> Optional[Artifact]:
    """
    Like query_current_architecture_single, for an explicit architecture name
    as used in the stream document (``ppc64le``, not a raw machine name).
    """
    return _single_disk_in_arch(get_architecture(doc, arch_name), artifact_kind)


def query_current_architecture_single(
    doc: Stream, artifact_kind: str, machine: Optional[str] = None
) -> Optional[Artifact]:
    """
    Find the disk of an artifact kind for the current architecture,
    using whichever format comes first.

    Only use this for artifact kinds that ship exactly one format (e.g. ``qemu``
    or ``aws``), which format wins otherwise is not defined.
    """
    return _single_disk_in_arch(current_architecture(doc, machine), artifact_kind)


def query_aws_image(doc: Stream, arch_name: str, region: str) -> Optional[SingleImage]:
    arch = get_architecture(doc, arch_name)
    if arch is None or arch.images is None or arch.images.aws is None:
        return None
    return _lookup(arch.images.aws.regions, region, "AWS region")


def query_gcp_image(doc: Stream, arch_name: str) -> Optional[GcpImage]:
    arch = get_architecture(doc, arch_name)
    if arch is None or arch.images is None:
        return None
    return arch.images.gcp


def query_kubevirt_image(doc: Stream, arch_name: str) -> Optional[ContainerImage]:
    arch = get_architecture(doc, arch_name)
    if arch is None or arch.images is None:
        return None
    return arch.images.kubevirt
