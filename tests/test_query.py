import platform
import sys

import pytest

from streammeta.metadata import query
from streammeta.metadata.query import (
    current_architecture,
    host_architecture,
    normalize_architecture,
    query_aws_image,
    query_current_architecture_single,
    query_disk,
    query_gcp_image,
    query_kubevirt_image,
    query_single,
)
from streammeta.metadata.stream import SingleImage, parse_stream


def ppc64_document(*arch_names):
    disk = {"location": "https://example.com/disk.raw.xz", "sha256": "ab" * 32}
    arch = {"artifacts": {"metal": {"formats": {"raw.xz": {"disk": disk}}}}}
    if not arch_names:
        arch_names = ("ppc64", "ppc64le")
    return parse_stream(
        {"stream": "stable", "architectures": {name: arch for name in arch_names}}
    )


def test_query_disk(fcos_stream):
    disk = query_disk(fcos_stream, "x86_64", "metal", "raw.xz")
    assert disk.sha256 == "2848b111a6917455686f38a3ce64d2321c33809b9cf796c5f6804b1c02d79d9d"


@pytest.mark.parametrize(
    "arch_name, artifact_kind, format_name",
    [
        ("s390x", "metal", "raw.xz"),
        ("x86_64", "openstack", "qcow2.xz"),
        ("x86_64", "metal", "4k.raw.xz"),
        # pxe has kernel and initramfs but no disk
        ("x86_64", "metal", "pxe"),
        ("aarch64", "aws", "vmdk.xz"),
    ],
)
def test_query_disk_miss(fcos_stream, arch_name, artifact_kind, format_name):
    assert query_disk(fcos_stream, arch_name, artifact_kind, format_name) is None


@pytest.mark.parametrize(
    "machine, byteorder, expected",
    [
        ("x86_64", "little", "x86_64"),
        ("aarch64", "little", "aarch64"),
        ("s390x", "big", "s390x"),
        ("ppc64", "big", "ppc64"),
        ("ppc64", "little", "ppc64le"),
        ("ppc64le", "little", "ppc64le"),
        ("ppc64le", "big", "ppc64"),
        ("armv7l", "little", "armv7l"),
    ],
)
def test_normalize_architecture(machine, byteorder, expected):
    assert normalize_architecture(machine, byteorder) == expected


def test_current_architecture_with_machine(fcos_stream):
    arch = current_architecture(fcos_stream, machine="aarch64")
    assert arch is fcos_stream.architectures["aarch64"]
    assert current_architecture(fcos_stream, machine="s390x") is None


def test_current_architecture_ppc64_uses_endianness():
    doc = ppc64_document()
    expected = "ppc64le" if sys.byteorder == "little" else "ppc64"
    assert current_architecture(doc, machine="ppc64") is doc.architectures[expected]


def test_current_architecture_probes_host(fcos_stream, monkeypatch):
    monkeypatch.setattr(platform, "machine", lambda: "x86_64")
    assert host_architecture() == "x86_64"
    assert current_architecture(fcos_stream) is fcos_stream.architectures["x86_64"]

    monkeypatch.setattr(platform, "machine", lambda: "riscv64")
    assert current_architecture(fcos_stream) is None


def test_single_format(fcos_stream):
    disk = query_current_architecture_single(fcos_stream, "qemu", machine="x86_64")
    assert disk is query_disk(fcos_stream, "x86_64", "qemu", "qcow2.xz")
    disk = query_current_architecture_single(fcos_stream, "aws", machine="x86_64")
    assert disk.location.endswith(".vmdk.xz")


def test_single_format_uses_host(fcos_stream, monkeypatch):
    monkeypatch.setattr(query.platform, "machine", lambda: "aarch64")
    disk = query_current_architecture_single(fcos_stream, "qemu")
    assert disk is query_disk(fcos_stream, "aarch64", "qemu", "qcow2.xz")


def test_single_format_miss(fcos_stream):
    assert query_current_architecture_single(fcos_stream, "qemu", machine="s390x") is None
    assert (
        query_current_architecture_single(fcos_stream, "openstack", machine="x86_64")
        is None
    )


def test_single_format_without_formats():
    doc = parse_stream(
        {
            "stream": "stable",
            "architectures": {"x86_64": {"artifacts": {"qemu": {"formats": {}}}}},
        }
    )
    assert query_current_architecture_single(doc, "qemu", machine="x86_64") is None


def test_single_format_contract_violation(fcos_stream):
    # metal ships several formats, only the disk of one of them may come back
    metal = fcos_stream.architectures["x86_64"].artifacts["metal"]
    candidates = [bundle.get("disk") for bundle in metal.formats.values()]
    assert len(metal.formats) > 1
    disk = query_current_architecture_single(fcos_stream, "metal", machine="x86_64")
    assert any(disk is candidate for candidate in candidates)


def test_query_aws_image(fcos_stream):
    assert query_aws_image(fcos_stream, "x86_64", "us-east-1") == SingleImage(
        release="33.20201201.3.0", image="ami-037a0ba6d14ca2e05"
    )
    assert query_aws_image(fcos_stream, "x86_64", "mars-north-1") is None
    assert query_aws_image(fcos_stream, "aarch64", "us-east-1") is None
    assert query_aws_image(fcos_stream, "s390x", "us-east-1") is None


def test_query_gcp_image(fcos_stream):
    assert query_gcp_image(fcos_stream, "x86_64").project == "fedora-coreos-cloud"
    assert query_gcp_image(fcos_stream, "aarch64") is None


def test_query_kubevirt_image(fcos_stream):
    assert query_kubevirt_image(fcos_stream, "x86_64") is None
    assert query_kubevirt_image(fcos_stream, "ppc64le") is None


@pytest.mark.parametrize("arch_name", ["ppc64", "ppc64le"])
@pytest.mark.parametrize("machine", ["ppc64", "ppc64le"])
def test_current_architecture_single_ppc64_key(arch_name, machine):
    doc = ppc64_document(arch_name)
    native = "ppc64le" if sys.byteorder == "little" else "ppc64"
    arch = current_architecture(doc, machine=machine)
    if arch_name == native:
        assert arch is doc.architectures[arch_name]
    else:
        assert arch is None


@pytest.mark.parametrize("arch_name", ["ppc64", "ppc64le"])
def test_explicit_architecture_is_not_normalized(arch_name):
    doc = ppc64_document(arch_name)
    assert query_disk(doc, arch_name, "metal", "raw.xz").sha256 == "ab" * 32
    assert query_single(doc, arch_name, "metal").sha256 == "ab" * 32


def test_query_single(fcos_stream):
    assert query_single(fcos_stream, "aarch64", "qemu") is query_disk(
        fcos_stream, "aarch64", "qemu", "qcow2.xz"
    )
    assert query_single(fcos_stream, "s390x", "qemu") is None
    assert query_single(fcos_stream, "x86_64", "openstack") is None
