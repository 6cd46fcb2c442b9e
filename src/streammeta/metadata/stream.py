import json
import logging
from dataclasses import dataclass, field
from typing import Optional, Union

import jsonschema
from jsonschema.exceptions import best_match

from streammeta.metadata.errors import SchemaViolation
from streammeta.metadata.schemas import stream as streamSchema

logger = logging.getLogger(__name__)

_validator = jsonschema.Draft7Validator(streamSchema)


@dataclass(frozen=True)
class Artifact:
    """A downloadable artifact with a URL, checksums and an optional detached signature."""

    location: str
    sha256: str
    # only set when location points to a compressed file
    uncompressed_sha256: Optional[str] = None
    signature: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Artifact":
        return cls(
            location=data["location"],
            sha256=data["sha256"],
            uncompressed_sha256=data.get("uncompressed-sha256"),
            signature=data.get("signature"),
        )


@dataclass(frozen=True)
class Platform:
    """
    A specific artifact kind, e.g. ``metal`` or ``qemu``.

    ``formats`` maps a format name (``raw.xz``, ``iso``) to the files making up
    that format, keyed by role (``disk``, ``kernel``, ``initramfs``).
    """

    formats: dict[str, dict[str, Artifact]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "Platform":
        return cls(
            formats={
                format_name: {
                    role: Artifact.from_dict(artifact)
                    for role, artifact in bundle.items()
                }
                for format_name, bundle in data["formats"].items()
            }
        )


@dataclass(frozen=True)
class SingleImage:
    release: str
    image: str

    @classmethod
    def from_dict(cls, data: dict) -> "SingleImage":
        return cls(release=data["release"], image=data["image"])


@dataclass(frozen=True)
class ReplicatedImage:
    """An image replicated per region, e.g. an AMI in every AWS region."""

    regions: dict[str, SingleImage] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "ReplicatedImage":
        return cls(
            regions={
                region: SingleImage.from_dict(image)
                for region, image in data["regions"].items()
            }
        )


@dataclass(frozen=True)
class GcpImage:
    project: str
    name: str
    # older documents carry neither release nor family
    release: Optional[str] = None
    family: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "GcpImage":
        return cls(
            project=data["project"],
            name=data["name"],
            release=data.get("release"),
            family=data.get("family"),
        )


@dataclass(frozen=True)
class RegionObject:
    release: str
    object: str
    bucket: str
    url: str

    @classmethod
    def from_dict(cls, data: dict) -> "RegionObject":
        return cls(
            release=data["release"],
            object=data["object"],
            bucket=data["bucket"],
            url=data["url"],
        )


@dataclass(frozen=True)
class ReplicatedObject:
    """An object stored per region in a cloud object store (IBM Cloud, PowerVS)."""

    regions: dict[str, RegionObject] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "ReplicatedObject":
        return cls(
            regions={
                region: RegionObject.from_dict(obj)
                for region, obj in data["regions"].items()
            }
        )


@dataclass(frozen=True)
class ContainerImage:
    release: str
    # preferred reference, tag or digest
    image: str
    digest_ref: str

    @classmethod
    def from_dict(cls, data: dict) -> "ContainerImage":
        return cls(
            release=data["release"],
            image=data["image"],
            digest_ref=data["digest-ref"],
        )


def _optional(constructor, data: dict, key: str):
    # missing and null both mean absent
    if data.get(key) is None:
        return None
    return constructor(data[key])


@dataclass(frozen=True)
class Images:
    """Images already uploaded to public clouds, every cloud is optional."""

    aws: Optional[ReplicatedImage] = None
    aliyun: Optional[ReplicatedImage] = None
    gcp: Optional[GcpImage] = None
    ibmcloud: Optional[ReplicatedObject] = None
    powervs: Optional[ReplicatedObject] = None
    kubevirt: Optional[ContainerImage] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Images":
        return cls(
            aws=_optional(ReplicatedImage.from_dict, data, "aws"),
            aliyun=_optional(ReplicatedImage.from_dict, data, "aliyun"),
            gcp=_optional(GcpImage.from_dict, data, "gcp"),
            ibmcloud=_optional(ReplicatedObject.from_dict, data, "ibmcloud"),
            powervs=_optional(ReplicatedObject.from_dict, data, "powervs"),
            kubevirt=_optional(ContainerImage.from_dict, data, "kubevirt"),
        )


@dataclass(frozen=True)
class Arch:
    artifacts: dict[str, Platform] = field(default_factory=dict)
    images: Optional[Images] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Arch":
        return cls(
            artifacts={
                kind: Platform.from_dict(platform)
                for kind, platform in data["artifacts"].items()
            },
            images=_optional(Images.from_dict, data, "images"),
        )


@dataclass(frozen=True)
class StreamMetadata:
    last_modified: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "StreamMetadata":
        return cls(last_modified=data.get("last-modified"))


@dataclass(frozen=True)
class Stream:
    """Toplevel stream object."""

    stream: str
    architectures: dict[str, Arch] = field(default_factory=dict)
    metadata: Optional[StreamMetadata] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Stream":
        return cls(
            stream=data["stream"],
            architectures={
                name: Arch.from_dict(arch)
                for name, arch in data["architectures"].items()
            },
            metadata=_optional(StreamMetadata.from_dict, data, "metadata"),
        )


def _missing_field(error: jsonschema.ValidationError) -> Optional[str]:
    if error.validator != "required" or not isinstance(error.instance, dict):
        return None
    for name in error.validator_value:
        if name not in error.instance:
            return name
    return None


def validate(data) -> None:
    """
    Validate a decoded stream document against the stream schema.
    Raises SchemaViolation for the most relevant error found.
    """
    error = best_match(_validator.iter_errors(data))
    if error is None:
        return
    path = "/".join(str(part) for part in error.absolute_path)
    raise SchemaViolation(error.message, path=path, field=_missing_field(error))


def parse_stream(data) -> Stream:
    """Build a Stream from an already decoded JSON document."""
    validate(data)
    doc = Stream.from_dict(data)
    logger.debug(
        f"Parsed stream {doc.stream} with architectures {sorted(doc.architectures)}"
    )
    return doc


def loads(raw: Union[bytes, str]) -> Stream:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SchemaViolation(f"Stream document is not valid UTF-8: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SchemaViolation(f"Stream document is not valid JSON: {e}") from e
    return parse_stream(data)


def load(file_path: str) -> Stream:
    with open(file_path, "rb") as fp:
        return loads(fp.read())
