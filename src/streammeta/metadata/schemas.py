# for reference:
#   https://json-schema.org/understanding-json-schema/reference/object
#   https://github.com/coreos/fedora-coreos-tracker/blob/main/Design.md#stream-metadata
#
# Every object allows additional properties, fields have been added to the
# stream format over time and older readers must keep accepting new documents.

schema_url = "http://json-schema.org/draft-07/schema"


def _mapping_of(value_schema: dict) -> dict:
    return {"type": "object", "additionalProperties": value_schema}


def _nullable(schema: dict) -> dict:
    # optional fields may also be written as an explicit null
    return dict(schema, type=[schema["type"], "null"])


def _object(properties: dict, required: list) -> dict:
    return {
        "type": "object",
        "required": required,
        "properties": properties,
        "additionalProperties": True,
    }


artifactProperties = {
    "location": {"type": "string"},
    "sha256": {"type": "string"},
    "uncompressed-sha256": _nullable({"type": "string"}),
    "signature": _nullable({"type": "string"}),
}
artifact = _object(artifactProperties, ["location", "sha256"])

platformProperties = {
    "formats": _mapping_of(_mapping_of(artifact)),
}
platform = _object(platformProperties, ["formats"])

singleImageProperties = {
    "release": {"type": "string"},
    "image": {"type": "string"},
}
singleImage = _object(singleImageProperties, ["release", "image"])

replicatedImageProperties = {
    "regions": _mapping_of(singleImage),
}
replicatedImage = _object(replicatedImageProperties, ["regions"])

gcpImageProperties = {
    "release": _nullable({"type": "string"}),
    "project": {"type": "string"},
    "family": _nullable({"type": "string"}),
    "name": {"type": "string"},
}
gcpImage = _object(gcpImageProperties, ["project", "name"])

regionObjectProperties = {
    "release": {"type": "string"},
    "object": {"type": "string"},
    "bucket": {"type": "string"},
    "url": {"type": "string"},
}
regionObject = _object(regionObjectProperties, ["release", "object", "bucket", "url"])

replicatedObjectProperties = {
    "regions": _mapping_of(regionObject),
}
replicatedObject = _object(replicatedObjectProperties, ["regions"])

containerImageProperties = {
    "release": {"type": "string"},
    "image": {"type": "string"},
    "digest-ref": {"type": "string"},
}
containerImage = _object(containerImageProperties, ["release", "image", "digest-ref"])

imagesProperties = {
    "aws": _nullable(replicatedImage),
    "aliyun": _nullable(replicatedImage),
    "gcp": _nullable(gcpImage),
    "ibmcloud": _nullable(replicatedObject),
    "powervs": _nullable(replicatedObject),
    "kubevirt": _nullable(containerImage),
}
images = _object(imagesProperties, [])

archProperties = {
    "artifacts": _mapping_of(platform),
    "images": _nullable(images),
}
arch = _object(archProperties, ["artifacts"])

streamMetadataProperties = {
    "last-modified": _nullable({"type": "string"}),
}

streamProperties = {
    "stream": {"type": "string"},
    "metadata": _nullable(_object(streamMetadataProperties, [])),
    "architectures": _mapping_of(arch),
}


stream = {
    "$schema": schema_url,
    "title": "CoreOS Stream Metadata Schema",
    "type": "object",
    "required": [
        "stream",
        "architectures",
    ],
    "properties": streamProperties,
    "additionalProperties": True,
}
