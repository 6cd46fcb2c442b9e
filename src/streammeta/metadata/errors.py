from typing import Optional


class StreamMetadataError(ValueError):
    pass


class SchemaViolation(StreamMetadataError):
    """
    Raised when a stream document does not have the required shape.

    :param path: slash separated location of the offending object, "" for the document root
    :param field: name of the missing property, if the violation is a missing required field
    """

    def __init__(self, message: str, path: str = "", field: Optional[str] = None):
        self.path = path
        self.field = field
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)


class UnknownStream(StreamMetadataError):
    def __init__(self, distribution: str, stream: str):
        self.distribution = distribution
        self.stream = stream
        super().__init__(f"Unknown {distribution} stream: {stream!r}")


class UnknownDistribution(StreamMetadataError):
    def __init__(self, distribution: str):
        self.distribution = distribution
        super().__init__(f"Unknown distribution: {distribution!r}")


class MalformedIdentifier(StreamMetadataError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(
            f"Malformed stream identifier {identifier!r}, expected <distro>-<stream>"
        )


class ChecksumMismatch(StreamMetadataError):
    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid checksum. {expected} != {actual}")
