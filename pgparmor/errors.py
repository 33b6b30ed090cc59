class ArmorError(Exception):
    """Base class for pgparmor errors."""


# Internal consistency
class InvalidChunkLengthError(ArmorError):
    """A base64 group was asked to encode something other than 0-3 bytes."""


# Caller configuration
class UnsupportedHashAlgorithmError(ArmorError, ValueError):
    def __init__(self, algorithm):
        super().__init__(f"unsupported hash algorithm in begin_clear_text: {algorithm!r}")
        self.algorithm = algorithm


class ArmorStateError(ArmorError):
    pass
