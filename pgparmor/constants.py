from enum import IntEnum


# Armor framing
HEADER_START = "-----BEGIN PGP "
HEADER_TAIL = "-----"
FOOTER_START = "-----END PGP "
FOOTER_TAIL = "-----"
SIGNED_MESSAGE_HEADER = "-----BEGIN PGP SIGNED MESSAGE-----"

VERSION_HEADER = "Version"
HASH_HEADER = "Hash"
DEFAULT_VERSION = "pgparmor v0.1"

# Block labels
LABEL_PUBLIC_KEY = "PUBLIC KEY BLOCK"
LABEL_PRIVATE_KEY = "PRIVATE KEY BLOCK"
LABEL_SIGNATURE = "SIGNATURE"
LABEL_MESSAGE = "MESSAGE"

# Body layout: 16 groups of 4 base64 chars = 64 columns
GROUP_BYTES = 3
GROUPS_PER_LINE = 16

# CRC24 (RFC 4880 section 6.1)
CRC24_INIT = 0xB704CE
CRC24_POLY = 0x1864CFB
CRC24_MASK = 0xFFFFFF

# Packet header framing bits (RFC 4880 section 4.2)
PTAG_NEW_FORMAT = 0x40
PTAG_MASK = 0x3F


class PacketTag(IntEnum):
    """Packet tags that select a dedicated armor label."""

    PUBLIC_KEY_ENCRYPTED_SESSION_KEY = 1
    SIGNATURE = 2
    SYMMETRIC_KEY_ENCRYPTED_SESSION_KEY = 3
    ONE_PASS_SIGNATURE = 4
    SECRET_KEY = 5
    PUBLIC_KEY = 6
    SECRET_SUBKEY = 7
    COMPRESSED_DATA = 8
    SYMMETRICALLY_ENCRYPTED_DATA = 9
    MARKER = 10
    LITERAL_DATA = 11
    TRUST = 12
    USER_ID = 13
    PUBLIC_SUBKEY = 14
    USER_ATTRIBUTE = 17
    SYM_ENCRYPTED_INTEGRITY_PROTECTED_DATA = 18
    MODIFICATION_DETECTION_CODE = 19


class HashAlgorithm(IntEnum):
    """OpenPGP hash algorithm ids (RFC 4880 section 9.4)."""

    MD5 = 1
    SHA1 = 2
    RIPEMD160 = 3
    MD2 = 5
    SHA256 = 8
    SHA384 = 9
    SHA512 = 10
