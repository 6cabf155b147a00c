"""Status codes returned by authenticators."""

import logging
from enum import IntEnum

log = logging.getLogger(__name__)


class Status(IntEnum):
    """One-byte CTAP response status codes.

    Exactly one member, ``OK``, denotes success. ``ERR_OTHER`` doubles as the
    wildcard "any failure" when used as an expected status.
    """

    OK = 0x00
    ERR_INVALID_COMMAND = 0x01
    ERR_INVALID_PARAMETER = 0x02
    ERR_INVALID_LENGTH = 0x03
    ERR_INVALID_SEQ = 0x04
    ERR_TIMEOUT = 0x05
    ERR_CHANNEL_BUSY = 0x06
    ERR_LOCK_REQUIRED = 0x0A
    ERR_INVALID_CHANNEL = 0x0B
    ERR_CBOR_UNEXPECTED_TYPE = 0x11
    ERR_INVALID_CBOR = 0x12
    ERR_MISSING_PARAMETER = 0x14
    ERR_LIMIT_EXCEEDED = 0x15
    ERR_UNSUPPORTED_EXTENSION = 0x16
    ERR_FP_DATABASE_FULL = 0x17
    ERR_LARGE_BLOB_STORAGE_FULL = 0x18
    ERR_CREDENTIAL_EXCLUDED = 0x19
    ERR_PROCESSING = 0x21
    ERR_INVALID_CREDENTIAL = 0x22
    ERR_USER_ACTION_PENDING = 0x23
    ERR_OPERATION_PENDING = 0x24
    ERR_NO_OPERATIONS = 0x25
    ERR_UNSUPPORTED_ALGORITHM = 0x26
    ERR_OPERATION_DENIED = 0x27
    ERR_KEY_STORE_FULL = 0x28
    ERR_NOT_BUSY = 0x29
    ERR_NO_OPERATION_PENDING = 0x2A
    ERR_UNSUPPORTED_OPTION = 0x2B
    ERR_INVALID_OPTION = 0x2C
    ERR_KEEPALIVE_CANCEL = 0x2D
    ERR_NO_CREDENTIALS = 0x2E
    ERR_USER_ACTION_TIMEOUT = 0x2F
    ERR_NOT_ALLOWED = 0x30
    ERR_PIN_INVALID = 0x31
    ERR_PIN_BLOCKED = 0x32
    ERR_PIN_AUTH_INVALID = 0x33
    ERR_PIN_AUTH_BLOCKED = 0x34
    ERR_PIN_NOT_SET = 0x35
    ERR_PUAT_REQUIRED = 0x36
    ERR_PIN_POLICY_VIOLATION = 0x37
    ERR_PIN_TOKEN_EXPIRED = 0x38
    ERR_REQUEST_TOO_LARGE = 0x39
    ERR_ACTION_TIMEOUT = 0x3A
    ERR_UP_REQUIRED = 0x3B
    ERR_UV_BLOCKED = 0x3C
    ERR_INTEGRITY_FAILURE = 0x3D
    ERR_INVALID_SUBCOMMAND = 0x3E
    ERR_UV_INVALID = 0x3F
    ERR_UNAUTHORIZED_PERMISSION = 0x40
    ERR_OTHER = 0x7F
    ERR_SPEC_LAST = 0xDF
    ERR_EXTENSION_FIRST = 0xE0
    ERR_EXTENSION_LAST = 0xEF
    ERR_VENDOR_FIRST = 0xF0
    ERR_VENDOR_LAST = 0xFF

    @property
    def symbol(self) -> str:
        """Protocol name of the status, as printed in diagnostics."""
        return _SYMBOLS[self]

    @property
    def is_success(self) -> bool:
        """Whether this is the single success code."""
        return self is Status.OK

    @classmethod
    def from_code(cls, code: int) -> "Status":
        """Map a status byte to a member.

        Codes inside the extension or vendor ranges collapse onto the first
        code of their range. Any other unknown byte becomes ``ERR_OTHER``.
        """
        try:
            return cls(code)
        except ValueError:
            pass

        if cls.ERR_EXTENSION_FIRST <= code <= cls.ERR_EXTENSION_LAST:
            status = cls.ERR_EXTENSION_FIRST
        elif cls.ERR_VENDOR_FIRST <= code <= cls.ERR_VENDOR_LAST:
            status = cls.ERR_VENDOR_FIRST
        else:
            status = cls.ERR_OTHER

        log.warning("Unknown status code 0x%02X reported as %s", code, status.symbol)
        return status


# CTAP1 names survive for the codes inherited from U2F HID framing.
_CTAP1_CODES = frozenset(
    {
        Status.ERR_INVALID_COMMAND,
        Status.ERR_INVALID_PARAMETER,
        Status.ERR_INVALID_LENGTH,
        Status.ERR_INVALID_SEQ,
        Status.ERR_TIMEOUT,
        Status.ERR_CHANNEL_BUSY,
        Status.ERR_LOCK_REQUIRED,
        Status.ERR_INVALID_CHANNEL,
        Status.ERR_OTHER,
    }
)

_SYMBOLS = {
    status: (
        "CTAP2_OK"
        if status is Status.OK
        else f"CTAP1_{status.name}"
        if status in _CTAP1_CODES
        else f"CTAP2_{status.name}"
    )
    for status in Status
}
