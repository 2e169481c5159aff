"""Error taxonomy and the fallible-result type shared by every decoder.

Construction contract violations are programmer errors and raise `InvalidKeyMaterial` straight away. Anything that
decodes external input (armored text, structured records, JSON, PKCS#1) instead hands back a `ParseResult`, leaving
the reporting policy to the caller.

Typical usage example:

    res = try_parse_armored_text(text)
    if not res:
        print(res.error, res.detail)
    key = res.unwrap()
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import enum
import typing


class InvalidKeyMaterial(ValueError):
    """A key was constructed with values that violate its kind's contract."""


class ParseFailure(enum.Enum):
    """Reasons a decoder may refuse its input."""
    EMPTY_KEY_MATERIAL = "empty key material"
    MALFORMED_KEY_BLOCK = "malformed key block"
    MISSING_KEY_FIELD = "missing key field"
    INVALID_PRIVATE_KEY = "invalid private key"
    INVALID_PUBLIC_KEY = "invalid public key"
    MALFORMED_RECORD = "malformed record"
    MISMATCHED_KEY_PAIR = "mismatched key pair"
    UNSUPPORTED_EXPONENT = "unsupported exponent"


class KeyParseError(ValueError):
    """Raised by `ParseResult.unwrap()` for callers that prefer exceptions.

    Attributes:
        failure: The `ParseFailure` kind.
        detail: Human-readable cause, may be empty.
    """

    def __init__(self, failure: ParseFailure, detail: str = "") -> None:
        self.failure = failure
        self.detail = detail
        msg = failure.value.capitalize()
        super().__init__(f"{msg}: {detail}" if detail else msg)


class ParseResult(typing.NamedTuple):
    """Outcome of a decode: exactly one of `value` and `error` is set.

    Attributes:
        value: The decoded object on success, otherwise None.
        error: The `ParseFailure` on failure, otherwise None.
        detail: Diagnostic description of the failure.
    """
    value: typing.Any = None
    error: ParseFailure | None = None
    detail: str = ""

    @classmethod
    def success(cls, value: typing.Any) -> "ParseResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ParseFailure, detail: str = "") -> "ParseResult":
        return cls(error=error, detail=detail)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> typing.Any:
        """Return the decoded value.

        Raises:
            KeyParseError: If the result holds a failure.
        """
        if self.error is not None:
            raise KeyParseError(self.error, self.detail)
        return self.value
