"""Immutable RSA key values and their armored text codec.

A key is either a `PublicKey` (modulus and the fixed public exponent) or a `PrivateKey` (additionally carrying the
private exponent). Keys travel as armored text: a PEM-like block holding one base64 payload group per integer, each
group wrapped at `ARMOR_LINE_WIDTH` characters.

Typical usage example:

    pk = Key.new(3233, KeyKind.PRIVATE, 413)
    text = pk.to_armored_text()
    same = try_parse_armored_text(text).unwrap()
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import dataclasses
import enum
import logging
import typing

from rsakeys.errors import InvalidKeyMaterial
from rsakeys.errors import ParseFailure
from rsakeys.errors import ParseResult

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT: int = 17
ARMOR_LINE_WIDTH: int = 76


class KeyKind(enum.Enum):
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"

    @property
    def header(self) -> str:
        return f"-----BEGIN RSA {self.value} KEY-----"

    @property
    def footer(self) -> str:
        return f"-----END RSA {self.value} KEY-----"


ARMOR_DELIMITERS: tuple[str, ...] = tuple(
    marker for kind in (KeyKind.PRIVATE, KeyKind.PUBLIC) for marker in (kind.header, kind.footer))


def _check_integer(name: str, value: typing.Any) -> None:
    # bool is an int subclass, but never meaningful key material.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidKeyMaterial(f"{name} must be an integer, got {type(value).__name__}.")


@dataclasses.dataclass(frozen=True)
class Key:
    """Common part of both key variants.

    Not instantiated directly; use `PublicKey`, `PrivateKey` or `Key.new()`. Instances are frozen, compare equal on
    kind and numeric fields, and are hashable.

    Attributes:
        modulus: The modulus "n" of the key pair.
        kind: The `KeyKind` of the variant.
        public_exponent: The fixed public exponent "e".
    """
    modulus: int
    kind: typing.ClassVar[KeyKind]

    def __post_init__(self) -> None:
        if type(self) is Key:  # pylint: disable=unidiomatic-typecheck
            raise TypeError("Key is abstract, construct a PublicKey, a PrivateKey or use Key.new().")
        _check_integer("modulus", self.modulus)

    @property
    def public_exponent(self) -> int:
        return PUBLIC_EXPONENT

    @classmethod
    def new(cls, modulus: int, kind: KeyKind, private_exponent: int | None = None) -> "Key":
        """Construct the key variant matching `kind`.

        Args:
            modulus: The modulus of the key.
            kind: Which variant to build.
            private_exponent: The private exponent. Required for, and only accepted by, private keys.

        Returns:
            A `PublicKey` or a `PrivateKey`.

        Raises:
            InvalidKeyMaterial: The exponent is missing or invalid for a private key, supplied for a public key, or the
                kind is unknown.
        """
        if kind is KeyKind.PRIVATE:
            if private_exponent is None:
                raise InvalidKeyMaterial("Constructed as private, but no private exponent provided.")
            return PrivateKey(modulus, private_exponent)
        if kind is KeyKind.PUBLIC:
            if private_exponent is not None:
                raise InvalidKeyMaterial("Constructed as public, but a private exponent was provided.")
            return PublicKey(modulus)
        raise InvalidKeyMaterial(f"Unknown key kind {kind!r}.")

    def _payloads(self) -> tuple[int, ...]:
        return (self.modulus,)

    def to_armored_text(self) -> str:
        """Encode the key as armored text.

        Header, one wrapped base64 group per integer (modulus first, then the private exponent for private keys) and
        footer, each line terminated by a newline.

        Returns:
            The armored text block.
        """
        lines = [self.kind.header]
        for value in self._payloads():
            lines.extend(wrap_payload(base64.b64encode(integer_to_bytes(value)).decode("ascii")))
        lines.append(self.kind.footer)
        return "\n".join(lines) + "\n"

    @classmethod
    def try_parse_armored_text(cls, text: str) -> ParseResult:
        """Alias for the module-level `try_parse_armored_text()`."""
        return try_parse_armored_text(text)

    def __str__(self) -> str:
        return self.to_armored_text()


@dataclasses.dataclass(frozen=True)
class PublicKey(Key):
    """Public half of a key pair: modulus and the fixed public exponent only."""
    kind: typing.ClassVar[KeyKind] = KeyKind.PUBLIC


@dataclasses.dataclass(frozen=True)
class PrivateKey(Key):
    """Private key, carrying the private exponent on top of the public values.

    The private exponent is left out of `repr()` so it does not leak into logs.

    Attributes:
        private_exponent: The private exponent "d", at least 2.
    """
    private_exponent: int = dataclasses.field(repr=False)
    kind: typing.ClassVar[KeyKind] = KeyKind.PRIVATE

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_integer("private_exponent", self.private_exponent)
        if self.private_exponent < 2:
            raise InvalidKeyMaterial("Constructed as private, but invalid private exponent provided.")

    @property
    def public_key(self) -> PublicKey:
        return PublicKey(self.modulus)

    def _payloads(self) -> tuple[int, ...]:
        return self.modulus, self.private_exponent


def integer_to_bytes(value: int) -> bytes:
    """Converts an integer to its minimal big-endian two's-complement byte string.

    Args:
        value: The integer to marshal, of any sign.

    Returns:
        The shortest byte string that `bytes_to_integer()` maps back onto `value`.
    """
    magnitude = value if value >= 0 else ~value
    return value.to_bytes(magnitude.bit_length() // 8 + 1, byteorder="big", signed=True)


def bytes_to_integer(data: bytes) -> int:
    """Converts a big-endian two's-complement byte string to an integer."""
    return int.from_bytes(data, byteorder="big", signed=True)


def wrap_payload(payload: str) -> list[str]:
    """Split a base64 payload into lines of at most `ARMOR_LINE_WIDTH` characters.

    A payload ending on a full-width line gets an extra empty line, so that a reader can always tell where the group
    stops.

    Args:
        payload: Non-empty base64 text.

    Returns:
        The wrapped lines.
    """
    lines = [payload[i:i + ARMOR_LINE_WIDTH] for i in range(0, len(payload), ARMOR_LINE_WIDTH)]
    if not lines or len(lines[-1]) == ARMOR_LINE_WIDTH:
        lines.append("")
    return lines


def split_payload_groups(body: str) -> list[str]:
    """Reassemble wrapped base64 lines into payload groups.

    Consecutive lines accumulate into one group; any line shorter than `ARMOR_LINE_WIDTH` (an empty line included)
    closes it. Whatever remains buffered at the end of the input forms a last group.

    Args:
        body: Armored text with its delimiters removed.

    Returns:
        The non-empty payload groups, in order.
    """
    groups: list[str] = []
    buffer: list[str] = []
    for line in body.split("\n"):
        line = line.strip()
        buffer.append(line)
        if len(line) < ARMOR_LINE_WIDTH:
            group = "".join(buffer)
            if group:
                groups.append(group)
            buffer = []
    if "".join(buffer):
        groups.append("".join(buffer))
    return groups


def _fail(error: ParseFailure, detail: str) -> ParseResult:
    logger.debug("Rejected armored key text (%s): %s", error.value, detail)
    return ParseResult.failure(error, detail)


def try_parse_armored_text(text: str) -> ParseResult:
    """Parse armored text into a key, without ever raising on bad input.

    Any of the four known delimiters is removed regardless of which pair is present; the variant is chosen by the
    number of payload groups found, one for public and two for private keys.

    Args:
        text: Untrusted armored text.

    Returns:
        A successful `ParseResult` holding a `PublicKey` or a `PrivateKey`, or a failed one holding
        `ParseFailure.EMPTY_KEY_MATERIAL` or `ParseFailure.MALFORMED_KEY_BLOCK`.
    """
    if not isinstance(text, str):
        return _fail(ParseFailure.MALFORMED_KEY_BLOCK, f"Expected text, got {type(text).__name__}.")
    for marker in ARMOR_DELIMITERS:
        text = text.replace(marker, "")
    text = text.strip()
    if not text:
        return _fail(ParseFailure.EMPTY_KEY_MATERIAL, "No payload between the delimiters.")

    groups = split_payload_groups(text)
    if len(groups) not in (1, 2):
        return _fail(ParseFailure.MALFORMED_KEY_BLOCK, f"Expected 1 or 2 payload groups, found {len(groups)}.")
    try:
        values = [bytes_to_integer(base64.b64decode(group, validate=True)) for group in groups]
    except ValueError as exc:  # binascii.Error is a ValueError, as is non-ASCII input.
        return _fail(ParseFailure.MALFORMED_KEY_BLOCK, f"Invalid base64 payload: {exc}")
    try:
        key = PublicKey(values[0]) if len(values) == 1 else PrivateKey(values[0], values[1])
    except InvalidKeyMaterial as exc:
        return _fail(ParseFailure.MALFORMED_KEY_BLOCK, str(exc))
    return ParseResult.success(key)
