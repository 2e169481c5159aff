"""Key pair aggregate and its structured record codec.

A `KeyPair` always holds exactly one private and one public key. Its structured record maps `PrivateKey` and
`PublicKey` to each key's armored text, so the private exponent never appears as a bare field. JSON is the textual
rendering of that record.

Typical usage example:

    kp = KeyPair.generate(3233, 413)
    text = kp.to_json()
    same = KeyPair.from_json(text).unwrap()
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import collections.abc
import dataclasses
import json
import logging
import typing

from rsakeys.errors import InvalidKeyMaterial
from rsakeys.errors import ParseFailure
from rsakeys.errors import ParseResult
from rsakeys.keys import Key
from rsakeys.keys import PrivateKey
from rsakeys.keys import PublicKey
from rsakeys.keys import try_parse_armored_text

logger = logging.getLogger(__name__)

PRIVATE_FIELD = "PrivateKey"
PUBLIC_FIELD = "PublicKey"


class KeyEncoder(json.JSONEncoder):
    """JSON encoder writing any `Key` as its armored text.

    Encoding only: a lone key is never read back out of JSON, that goes through `KeyPair.from_structured_record()`.
    """

    def default(self, o: typing.Any) -> typing.Any:
        if isinstance(o, Key):
            return o.to_armored_text()
        return super().default(o)


@dataclasses.dataclass(frozen=True)
class KeyPair:
    """A matching private and public key.

    Attributes:
        private_key: The private key.
        public_key: The public key, sharing the private key's modulus.
    """
    private_key: PrivateKey
    public_key: PublicKey

    def __post_init__(self) -> None:
        if not isinstance(self.private_key, PrivateKey):
            raise InvalidKeyMaterial(f"private_key must be a PrivateKey, got {type(self.private_key).__name__}.")
        if not isinstance(self.public_key, PublicKey):
            raise InvalidKeyMaterial(f"public_key must be a PublicKey, got {type(self.public_key).__name__}.")
        if self.private_key.modulus != self.public_key.modulus:
            raise InvalidKeyMaterial("Private and public key moduli differ.")

    @classmethod
    def generate(cls, modulus: int, private_exponent: int) -> "KeyPair":
        """Returns a key pair from the "n" and "d" values of an RSA key generation.

        Args:
            modulus: The modulus "n".
            private_exponent: The private exponent "d".

        Raises:
            InvalidKeyMaterial: If either value is not valid key material.
        """
        public = PublicKey(modulus)
        private = PrivateKey(modulus, private_exponent)
        return cls(private, public)

    def to_structured_record(self) -> dict[str, str]:
        return {
            PRIVATE_FIELD: self.private_key.to_armored_text(),
            PUBLIC_FIELD: self.public_key.to_armored_text(),
        }

    @classmethod
    def from_structured_record(cls, record: typing.Any) -> ParseResult:
        """Rebuild a key pair from its structured record, never raising on bad input.

        Refuses two well-formed keys of the right kinds whose moduli differ, which is stricter than the record format
        itself requires.

        Args:
            record: Mapping expected to hold armored text under `PrivateKey` and `PublicKey`.

        Returns:
            A successful `ParseResult` holding the `KeyPair`, or a failed one holding
            `ParseFailure.MISSING_KEY_FIELD`, `ParseFailure.INVALID_PRIVATE_KEY`, `ParseFailure.INVALID_PUBLIC_KEY`
            or `ParseFailure.MISMATCHED_KEY_PAIR`.
        """
        if not isinstance(record, collections.abc.Mapping):
            return _fail(ParseFailure.MISSING_KEY_FIELD, f"Expected a mapping, got {type(record).__name__}.")
        missing = [name for name in (PRIVATE_FIELD, PUBLIC_FIELD) if record.get(name) is None]
        if missing:
            return _fail(ParseFailure.MISSING_KEY_FIELD, f"Missing field(s): {', '.join(missing)}.")

        private = try_parse_armored_text(record[PRIVATE_FIELD])
        if not private:
            return _fail(ParseFailure.INVALID_PRIVATE_KEY, private.detail)
        if not isinstance(private.value, PrivateKey):
            return _fail(ParseFailure.INVALID_PRIVATE_KEY, f"{PRIVATE_FIELD} holds a public key.")

        public = try_parse_armored_text(record[PUBLIC_FIELD])
        if not public:
            return _fail(ParseFailure.INVALID_PUBLIC_KEY, public.detail)
        if not isinstance(public.value, PublicKey):
            return _fail(ParseFailure.INVALID_PUBLIC_KEY, f"{PUBLIC_FIELD} holds a private key.")

        if private.value.modulus != public.value.modulus:
            return _fail(ParseFailure.MISMATCHED_KEY_PAIR, "Private and public key moduli differ.")
        return ParseResult.success(cls(private.value, public.value))

    def to_json(self, **kwargs: typing.Any) -> str:
        """Render the structured record as JSON.

        Args:
            **kwargs: Passed on to `json.dumps()`, e.g. `indent`.

        Returns:
            The JSON object text.
        """
        return json.dumps({PRIVATE_FIELD: self.private_key, PUBLIC_FIELD: self.public_key}, cls=KeyEncoder, **kwargs)

    @classmethod
    def from_json(cls, text: str) -> ParseResult:
        """Parse a JSON rendering of the structured record.

        Returns:
            As `from_structured_record()`, or a failure holding `ParseFailure.MALFORMED_RECORD` if `text` is not a
            JSON object.
        """
        try:
            record = json.loads(text)
        except (TypeError, ValueError) as exc:  # JSONDecodeError is a ValueError.
            return _fail(ParseFailure.MALFORMED_RECORD, f"Invalid JSON: {exc}")
        if not isinstance(record, dict):
            return _fail(ParseFailure.MALFORMED_RECORD, f"Expected a JSON object, got {type(record).__name__}.")
        return cls.from_structured_record(record)

    def __str__(self) -> str:
        return self.to_json()


def _fail(error: ParseFailure, detail: str) -> ParseResult:
    logger.debug("Rejected key pair record (%s): %s", error.value, detail)
    return ParseResult.failure(error, detail)
