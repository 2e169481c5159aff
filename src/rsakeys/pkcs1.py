"""PKCS#1 interoperability for the public half of a key.

Armored text is this library's own format; other RSA tooling expects the PKCS#1 `RSAPublicKey` structure of
RFC 8017 (A.1.1). This module converts public key material to and from its DER encoding and the PEM wrapping of it.
Private keys cannot be exported to PKCS#1 here, as `RSAPrivateKey` needs the primes and CRT values, which a `Key`
does not hold.

PKCS#1 PEM uses the same `-----BEGIN/END RSA PUBLIC KEY-----` frame as armored text of a public key, and its 64 column
lines read as armored payload groups. Armored decoding of PKCS#1 PEM does not fail but yields a wrong key, so text
of unknown origin must be tried with `from_pkcs1_pem()` first.

Typical usage example:

    pem = to_pkcs1_pem(KeyPair.generate(3233, 413).public_key)
    pub = from_pkcs1_pem(pem).unwrap()
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import logging
import warnings

from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.codec.native import encoder as localize
from pyasn1_modules import rfc8017

from rsakeys.errors import ParseFailure
from rsakeys.errors import ParseResult
from rsakeys.keys import Key
from rsakeys.keys import KeyKind
from rsakeys.keys import PrivateKey
from rsakeys.keys import PUBLIC_EXPONENT
from rsakeys.keys import PublicKey

logger = logging.getLogger(__name__)

PEM_LINE_WIDTH: int = 64


def _fail(error_kind: ParseFailure, detail: str) -> ParseResult:
    logger.debug("Rejected PKCS#1 public key (%s): %s", error_kind.value, detail)
    return ParseResult.failure(error_kind, detail)


def to_pkcs1_der(key: Key) -> bytes:
    """DER-encode the public half of a key as a PKCS#1 RSAPublicKey.

    Args:
        key: Either key variant. Only the modulus and public exponent are written.

    Returns:
        The DER encoding.
    """
    if isinstance(key, PrivateKey):
        warnings.warn("PKCS#1 export of a private key only writes its public half.", RuntimeWarning)
    keydata = rfc8017.RSAPublicKey()
    keydata["modulus"] = key.modulus
    keydata["publicExponent"] = key.public_exponent
    return encoder.encode(keydata)


def to_pkcs1_pem(key: Key) -> str:
    """PEM-wrap the PKCS#1 encoding of the public half of a key.

    Args:
        key: Either key variant.

    Returns:
        The PEM text, base64 wrapped at `PEM_LINE_WIDTH` characters.
    """
    payload = base64.b64encode(to_pkcs1_der(key)).decode("ascii")
    lines = [KeyKind.PUBLIC.header]
    lines.extend(payload[i:i + PEM_LINE_WIDTH] for i in range(0, len(payload), PEM_LINE_WIDTH))
    lines.append(KeyKind.PUBLIC.footer)
    return "\n".join(lines) + "\n"


def from_pkcs1_der(data: bytes) -> ParseResult:
    """Decode a PKCS#1 RSAPublicKey, never raising on bad input.

    Args:
        data: DER bytes.

    Returns:
        A successful `ParseResult` holding a `PublicKey`, or a failed one holding `ParseFailure.MALFORMED_KEY_BLOCK`
        or `ParseFailure.UNSUPPORTED_EXPONENT` (the exponent is not `PUBLIC_EXPONENT`).
    """
    if not isinstance(data, (bytes, bytearray)) or not data:
        return _fail(ParseFailure.MALFORMED_KEY_BLOCK, "Expected non-empty DER bytes.")
    try:
        keydata, rest = decoder.decode(bytes(data), asn1Spec=rfc8017.RSAPublicKey())
    except error.PyAsn1Error as exc:
        return _fail(ParseFailure.MALFORMED_KEY_BLOCK, f"Invalid RSAPublicKey structure: {exc}")
    if rest:
        return _fail(ParseFailure.MALFORMED_KEY_BLOCK, f"{len(rest)} trailing byte(s) after RSAPublicKey.")
    pykeyd = localize.encode(keydata)
    if pykeyd["publicExponent"] != PUBLIC_EXPONENT:
        return _fail(ParseFailure.UNSUPPORTED_EXPONENT,
                     f"Public exponent {pykeyd['publicExponent']} is not {PUBLIC_EXPONENT}.")
    return ParseResult.success(PublicKey(pykeyd["modulus"]))


def from_pkcs1_pem(text: str) -> ParseResult:
    """Decode PEM-wrapped PKCS#1 RSAPublicKey text, never raising on bad input.

    Args:
        text: PEM text with `RSA PUBLIC KEY` delimiters.

    Returns:
        As `from_pkcs1_der()`, or a failure holding `ParseFailure.EMPTY_KEY_MATERIAL` if nothing sits between the
        delimiters.
    """
    if not isinstance(text, str):
        return _fail(ParseFailure.MALFORMED_KEY_BLOCK, f"Expected text, got {type(text).__name__}.")
    lines = [line.strip() for line in text.strip().splitlines()]
    if not lines or lines[0] != KeyKind.PUBLIC.header:
        return _fail(ParseFailure.MALFORMED_KEY_BLOCK, f"PEM headline does not match {KeyKind.PUBLIC.header}")
    try:
        end = lines.index(KeyKind.PUBLIC.footer)
    except ValueError:
        return _fail(ParseFailure.MALFORMED_KEY_BLOCK, f"PEM text does not contain footer: {KeyKind.PUBLIC.footer}")
    parcel = "".join(lines[1:end])
    if not parcel:
        return _fail(ParseFailure.EMPTY_KEY_MATERIAL, "No payload between the delimiters.")
    try:
        der = base64.b64decode(parcel, validate=True)
    except ValueError as exc:
        return _fail(ParseFailure.MALFORMED_KEY_BLOCK, f"Invalid base64 payload: {exc}")
    return from_pkcs1_der(der)
