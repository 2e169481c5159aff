"""RSA Key Material Representation and Codecs.

Provides immutable RSA key values (public and private), a key pair aggregate, and their lossless textual encodings:
armored base64 blocks for single keys, JSON structured records for key pairs and PKCS#1 for exchanging public keys
with other tooling. All decoders return a `ParseResult` instead of raising on malformed input.

Typical usage example:

    kp = KeyPair.generate(3233, 413)
    text = kp.private_key.to_armored_text()
    pk = try_parse_armored_text(text).unwrap()
    same = KeyPair.from_json(kp.to_json()).unwrap()
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsakeys.errors import InvalidKeyMaterial
from rsakeys.errors import KeyParseError
from rsakeys.errors import ParseFailure
from rsakeys.errors import ParseResult
from rsakeys.keypair import KeyEncoder
from rsakeys.keypair import KeyPair
from rsakeys.keys import ARMOR_LINE_WIDTH
from rsakeys.keys import Key
from rsakeys.keys import KeyKind
from rsakeys.keys import PrivateKey
from rsakeys.keys import PUBLIC_EXPONENT
from rsakeys.keys import PublicKey
from rsakeys.keys import try_parse_armored_text
from rsakeys.pkcs1 import from_pkcs1_der
from rsakeys.pkcs1 import from_pkcs1_pem
from rsakeys.pkcs1 import to_pkcs1_der
from rsakeys.pkcs1 import to_pkcs1_pem

__version__ = "0.0.1"
__all__ = [
    "ARMOR_LINE_WIDTH",
    "PUBLIC_EXPONENT",
    "InvalidKeyMaterial",
    "KeyParseError",
    "ParseFailure",
    "ParseResult",
    "Key",
    "KeyKind",
    "PublicKey",
    "PrivateKey",
    "KeyPair",
    "KeyEncoder",
    "try_parse_armored_text",
    "to_pkcs1_der",
    "to_pkcs1_pem",
    "from_pkcs1_der",
    "from_pkcs1_pem",
]
