# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from pyasn1.error import PyAsn1Error
import pytest

import rsakeys
from rsakeys import ParseFailure
from rsakeys import PrivateKey
from rsakeys import PublicKey

TARGET_SIZES = [1024, 2048, pytest.param(4096, marks=pytest.mark.slow)]


@pytest.fixture(scope="module", params=TARGET_SIZES)
def modulus(request) -> int:
    return rsa.generate_private_key(public_exponent=65537, key_size=request.param).public_key().public_numbers().n


def test_pem_loads_in_cryptography(modulus):
    pem = rsakeys.to_pkcs1_pem(PublicKey(modulus))
    lines = pem.splitlines()
    assert lines[0] == "-----BEGIN RSA PUBLIC KEY-----"
    assert lines[-1] == "-----END RSA PUBLIC KEY-----"
    assert all(len(line) <= 64 for line in lines[1:-1])
    interkey = serialization.load_pem_public_key(pem.encode("ascii"))
    assert interkey.public_numbers() == rsa.RSAPublicNumbers(17, modulus)


def test_pem_import_from_cryptography(modulus):
    pld = rsa.RSAPublicNumbers(17, modulus).public_key().public_bytes(serialization.Encoding.PEM,
                                                                    serialization.PublicFormat.PKCS1)
    assert rsakeys.from_pkcs1_pem(pld.decode("ascii")).unwrap() == PublicKey(modulus)
    der = rsa.RSAPublicNumbers(17, modulus).public_key().public_bytes(serialization.Encoding.DER,
                                                                    serialization.PublicFormat.PKCS1)
    assert rsakeys.from_pkcs1_der(der).unwrap() == PublicKey(modulus)


def test_import_rejects_other_exponents(modulus):
    pld = rsa.RSAPublicNumbers(65537, modulus).public_key().public_bytes(serialization.Encoding.PEM,
                                                                       serialization.PublicFormat.PKCS1)
    res = rsakeys.from_pkcs1_pem(pld.decode("ascii"))
    assert res.error is ParseFailure.UNSUPPORTED_EXPONENT
    assert "65537" in res.detail


@pytest.mark.parametrize("value", [3233, 1, 0, -3233])
def test_der_round_trip(value):
    assert rsakeys.from_pkcs1_der(rsakeys.to_pkcs1_der(PublicKey(value))).unwrap() == PublicKey(value)


def test_private_export_warns():
    with pytest.warns(RuntimeWarning, match="only writes its public half"):
        der = rsakeys.to_pkcs1_der(PrivateKey(3233, 413))
    assert der == rsakeys.to_pkcs1_der(PublicKey(3233))


@pytest.mark.parametrize("data", [b"", b"\x04\x01\x00", "not bytes", None])
def test_der_malformed(data):
    assert rsakeys.from_pkcs1_der(data).error is ParseFailure.MALFORMED_KEY_BLOCK


def test_der_trailing_data():
    res = rsakeys.from_pkcs1_der(rsakeys.to_pkcs1_der(PublicKey(3233)) + b"\x00")
    assert res.error is ParseFailure.MALFORMED_KEY_BLOCK
    assert "trailing" in res.detail


def test_der_decoder_errors_are_contained(mocker):
    mocker.patch("rsakeys.pkcs1.decoder.decode", side_effect=PyAsn1Error("boom"))
    res = rsakeys.from_pkcs1_der(b"\x30\x00")
    assert res.error is ParseFailure.MALFORMED_KEY_BLOCK
    assert "boom" in res.detail


def test_pem_read_validates_subtype():
    pem = rsakeys.to_pkcs1_pem(PublicKey(3233)).replace("RSA PUBLIC KEY", "GARBAGE DATA", 1)
    assert rsakeys.from_pkcs1_pem(pem).error is ParseFailure.MALFORMED_KEY_BLOCK


def test_pem_read_validates_end():
    pem = "-----BEGIN RSA PUBLIC KEY-----\nDoes the carpet?\nMatch the drapes?\n"
    res = rsakeys.from_pkcs1_pem(pem)
    assert res.error is ParseFailure.MALFORMED_KEY_BLOCK
    assert "footer" in res.detail


def test_pem_read_empty():
    pem = "-----BEGIN RSA PUBLIC KEY-----\n-----END RSA PUBLIC KEY-----\n"
    assert rsakeys.from_pkcs1_pem(pem).error is ParseFailure.EMPTY_KEY_MATERIAL


@pytest.mark.parametrize("pem", [
    "-----BEGIN RSA PUBLIC KEY-----\nwoah woah woah\npipebomb\n-----END RSA PUBLIC KEY-----\n",
    "",
    None,
])
def test_pem_read_malformed(pem):
    assert rsakeys.from_pkcs1_pem(pem).error is ParseFailure.MALFORMED_KEY_BLOCK
