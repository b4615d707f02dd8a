"""Testes da verificação de assinatura Starling (RSA e legado)."""

from __future__ import annotations

import base64
import hashlib

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from api.connectors.starling.signature import (
    SignatureError,
    load_public_key,
    verify_legacy_signature,
    verify_rsa_signature,
    verify_starling_signature,
)
from config.settings import WebhookSettings

BODY = b'{"webhookEventUid":"evt-1","content":{"amount":{"minorUnits":2499}}}'


def _public_key_b64(private_key: rsa.RSAPrivateKey) -> str:
    der = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(der).decode("ascii")


def _sign(private_key: rsa.RSAPrivateKey, body: bytes) -> str:
    signature = private_key.sign(body, padding.PKCS1v15(), hashes.SHA512())
    return base64.b64encode(signature).decode("ascii")


@pytest.fixture(scope="module")
def private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="module")
def other_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


class TestVerifyRsaSignature:
    """Esquema RSA PKCS#1 v1.5 / SHA-512."""

    def test_valid_signature_passes(self, private_key: rsa.RSAPrivateKey) -> None:
        verify_rsa_signature(BODY, _sign(private_key, BODY), _public_key_b64(private_key))

    def test_single_byte_body_mutation_fails(self, private_key: rsa.RSAPrivateKey) -> None:
        """Alterar um byte do corpo invalida a assinatura."""
        signature = _sign(private_key, BODY)
        mutated = bytearray(BODY)
        mutated[10] ^= 0x01

        with pytest.raises(SignatureError, match="signature_mismatch"):
            verify_rsa_signature(bytes(mutated), signature, _public_key_b64(private_key))

    def test_single_byte_signature_mutation_fails(self, private_key: rsa.RSAPrivateKey) -> None:
        raw = bytearray(private_key.sign(BODY, padding.PKCS1v15(), hashes.SHA512()))
        raw[0] ^= 0x01
        signature = base64.b64encode(bytes(raw)).decode("ascii")

        with pytest.raises(SignatureError, match="signature_mismatch"):
            verify_rsa_signature(BODY, signature, _public_key_b64(private_key))

    def test_wrong_key_fails(
        self,
        private_key: rsa.RSAPrivateKey,
        other_private_key: rsa.RSAPrivateKey,
    ) -> None:
        with pytest.raises(SignatureError, match="signature_mismatch"):
            verify_rsa_signature(
                BODY,
                _sign(private_key, BODY),
                _public_key_b64(other_private_key),
            )

    def test_invalid_base64_signature(self, private_key: rsa.RSAPrivateKey) -> None:
        with pytest.raises(SignatureError, match="invalid_base64"):
            verify_rsa_signature(BODY, "não-é-base64!!", _public_key_b64(private_key))


class TestLoadPublicKey:
    """Carga da chave pública DER/base64."""

    def test_garbage_key_rejected(self) -> None:
        with pytest.raises(SignatureError, match="invalid_public_key"):
            load_public_key(base64.b64encode(b"not a key").decode("ascii"))

    def test_non_rsa_key_rejected(self) -> None:
        ec_key = ec.generate_private_key(ec.SECP256R1())
        der = ec_key.public_key().public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

        with pytest.raises(SignatureError, match="invalid_public_key"):
            load_public_key(base64.b64encode(der).decode("ascii"))


class TestVerifyLegacySignature:
    """Esquema legado base64(sha512(secret || body))."""

    def test_valid_legacy_signature(self) -> None:
        signature = base64.b64encode(hashlib.sha512(b"s3cret" + BODY).digest()).decode()
        verify_legacy_signature(BODY, signature, "s3cret")

    def test_wrong_secret_fails(self) -> None:
        signature = base64.b64encode(hashlib.sha512(b"other" + BODY).digest()).decode()
        with pytest.raises(SignatureError, match="signature_mismatch"):
            verify_legacy_signature(BODY, signature, "s3cret")


class TestVerifyStarlingSignature:
    """Entrada pública usada pelo endpoint."""

    def test_rsa_scheme_selected_when_public_key_set(
        self,
        private_key: rsa.RSAPrivateKey,
    ) -> None:
        settings = WebhookSettings(public_key=_public_key_b64(private_key))
        headers = {"x-hook-signature": _sign(private_key, BODY)}

        result = verify_starling_signature(BODY, headers, settings)

        assert result.valid is True
        assert result.scheme == "rsa_sha512"
        assert result.skipped is False

    def test_legacy_scheme_when_only_secret(self) -> None:
        settings = WebhookSettings(webhook_secret="s3cret")
        signature = base64.b64encode(hashlib.sha512(b"s3cret" + BODY).digest()).decode()

        result = verify_starling_signature(BODY, {"x-hook-signature": signature}, settings)

        assert result.valid is True
        assert result.scheme == "legacy_sha512"

    def test_missing_header(self, private_key: rsa.RSAPrivateKey) -> None:
        settings = WebhookSettings(public_key=_public_key_b64(private_key))

        result = verify_starling_signature(BODY, {}, settings)

        assert result.valid is False
        assert result.error == "missing_signature"

    def test_missing_key_material(self) -> None:
        result = verify_starling_signature(BODY, {"x-hook-signature": "abc="}, WebhookSettings())

        assert result.valid is False
        assert result.error == "missing_key_material"

    def test_mismatch_reported_without_raising(
        self,
        private_key: rsa.RSAPrivateKey,
        other_private_key: rsa.RSAPrivateKey,
    ) -> None:
        settings = WebhookSettings(public_key=_public_key_b64(other_private_key))
        headers = {"x-hook-signature": _sign(private_key, BODY)}

        result = verify_starling_signature(BODY, headers, settings)

        assert result.valid is False
        assert result.error == "signature_mismatch"

    def test_skip_flag_bypasses_and_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        settings = WebhookSettings(skip_signature_verification=True)

        with caplog.at_level("WARNING"):
            result = verify_starling_signature(BODY, {}, settings)

        assert result.valid is True
        assert result.skipped is True
        assert "signature_verification_skipped" in caplog.text
