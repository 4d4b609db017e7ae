"""
Unit Tests for OTP Generation and Verification
===============================================
"""

import hashlib
import hmac
import struct

import pytest

from admission_core.config import OTPSettings
from admission_core.errors import VerificationFailed
from admission_core.otp import OTPService, derive_key_material

from .conftest import FakeClock, START_TIME


def reference_code(key: str, counter: int, digits: int = 5) -> str:
    """RFC 4226 HOTP computed directly with hmac."""
    digest = hmac.new(key.encode(), struct.pack(">Q", counter), hashlib.sha1).digest()
    offset = digest[-1] & 0x0F
    binary = struct.unpack(">I", digest[offset:offset + 4])[0] & 0x7FFFFFFF
    return str(binary % 10 ** digits).zfill(digits)


class TestKeyMaterial:
    """Tests for key derivation."""

    def test_plain_concatenation(self):
        """Key material is the secret followed by the email."""
        assert derive_key_material("otpsecret", "a@example.com") == "otpsecreta@example.com"


class TestGeneration:
    """Tests for code generation."""

    def test_code_shape(self, otp_service):
        """Should produce a 5 digit numeric string."""
        code = otp_service.generate("a@example.com")

        assert len(code) == 5
        assert code.isdigit()

    def test_rfc4226_vectors(self):
        """Counter 0..2 with the RFC test key, truncated to 5 digits."""
        settings = OTPSettings(secret="1234567890", step_seconds=600, digits=5)
        clock = FakeClock(0)
        service = OTPService(settings, clock=clock)
        email = "1234567890"

        assert service.generate(email) == "55224"
        clock.advance(600)
        assert service.generate(email) == "87082"
        clock.advance(600)
        assert service.generate(email) == "59152"

    def test_matches_reference_hotp(self, otp_service):
        """Should equal HMAC-SHA1 HOTP over floor(t / 600) keyed by secret + email."""
        counter = int(START_TIME // 600)

        expected = reference_code("otpsecreta@example.com", counter)

        assert otp_service.generate("a@example.com") == expected

    def test_zero_padding(self, otp_settings, clock):
        """Short values should be left padded with zeros."""
        service = OTPService(otp_settings, clock=clock)
        email = "pad@example.com"

        # find a bucket whose code starts with 0
        counter = int(START_TIME // 600)
        while not reference_code("otpsecret" + email, counter).startswith("0"):
            counter += 1
        clock.now = counter * 600

        code = service.generate(email)
        assert code.startswith("0")
        assert len(code) == 5

    def test_stable_within_bucket(self, otp_service, clock):
        """Same inputs in the same bucket should give the same code."""
        first = otp_service.generate("a@example.com")
        clock.advance(599)
        second = otp_service.generate("a@example.com")

        assert first == second

    def test_differs_across_distant_buckets(self, otp_service, clock):
        """Non-adjacent buckets should give different codes."""
        codes = []
        for _ in range(5):
            codes.append(otp_service.generate("a@example.com"))
            clock.advance(1200)

        assert len(set(codes)) > 1

    def test_secret_isolates_deployments(self, clock):
        """A different secret should change the code for the same email and time."""
        a = OTPService(OTPSettings(secret="otpsecret"), clock=clock)
        b = OTPService(OTPSettings(secret="another-secret"), clock=clock)

        assert a.generate("a@example.com") != b.generate("a@example.com")

    def test_email_isolates_codes(self, otp_service):
        """Different emails should get different codes."""
        assert otp_service.generate("a@example.com") != otp_service.generate("b@example.com")


class TestVerification:
    """Tests for code verification."""

    def test_verify_fresh_code(self, otp_service):
        """A just-generated code should verify."""
        code = otp_service.generate("a@example.com")

        assert otp_service.verify("a@example.com", code) is True

    def test_code_reusable_within_window(self, otp_service):
        """Codes are not single use."""
        code = otp_service.generate("a@example.com")

        assert otp_service.verify("a@example.com", code) is True
        assert otp_service.verify("a@example.com", code) is True

    def test_adjacent_bucket_accepted(self, otp_service, clock):
        """The previous bucket's code should still verify."""
        code = otp_service.generate("a@example.com")
        clock.advance(600)

        assert otp_service.verify("a@example.com", code) is True

    def test_expired_after_two_steps(self, otp_service, clock):
        """Two buckets later the code should be rejected."""
        code = otp_service.generate("a@example.com")
        clock.advance(1200)

        assert otp_service.verify("a@example.com", code) is False

    def test_zero_window_is_strict(self, clock):
        """With valid_window=0 only the current bucket is accepted."""
        service = OTPService(OTPSettings(valid_window=0), clock=clock)
        code = service.generate("a@example.com")
        clock.advance(600)

        assert service.verify("a@example.com", code) is False

    def test_wrong_code_rejected(self, otp_service):
        """00000 should not match a differing fresh code."""
        code = otp_service.generate("a@example.com")
        assert code != "00000"

        assert otp_service.verify("a@example.com", "00000") is False

    def test_wrong_email_rejected(self, otp_service):
        """A code issued for one email should not verify for another."""
        code = otp_service.generate("a@example.com")

        assert otp_service.verify("b@example.com", code) is False

    @pytest.mark.parametrize("bad", ["", "1234", "123456", "12a45", None])
    def test_malformed_input_rejected(self, otp_service, bad):
        """Malformed submissions return False without raising."""
        assert otp_service.verify("a@example.com", bad) is False

    def test_fullwidth_digits_rejected(self, otp_service):
        """Only ASCII digits verify, even where Unicode normalisation would match."""
        code = otp_service.generate("a@example.com")
        fullwidth = "".join(chr(0xFF10 + int(c)) for c in code)

        assert otp_service.verify("a@example.com", fullwidth) is False

    def test_surrounding_whitespace_ignored(self, otp_service):
        code = otp_service.generate("a@example.com")

        assert otp_service.verify("a@example.com", f" {code}\n") is True

    def test_verify_or_raise(self, otp_service):
        """Rejections raise VerificationFailed with a uniform message."""
        code = otp_service.generate("a@example.com")
        otp_service.verify_or_raise("a@example.com", code)

        with pytest.raises(VerificationFailed) as wrong_code:
            otp_service.verify_or_raise("a@example.com", str((int(code) + 1) % 100000).zfill(5))
        with pytest.raises(VerificationFailed) as wrong_email:
            otp_service.verify_or_raise("nobody@example.com", code)

        assert str(wrong_code.value) == str(wrong_email.value)


class TestEndToEnd:
    """The documented generate / verify / expire scenario."""

    def test_scenario(self):
        clock = FakeClock(START_TIME + 123)
        service = OTPService(
            OTPSettings(secret="otpsecret", step_seconds=600, digits=5),
            clock=clock,
        )

        code = service.generate("a@example.com")
        assert len(code) == 5 and code.isdigit()
        assert service.verify("a@example.com", code) is True

        clock.advance(1300)
        assert service.verify("a@example.com", code) is False
