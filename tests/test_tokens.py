# Copyright (c) 2026 Signer — MIT License

import asyncio
import json

import jwt
import pytest

from devprims import b64url
from devprims.errors import UnsupportedAlgorithmError
from devprims.tokens import (
    JWT_ALGORITHMS,
    ExpiryInfo,
    expiry_info,
    parse_parts,
    sign_token,
    verify_token,
)

SECRET = "a-32-byte-long-secret-for-tests!"


def make_token(header, payload, signature="c"):
    return f"{b64url.encode(json.dumps(header))}.{b64url.encode(json.dumps(payload))}.{signature}"


class TestParseParts:
    def test_three_segments(self):
        token = make_token({"alg": "HS256"}, {"sub": "1"})
        parts = parse_parts(token)
        assert parts.header == '{"alg": "HS256"}'
        assert parts.payload == '{"sub": "1"}'
        assert parts.signature == "c"
        assert parts.signing_input == token.rsplit(".", 1)[0]
        assert parts.header_claims() == {"alg": "HS256"}
        assert parts.payload_claims() == {"sub": "1"}

    @pytest.mark.parametrize("token", ["a.b", "a.b.c.d", "", "..", "eyJ9.eyJ9.", ".eyJ9.c"])
    def test_wrong_shape(self, token):
        assert parse_parts(token) is None

    def test_single_char_segments_decode_leniently(self):
        parts = parse_parts("a.b.c")
        assert parts is not None
        assert (parts.header, parts.payload, parts.signature) == ("", "", "c")
        assert (parts.raw_header, parts.raw_payload) == ("a", "b")

    def test_leftover_char_dropped(self):
        # "e30" is "{}"; a fifth char past a full quantum is ignored
        parts = parse_parts("e30xY.e30.sig")
        assert parts.payload == "{}"
        assert parts.raw_header == "e30xY"

    def test_undecodable_segment(self):
        assert parse_parts("!!!.eyJ9.c") is None
        assert parse_parts("e30.a$b.c") is None

    def test_payload_left_as_text(self):
        token = f"{b64url.encode('{}')}.{b64url.encode('not json')}.sig"
        assert parse_parts(token).payload == "not json"


class TestExpiryInfo:
    def test_no_exp(self):
        assert expiry_info({}) == ExpiryInfo("No expiry", False)

    @pytest.mark.parametrize("exp", ["1700000000", None, True, [1]])
    def test_non_numeric_exp(self, exp):
        assert expiry_info({"exp": exp}).text == "No expiry"

    @pytest.mark.parametrize("delta, text", [
        (30, "Expires in 30s"),
        (0, "Expires in 0s"),
        (59.5, "Expires in 59s"),
        (60, "Expires in 1m"),
        (3599, "Expires in 59m"),
        (7200, "Expires in 2h"),
        (3 * 86400 + 5, "Expires in 3d"),
    ])
    def test_future(self, delta, text):
        info = expiry_info({"exp": 1_700_000_000 + delta}, now=1_700_000_000)
        assert info == ExpiryInfo(text, False)

    @pytest.mark.parametrize("delta, text", [
        (1, "Expired 1s ago"),
        (90, "Expired 1m ago"),
        (7200, "Expired 2h ago"),
        (86400 * 10, "Expired 10d ago"),
    ])
    def test_past(self, delta, text):
        info = expiry_info({"exp": 1_700_000_000}, now=1_700_000_000 + delta)
        assert info == ExpiryInfo(text, True)

    def test_far_future_float(self):
        info = expiry_info(json.loads('{"exp": 1e306}'), now=1_700_000_000)
        assert info.is_expired is False
        assert info.text.startswith("Expires in ")
        assert info.text.endswith("d")

    def test_huge_integer(self):
        info = expiry_info({"exp": 10 ** 400}, now=1_700_000_000)
        assert info.text == f"Expires in {(10 ** 400 - 1_700_000_000) // 86400}d"

    def test_huge_negative_integer(self):
        info = expiry_info({"exp": -(10 ** 400)}, now=0)
        assert info.is_expired is True
        assert info.text == f"Expired {10 ** 400 // 86400}d ago"

    @pytest.mark.parametrize("raw", ['{"exp": 1e400}', '{"exp": -1e400}', '{"exp": NaN}'])
    def test_non_finite_exp(self, raw):
        assert expiry_info(json.loads(raw), now=1_700_000_000) == ExpiryInfo("No expiry", False)

    def test_sub_second_past(self):
        info = expiry_info({"exp": 1_700_000_000}, now=1_700_000_000.9995)
        assert info == ExpiryInfo("Expired 0s ago", True)

    def test_defaults_to_wall_clock(self):
        assert expiry_info({"exp": 1}).is_expired
        assert expiry_info({"exp": 32503680000}).text.startswith("Expires in")


class TestSignToken:
    @pytest.mark.parametrize("alg", list(JWT_ALGORITHMS))
    def test_round_trip(self, alg):
        token = asyncio.run(sign_token({"typ": "JWT"}, {"sub": "42"}, SECRET, alg))
        assert asyncio.run(verify_token(token, SECRET))
        assert parse_parts(token).header_claims() == {"typ": "JWT", "alg": alg}

    def test_compact_json(self):
        token = asyncio.run(sign_token({"typ": "JWT"}, {"sub": "42"}, SECRET))
        assert parse_parts(token).payload == '{"sub":"42"}'

    def test_overrides_alg(self):
        token = asyncio.run(sign_token({"alg": "none"}, {}, SECRET, "HS384"))
        assert parse_parts(token).header_claims()["alg"] == "HS384"

    def test_expires_in(self):
        token = asyncio.run(sign_token({}, {"sub": "1"}, SECRET, expires_in=3600, now=1000.9))
        assert parse_parts(token).payload_claims() == {"sub": "1", "exp": 4600}

    def test_does_not_mutate_inputs(self):
        header, payload = {"typ": "JWT"}, {"sub": "1"}
        asyncio.run(sign_token(header, payload, SECRET, expires_in=60))
        assert header == {"typ": "JWT"}
        assert payload == {"sub": "1"}

    def test_empty_secret_gives_unsigned_token(self):
        token = asyncio.run(sign_token({}, {"sub": "1"}, ""))
        assert token.endswith(".signature")
        assert parse_parts(token) is not None

    def test_rejects_asymmetric_algorithm(self):
        with pytest.raises(UnsupportedAlgorithmError):
            asyncio.run(sign_token({}, {}, SECRET, "RS256"))

    def test_pyjwt_accepts_token(self):
        token = asyncio.run(sign_token({"typ": "JWT"}, {"sub": "42"}, SECRET, "HS256", expires_in=600))
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert claims["sub"] == "42"


class TestVerifyToken:
    def test_pyjwt_token_verifies(self):
        token = jwt.encode({"sub": "42", "name": "Lan"}, SECRET, algorithm="HS256")
        assert asyncio.run(verify_token(token, SECRET))

    def test_wrong_secret(self):
        token = jwt.encode({"sub": "42"}, SECRET, algorithm="HS256")
        assert not asyncio.run(verify_token(token, "another-32-byte-long-secret-here"))

    def test_tampered_payload(self):
        token = asyncio.run(sign_token({}, {"admin": False}, SECRET))
        h, _, s = token.split(".")
        forged = f"{h}.{b64url.encode(json.dumps({'admin': True}))}.{s}"
        assert not asyncio.run(verify_token(forged, SECRET))

    def test_malformed_token(self):
        assert not asyncio.run(verify_token("not-a-token", SECRET))

    @pytest.mark.parametrize("header", ["not json", "[1, 2]"])
    def test_malformed_header(self, header):
        token = f"{b64url.encode(header)}.{b64url.encode('{}')}.sig"
        assert not asyncio.run(verify_token(token, SECRET))

    def test_header_without_alg(self):
        token = make_token({"typ": "JWT"}, {"sub": "1"}, "sig")
        assert asyncio.run(verify_token(token, SECRET)) is False

    def test_single_char_segments(self):
        assert asyncio.run(verify_token("a.b.c", SECRET)) is False

    def test_asymmetric_alg_raises(self):
        token = make_token({"alg": "RS256"}, {"sub": "1"}, "sig")
        with pytest.raises(UnsupportedAlgorithmError):
            asyncio.run(verify_token(token, SECRET))
