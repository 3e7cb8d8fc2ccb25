from __future__ import annotations

import unittest

import passgen.core as core
from passgen.core.bulk import generate_bulk
from passgen.core.credential_service import (
    analyze,
    embedded_wordlist_size,
    generate,
    generate_value,
    kind_for_request,
    resolve_kind,
)
from passgen.core.error_dialect import (
    CSPRNG_UNAVAILABLE,
    EXPORT_WRITE_FAILED,
    FATAL_CODES,
    INVALID_COUNT,
    INVALID_EXPORT,
    INVALID_REQUEST,
    UNKNOWN_KIND,
    WORDLIST_UNAVAILABLE,
    PassGenError,
    error_detail_from_exception,
    format_error_text,
    make_error,
)
from passgen.core.export import parse_delimited_text
from passgen.core.models import (
    GenerationKind,
    PassphraseRequest,
    PasswordRequest,
    PinRequest,
    StrengthLevel,
    UsernameRequest,
)
from passgen.core.passphrase_engine import WordlistUnavailableError, parse_wordlist


class ServiceLayerTests(unittest.TestCase):
    def test_generate_dispatches_by_kind(self) -> None:
        self.assertEqual(len(generate("password", PasswordRequest(length=10)).value), 10)
        self.assertTrue(generate(GenerationKind.PIN, PinRequest()).value.isdigit())
        self.assertEqual(generate("PASSPHRASE", PassphraseRequest(word_count=3)).word_count, 3)
        self.assertEqual(generate("username").kind, GenerationKind.USERNAME)

    def test_generate_value_returns_plain_string(self) -> None:
        value = generate_value("pin", PinRequest(length=6))
        self.assertIsInstance(value, str)
        self.assertEqual(len(value), 6)

    def test_kind_request_mismatch_is_rejected(self) -> None:
        with self.assertRaises(PassGenError) as ctx:
            generate("pin", PasswordRequest())
        self.assertEqual(ctx.exception.code, "invalid_request")

    def test_unknown_kind_is_rejected(self) -> None:
        with self.assertRaisesRegex(PassGenError, "unknown generation kind"):
            resolve_kind("token")

    def test_kind_for_request(self) -> None:
        self.assertEqual(kind_for_request(UsernameRequest()), GenerationKind.USERNAME)
        with self.assertRaises(PassGenError):
            kind_for_request(object())

    def test_injected_wordlist_is_used(self) -> None:
        wordlist = parse_wordlist("alpha\nbravo\ncharlie\n", "test")
        credential = generate("passphrase", PassphraseRequest(capitalize="none"), wordlist=wordlist)
        self.assertTrue(all(word in wordlist for word in credential.value.split("-")))
        self.assertEqual(credential.wordlist_size, 3)

    def test_analyze_accepts_string_credential_and_word_count(self) -> None:
        self.assertEqual(analyze("aB3$" * 4).level, StrengthLevel.VERY_STRONG)
        credential = generate("passphrase", PassphraseRequest(word_count=5))
        self.assertEqual(analyze(credential).word_count, 5)
        by_count = analyze(5)
        self.assertEqual(by_count.entropy_bits, analyze(credential).entropy_bits)
        self.assertEqual(analyze(4, wordlist_size=7776).entropy_bits, 51.7)
        self.assertGreater(embedded_wordlist_size(), 1000)

    def test_analyze_rejects_unsupported_subjects(self) -> None:
        with self.assertRaises(PassGenError):
            analyze(True)
        with self.assertRaises(PassGenError):
            analyze(3.5)

    def test_package_facade(self) -> None:
        self.assertEqual(len(core.generate("password", PasswordRequest(length=12)).value), 12)
        self.assertEqual(len(core.generate_bulk(3, PinRequest())), 3)
        self.assertEqual(core.analyze("").level, StrengthLevel.WEAK)


class ErrorDialectTests(unittest.TestCase):
    def test_codes_are_normalized(self) -> None:
        self.assertEqual(make_error(" Bad-Input.Value ", "x").code, "bad_input_value")
        self.assertEqual(make_error("", "x").code, INVALID_REQUEST)

    def test_format_error_text(self) -> None:
        self.assertEqual(format_error_text(make_error(INVALID_COUNT, "count too big")), "invalid_count: count too big")
        self.assertEqual(format_error_text(ValueError("plain")), "invalid_request: plain")

    def test_errors_are_value_errors(self) -> None:
        self.assertIsInstance(make_error("x", "y"), ValueError)
        self.assertTrue(issubclass(WordlistUnavailableError, PassGenError))

    def test_service_failures_carry_named_codes(self) -> None:
        with self.assertRaises(PassGenError) as ctx:
            resolve_kind("hash")
        self.assertEqual(ctx.exception.code, UNKNOWN_KIND)
        with self.assertRaises(PassGenError) as ctx:
            generate_bulk(0)
        self.assertEqual(ctx.exception.code, INVALID_COUNT)
        with self.assertRaises(PassGenError) as ctx:
            parse_delimited_text("Index,Password\n2,abc\n")
        self.assertEqual(ctx.exception.code, INVALID_EXPORT)

    def test_only_environment_failures_are_fatal(self) -> None:
        self.assertEqual(FATAL_CODES, {CSPRNG_UNAVAILABLE, WORDLIST_UNAVAILABLE, EXPORT_WRITE_FAILED})
        self.assertFalse(make_error(INVALID_COUNT, "x").as_detail().fatal)
        self.assertTrue(make_error(WORDLIST_UNAVAILABLE, "x").as_detail().fatal)
        self.assertTrue(error_detail_from_exception(OSError("x"), default_code=CSPRNG_UNAVAILABLE).fatal)


if __name__ == "__main__":
    unittest.main()
