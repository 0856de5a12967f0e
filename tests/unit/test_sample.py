"""Tests for the Sample model and error signatures."""

from __future__ import annotations

import pytest

from loadstats.sample import ASSERTION_FAILED, Sample, error_signature, is_success_code


def _make_sample(
    code: str = "500",
    message: str = "Internal Error",
    failure: str | None = None,
    success: bool = False,
) -> Sample:
    return Sample(
        name="Test",
        success=success,
        response_code=code,
        response_message=message,
        failure_message=failure,
    )


class TestIsSuccessCode:
    @pytest.mark.parametrize("code", ["200", "204", "302", "399"])
    def test_success_range(self, code: str) -> None:
        assert is_success_code(code)

    @pytest.mark.parametrize("code", ["199", "400", "500", "0"])
    def test_outside_range(self, code: str) -> None:
        assert not is_success_code(code)

    @pytest.mark.parametrize(
        "code",
        ["", "Non HTTP response code: java.net.ConnectException", "2OO", "-200", " 200"],
    )
    def test_non_numeric_is_not_success(self, code: str) -> None:
        assert not is_success_code(code)


class TestErrorSignature:
    def test_code_and_message(self):
        assert error_signature(_make_sample()) == "500/Internal Error"

    def test_empty_message_drops_segment(self):
        assert error_signature(_make_sample(code="503", message="")) == "503"

    def test_non_numeric_code_uses_code_and_message(self):
        sample = _make_sample(code="Non HTTP response code: Timeout", message="Read timed out")
        assert error_signature(sample) == "Non HTTP response code: Timeout/Read timed out"

    def test_assertion_failure_uses_failure_message(self):
        sample = _make_sample(code="200", message="OK", failure="Expected token")
        assert error_signature(sample) == "Expected token"

    def test_assertion_failure_without_message_uses_sentinel(self):
        sample = _make_sample(code="200", message="OK")
        assert error_signature(sample) == ASSERTION_FAILED

    def test_assertion_message_option_disabled(self):
        sample = _make_sample(code="200", message="OK", failure="Expected token")
        assert error_signature(sample, use_assertion_message=False) == ASSERTION_FAILED

    def test_messages_are_json_escaped(self):
        sample = _make_sample(code="200", failure='Expected "ok"\nGot nothing')
        assert error_signature(sample) == 'Expected \\"ok\\"\\nGot nothing'

    def test_slashes_in_messages_are_escaped(self):
        sample = _make_sample(code="404", message="Not Found: /api/users")
        assert error_signature(sample) == "404/Not Found: \\/api\\/users"

    def test_non_ascii_is_unicode_escaped(self):
        sample = _make_sample(code="200", failure="Réponse vide")
        assert error_signature(sample) == "R\\u00E9ponse vide"

    def test_astral_characters_become_surrogate_pairs(self):
        sample = _make_sample(code="500", message="boom \U0001f600")
        assert error_signature(sample) == "500/boom \\uD83D\\uDE00"

    def test_other_control_characters_are_unicode_escaped(self):
        sample = _make_sample(code="500", message="a\x01b\tc")
        assert error_signature(sample) == "500/a\\u0001b\\tc"


class TestSampleLabel:
    def test_plain_label(self):
        sample = Sample(name="Login", success=True, thread_group="Users")
        assert sample.label() == "Login"

    def test_label_with_group(self):
        sample = Sample(name="Login", success=True, thread_group="Users")
        assert sample.label(include_group=True) == "Users:Login"

    def test_label_with_group_but_no_group_name(self):
        sample = Sample(name="Login", success=True)
        assert sample.label(include_group=True) == "Login"

    def test_frozen(self):
        sample = Sample(name="Login", success=True)
        with pytest.raises(AttributeError):
            sample.name = "Other"  # type: ignore[misc]
