"""Tests for diagnostic codes, formatting, and the exception hierarchy."""

import pytest

from intlengine.diagnostics import (
    CompileError,
    Diagnostic,
    DiagnosticCode,
    DiscoveryError,
    FormattingError,
    IntlError,
    InvalidMessageKindError,
    UnresolvedLocaleVariantError,
)


class TestDiagnosticCode:
    """Tests for code numbering."""

    def test_codes_are_unique(self) -> None:
        """No two codes share a value."""
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "category"),
        [
            (DiagnosticCode.INVALID_MESSAGE_KIND, 1),
            (DiagnosticCode.UNRESOLVED_LOCALE_VARIANT, 1),
            (DiagnosticCode.FORMATTING_FAILED, 2),
            (DiagnosticCode.COMPILE_FAILED, 3),
            (DiagnosticCode.COMPILE_IO_FAILED, 3),
            (DiagnosticCode.ROOT_NOT_FOUND, 4),
            (DiagnosticCode.ROOT_NOT_DIRECTORY, 4),
        ],
    )
    def test_category_ranges(self, code: DiagnosticCode, category: int) -> None:
        """Codes live in their category's thousand range."""
        assert code.value // 1000 == category


class TestDiagnostic:
    """Tests for Diagnostic formatting."""

    def test_str_is_message(self) -> None:
        """str() gives the bare message."""
        diagnostic = Diagnostic(code=DiagnosticCode.COMPILE_FAILED, message="boom")
        assert str(diagnostic) == "boom"

    def test_format_error_minimal(self) -> None:
        """Only the header line is emitted without optional fields."""
        diagnostic = Diagnostic(code=DiagnosticCode.COMPILE_FAILED, message="boom")
        assert diagnostic.format_error() == "error[COMPILE_FAILED]: boom"

    def test_format_error_full(self) -> None:
        """Path, locale, and hint lines follow the header."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.COMPILE_FAILED,
            message="Failed to compile messages",
            hint="Fix the definition file and save it again",
            source_path="src/app/home.messages.js",
            locale="en-US",
        )
        assert diagnostic.format_error() == (
            "error[COMPILE_FAILED]: Failed to compile messages\n"
            "  --> src/app/home.messages.js\n"
            "  = locale: en-US\n"
            "  = help: Fix the definition file and save it again"
        )

    def test_warning_severity(self) -> None:
        """Severity is reflected in the header."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.FORMATTING_FAILED, message="odd", severity="warning"
        )
        assert diagnostic.format_error().startswith("warning[FORMATTING_FAILED]")

    def test_control_characters_escaped(self) -> None:
        """Terminal escape sequences cannot leak into output."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.COMPILE_FAILED,
            message="bad\x1b[31mred",
            source_path="a\nb.messages.js",
        )
        formatted = diagnostic.format_error()
        assert "\x1b" not in formatted
        assert "\\x1b[31m" in formatted
        assert "a\\nb.messages.js" in formatted

    def test_unicode_kept_readable(self) -> None:
        """Printable non-ASCII text is not escaped."""
        diagnostic = Diagnostic(code=DiagnosticCode.COMPILE_FAILED, message="Sveiki, pasaule ā")
        assert diagnostic.format_error().endswith("Sveiki, pasaule ā")


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_plain_message(self) -> None:
        """A plain string message leaves diagnostic unset."""
        error = IntlError("boom")
        assert str(error) == "boom"
        assert error.diagnostic is None

    def test_diagnostic_message(self) -> None:
        """A Diagnostic is stored and formatted into the message."""
        diagnostic = Diagnostic(code=DiagnosticCode.ROOT_NOT_FOUND, message="missing")
        error = DiscoveryError(diagnostic)
        assert error.diagnostic is diagnostic
        assert str(error) == "error[ROOT_NOT_FOUND]: missing"

    @pytest.mark.parametrize(
        "error",
        [
            InvalidMessageKindError("x"),
            UnresolvedLocaleVariantError("x", locale="lv"),
            FormattingError("x", "fallback"),
            CompileError("x", source_path="a.messages.js"),
            DiscoveryError("x"),
        ],
    )
    def test_all_derive_from_intl_error(self, error: IntlError) -> None:
        """Every error can be caught as IntlError."""
        assert isinstance(error, IntlError)

    def test_invalid_kind_is_type_error(self) -> None:
        """Invalid message kinds are also TypeErrors."""
        assert isinstance(InvalidMessageKindError("x"), TypeError)

    def test_error_attributes(self) -> None:
        """Domain-specific attributes are kept."""
        assert UnresolvedLocaleVariantError("x", locale="lv").locale == "lv"
        assert FormattingError("x", "1.5").fallback_value == "1.5"
        assert CompileError("x", source_path="a.messages.js").source_path == "a.messages.js"
