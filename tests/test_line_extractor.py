import pytest

from vendor_balance_recon.config import MatchingSettings
from vendor_balance_recon.matching.line_extractor import LineExtractor, extract_vendor_lines
from vendor_balance_recon.matching.vendor_matcher import vendor_present

VENDOR = "Comercial ABC Ltda"

LEDGER = """RAZAO DE FORNECEDORES
  COMERCIAL ABC LTDA   10/2024   1.500,00   42.151,99
Comercial ABC  saldo 300,00
OUTRO FORNECEDOR SA 9.999,99
ABC sem valor

Comercial ABC Ltda - cadastro
"""


class TestExtractVendorLines:
    def test_accepts_lines_at_extraction_threshold_in_order(self):
        matches = extract_vendor_lines(LEDGER, VENDOR)

        assert [m.original_line for m in matches] == [
            "COMERCIAL ABC LTDA   10/2024   1.500,00   42.151,99",
            "Comercial ABC  saldo 300,00",
            "Comercial ABC Ltda - cadastro",
        ]

    def test_captures_all_values_and_last_value(self):
        first, second, third = extract_vendor_lines(LEDGER, VENDOR)

        assert first.monetary_values == ["1.500,00", "42.151,99"]
        assert first.last_value == "42.151,99"
        assert first.score == 1.0
        assert first.normalized_line == "comercial abc ltda 10 2024 1 500 00 42 151 99"

        assert second.monetary_values == ["300,00"]
        assert second.score == pytest.approx(2 / 3)

        assert third.monetary_values == []
        assert third.last_value is None

    def test_never_returns_lines_below_threshold(self):
        matches = extract_vendor_lines(LEDGER, VENDOR)
        assert all(m.score >= 0.6 for m in matches)
        assert all("OUTRO" not in m.original_line for m in matches)

    def test_line_between_thresholds_is_extracted_but_not_present(self):
        text = "COMERCIAL ABC 1.000,00"

        assert vendor_present(VENDOR, text) is False
        assert len(extract_vendor_lines(text, VENDOR)) == 1

    def test_multiple_thousand_groups(self):
        text = "Comercial ABC Ltda total 1.234.567,00 juros 0,99"
        (match,) = extract_vendor_lines(text, VENDOR)
        assert match.monetary_values == ["1.234.567,00", "0,99"]
        assert match.last_value == "0,99"

    def test_values_without_two_decimals_are_ignored(self):
        text = "Comercial ABC Ltda 10/2024 R$ 1500 12,5"
        (match,) = extract_vendor_lines(text, VENDOR)
        assert match.monetary_values == []

    def test_invalid_input_yields_empty_result(self):
        assert extract_vendor_lines(None, VENDOR) == []
        assert extract_vendor_lines(LEDGER, None) == []
        assert extract_vendor_lines(LEDGER, "SA") == []

    def test_extraction_threshold_is_configurable(self):
        extractor = LineExtractor(MatchingSettings(extraction_threshold=0.9))
        matches = extractor.extract(LEDGER, VENDOR)
        assert len(matches) == 2
        assert all(m.score == 1.0 for m in matches)

    def test_full_width_digits_are_not_amounts(self):
        text = "ACME DISTRIBUIDORA ４２.１５１,９９"
        (match,) = extract_vendor_lines(text, "ACME Distribuidora")
        assert match.monetary_values == []
        assert match.last_value is None


class TestExtractionThresholdBoundary:
    FIVE_TOKEN_VENDOR = "Alfa Bravo Charlie Delta Echo"

    def test_score_exactly_at_threshold_is_extracted(self):
        text = "HEADER\nALFA BRAVO CHARLIE 1.000,00\nOTHER LINE\n"
        (match,) = extract_vendor_lines(text, self.FIVE_TOKEN_VENDOR)
        assert match.score == 0.6
        assert match.last_value == "1.000,00"

    def test_one_token_short_of_threshold_is_skipped(self):
        text = "HEADER\nALFA BRAVO 1.000,00\nOTHER LINE\n"
        assert extract_vendor_lines(text, self.FIVE_TOKEN_VENDOR) == []
