import pytest

from vendor_balance_recon.parsers.source_reader import SourceReader
from vendor_balance_recon.utils.exceptions import SourceReadError


class TestSourceReader:
    def test_reads_text_with_line_breaks(self, source_files, acme_texts):
        document = SourceReader().read("ledger", source_files["ledger"])

        assert document.key == "ledger"
        assert document.text == acme_texts["ledger"]
        assert document.original_name == "ledger.txt"
        assert document.size == len(acme_texts["ledger"])

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceReadError):
            SourceReader().read("ledger", tmp_path / "missing.txt")

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes("FORNECEDOR AÇÚCAR".encode("latin-1"))

        with pytest.raises(SourceReadError):
            SourceReader().read("ledger", path)

    def test_read_many_keeps_unknown_keys(self, tmp_path, source_files):
        extra = tmp_path / "payments.txt"
        extra.write_text("extrato", encoding="utf-8")

        documents = SourceReader().read_many({"ledger": source_files["ledger"], "payments": extra})

        assert list(documents) == ["ledger", "payments"]
        assert documents["payments"].text == "extrato"
