import pytest

from vendor_balance_recon.config import (
    ReconConfig,
    generate_default_config,
    get_default_config,
    load_config,
)
from vendor_balance_recon.utils.exceptions import ConfigurationError


class TestDefaults:
    def test_named_constants(self, config):
        assert config.matching.presence_threshold == 0.70
        assert config.matching.extraction_threshold == 0.60
        assert config.matching.token_length_cutoff == 2
        assert config.balance.equality_tolerance == 0.10

    def test_default_dict_matches_models(self):
        assert ReconConfig(**get_default_config()) == ReconConfig()

    def test_source_keys(self, config):
        assert config.sources.keys == ["balance_summary", "payables", "ledger"]
        assert config.sources.presence_source == "ledger"
        assert config.sources.label_for("ledger") == "Vendor Ledger"
        assert config.sources.label_for("payments") == "payments"


class TestLoadConfig:
    def test_without_file_uses_defaults(self):
        config = load_config(None)
        assert config.config_file_path is None
        assert config.matching.presence_threshold == 0.70

    def test_yaml_overrides_are_merged(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "matching:\n  extraction_threshold: 0.5\nbalance:\n  equality_tolerance: 0.02\n",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.matching.extraction_threshold == 0.5
        assert config.matching.presence_threshold == 0.70
        assert config.balance.equality_tolerance == 0.02
        assert config.config_file_path == str(path)

    def test_out_of_range_threshold_is_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("matching:\n  presence_threshold: 1.5\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_invalid_yaml_is_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("matching: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_non_mapping_yaml_is_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_presence_source_must_be_a_source_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("sources:\n  presence_source: bank\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(path)


class TestGenerateDefaultConfig:
    def test_generated_file_loads_back(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"
        generate_default_config(path)

        assert path.read_text(encoding="utf-8").startswith("# Vendor Balance")
        config = load_config(path)
        assert config.matching == ReconConfig().matching
        assert config.balance == ReconConfig().balance
