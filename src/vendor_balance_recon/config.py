"""Configuration loader and validation for vendor reconciliation settings."""

from pathlib import Path
from typing import Any, Optional
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError

from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Brazilian-locale currency figure: 42.151,99
BRL_AMOUNT_PATTERN = r"[0-9]{1,3}(?:\.[0-9]{3})*,[0-9]{2}"


class InputConfig(BaseModel):
    """Configuration for reading extracted report texts."""

    encoding: str = "utf-8"


class MatchingSettings(BaseModel):
    """Vendor matching and line extraction settings."""

    # Tokens must be longer than this to count (drops "de", "sa", "e")
    token_length_cutoff: int = Field(default=2, ge=0)
    # Strict yes/no gate used before deeper processing
    presence_threshold: float = Field(default=0.70, ge=0.0, le=1.0)
    # Permissive evidence collection, tolerates wrapped lines
    extraction_threshold: float = Field(default=0.60, ge=0.0, le=1.0)
    amount_pattern: str = BRL_AMOUNT_PATTERN


class BalanceSettings(BaseModel):
    """Cross-source balance comparison settings."""

    equality_tolerance: float = Field(default=0.10, ge=0.0)
    reference_precision: int = Field(default=2, ge=0)


class SourcesConfig(BaseModel):
    """Canonical report sources compared for a vendor."""

    keys: list[str] = Field(
        default_factory=lambda: ["balance_summary", "payables", "ledger"]
    )
    presence_source: str = "ledger"
    labels: dict[str, str] = Field(
        default_factory=lambda: {
            "balance_summary": "Trial Balance",
            "payables": "Accounts Payable",
            "ledger": "Vendor Ledger",
        }
    )

    def label_for(self, key: str) -> str:
        """Human readable name for a source key."""
        return self.labels.get(key, key)


class AnalysisConfig(BaseModel):
    """Configuration for the external reasoning service."""

    enabled: bool = True
    api_key_env: str = "OPENAI_API_KEY"
    base_url: Optional[str] = None
    model: str = "gpt-4.1-mini"
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    timeout: Optional[float] = 60.0
    max_retries: int = Field(default=2, ge=0)
    excerpt_chars: int = Field(default=8000, ge=0)
    preview_chars: int = Field(default=1000, ge=0)


class ExcelOutputConfig(BaseModel):
    """Configuration for Excel output."""

    filename_template: str = "vendor_reconciliation_{vendor}_{date}_{time}.xlsx"


class SheetConfig(BaseModel):
    """Configuration for a report sheet."""

    enabled: bool = True
    name: str


class SheetsConfig(BaseModel):
    """Configuration for all report sheets."""

    summary: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Summary"))
    vendor_lines: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Vendor Lines")
    )
    balances: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Balances"))


class OutputConfig(BaseModel):
    """Configuration for output."""

    excel: ExcelOutputConfig = Field(default_factory=ExcelOutputConfig)
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ReconConfig(BaseModel):
    """Main configuration model for vendor reconciliation."""

    input: InputConfig = Field(default_factory=InputConfig)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    balance: BalanceSettings = Field(default_factory=BalanceSettings)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_file_path: Optional[str] = None


def get_default_config() -> dict[str, Any]:
    """Return the default configuration as a dictionary."""
    return {
        "input": {
            "encoding": "utf-8",
        },
        "matching": {
            "token_length_cutoff": 2,
            "presence_threshold": 0.70,
            "extraction_threshold": 0.60,
            "amount_pattern": BRL_AMOUNT_PATTERN,
        },
        "balance": {
            "equality_tolerance": 0.10,
            "reference_precision": 2,
        },
        "sources": {
            "keys": ["balance_summary", "payables", "ledger"],
            "presence_source": "ledger",
            "labels": {
                "balance_summary": "Trial Balance",
                "payables": "Accounts Payable",
                "ledger": "Vendor Ledger",
            },
        },
        "analysis": {
            "enabled": True,
            "api_key_env": "OPENAI_API_KEY",
            "base_url": None,
            "model": "gpt-4.1-mini",
            "temperature": 0.1,
            "timeout": 60.0,
            "max_retries": 2,
            "excerpt_chars": 8000,
            "preview_chars": 1000,
        },
        "output": {
            "excel": {
                "filename_template": "vendor_reconciliation_{vendor}_{date}_{time}.xlsx",
            },
            "sheets": {
                "summary": {"enabled": True, "name": "Summary"},
                "vendor_lines": {"enabled": True, "name": "Vendor Lines"},
                "balances": {"enabled": True, "name": "Balances"},
            },
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    }


def load_config(config_path: Optional[Path] = None) -> ReconConfig:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        ReconConfig object with loaded or default settings

    Raises:
        ConfigurationError: If the file is not valid YAML or holds invalid values
    """
    config_dict = get_default_config()

    if config_path and config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigurationError(
                f"Configuration file must hold a mapping: {config_path}"
            )

        config_dict = _deep_merge(config_dict, user_config)
        config_dict["config_file_path"] = str(config_path)
    else:
        logger.info("Using default configuration")

    try:
        config = ReconConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    if config.sources.presence_source not in config.sources.keys:
        raise ConfigurationError(
            f"presence_source '{config.sources.presence_source}' "
            f"is not one of the source keys {config.sources.keys}"
        )

    return config


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge on top

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def generate_default_config(output_path: Path) -> None:
    """
    Generate a default configuration file.

    Args:
        output_path: Path to write the configuration file
    """
    config_dict = get_default_config()

    yaml_content = """# Vendor Balance Reconciliation Configuration
# presence_threshold and extraction_threshold are tuned independently;
# equality_tolerance is in currency units.

"""
    yaml_content += yaml.dump(config_dict, default_flow_style=False, sort_keys=False)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(yaml_content)

    logger.info(f"Generated configuration file: {output_path}")
