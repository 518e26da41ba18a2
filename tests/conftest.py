import logging

import pytest

from vendor_balance_recon.config import ReconConfig
from vendor_balance_recon.utils.logging_config import ROOT_LOGGER_NAME

LEDGER_TEXT = """RAZAO DE FORNECEDORES - PERIODO 10/2024
CONTA 2.1.1.01 FORNECEDORES NACIONAIS
ACME DISTRIBUIDORA LTDA 10/2024 42.151,99
BETA COMERCIO DE PECAS SA 10/2024 1.250,00
"""

PAYABLES_TEXT = """CONTAS A PAGAR EM ABERTO
acme distribuidora - saldo 42.152,00
gama servicos eireli - saldo 980,10
"""

BALANCE_SUMMARY_TEXT = """BALANCETE DE VERIFICACAO
2.1.1.01 Fornecedores 150.000,00
"""


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers bound to streams that CliRunner closes."""
    yield
    logging.getLogger(ROOT_LOGGER_NAME).handlers = []


@pytest.fixture
def config():
    return ReconConfig()


@pytest.fixture
def acme_texts():
    return {
        "ledger": LEDGER_TEXT,
        "payables": PAYABLES_TEXT,
        "balance_summary": BALANCE_SUMMARY_TEXT,
    }


@pytest.fixture
def source_files(tmp_path, acme_texts):
    paths = {}
    for key, text in acme_texts.items():
        path = tmp_path / f"{key}.txt"
        path.write_text(text, encoding="utf-8")
        paths[key] = path
    return paths
