import logging
from decimal import Decimal

import pydantic
import pytest
from loguru import logger

from nfce_fiscal_br.config import Settings, get_settings
from nfce_fiscal_br.logger import configure_logging
from nfce_fiscal_br.schemas import TaxAuthorityConfig


def test_settings_padrao(monkeypatch):
    for var in ("NFCE_LOG_LEVEL", "NFCE_VER_PROC", "NFCE_ALIQUOTA_TRIBUTOS_APROXIMADOS"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings(_env_file=None)
    assert settings.log_level == "INFO"
    assert settings.ver_proc == "NFCePlus_1.0"
    assert settings.aliquota_tributos_aproximados == Decimal("0.267")


def test_settings_do_ambiente(monkeypatch):
    monkeypatch.setenv("NFCE_VER_PROC", "Caixa_3.1")
    monkeypatch.setenv("NFCE_ALIQUOTA_TRIBUTOS_APROXIMADOS", "0.15")
    settings = Settings(_env_file=None)
    assert settings.ver_proc == "Caixa_3.1"
    assert settings.aliquota_tributos_aproximados == Decimal("0.15")


def test_settings_rejeita_aliquota_fora_da_faixa():
    with pytest.raises(pydantic.ValidationError):
        Settings(_env_file=None, aliquota_tributos_aproximados="1.5")


def test_get_settings_em_cache():
    assert get_settings() is get_settings()


def test_csc_fora_do_repr():
    config = TaxAuthorityConfig(csc_id="1", csc="SEGREDO")
    assert "SEGREDO" not in repr(config)
    assert config.tp_amb == "2"


@pytest.fixture
def restore_logging():
    yield
    logger.remove()
    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)


def test_configure_logging_intercepta_logging_padrao(capsys, restore_logging):
    configure_logging("DEBUG")
    logging.getLogger("nfce.teste").warning("mensagem do logging padrão")
    logger.info("mensagem do loguru")

    out = capsys.readouterr().out
    assert "mensagem do logging padrão" in out
    assert "mensagem do loguru" in out


def test_configure_logging_respeita_nivel(capsys, restore_logging):
    configure_logging("WARNING")
    logger.info("nao deve aparecer")
    logger.warning("deve aparecer")

    out = capsys.readouterr().out
    assert "nao deve aparecer" not in out
    assert "deve aparecer" in out
