import random
from datetime import datetime

import pytest

from nfce_fiscal_br.exceptions import ConfigurationError, FieldOverflowError, ValidationError
from nfce_fiscal_br.services.access_key import AccessKeyBuilder
from nfce_fiscal_br.utils.cnpj_cpf import validar_chave_nfe


def _build(builder=None, **overrides):
    params = dict(
        uf="TO",
        emitted_at=datetime(2024, 1, 15, 10, 30),
        cnpj="11.222.333/0001-81",
        serie=1,
        numero=123,
        cnf="12345678",
    )
    params.update(overrides)
    return (builder or AccessKeyBuilder()).build(**params)


def test_chave_com_cnf_fixo():
    key = _build()
    assert key.corpo == "1724011122233300018165001000000123112345678"
    assert key.dv == 5
    assert key.chave == "17240111222333000181650010000001231123456785"
    assert str(key) == key.chave


def test_chave_tem_44_digitos_e_dv_valido():
    builder = AccessKeyBuilder(random.Random(7))
    for numero in (1, 999, 123456789):
        key = _build(builder, numero=numero, cnf=None)
        assert len(key.chave) == 44
        assert key.chave.isdigit()
        assert validar_chave_nfe(key.chave)


def test_cnf_gerado_tem_8_digitos():
    builder = AccessKeyBuilder(random.Random(1))
    for _ in range(100):
        cnf = builder.gerar_cnf()
        assert len(cnf) == 8
        assert 1 <= int(cnf) <= 99999999


def test_nonces_diferentes_geram_chaves_diferentes():
    a = _build(cnf="00000001")
    b = _build(cnf="00000002")
    assert a.chave != b.chave
    assert a.corpo[:35] == b.corpo[:35]
    assert validar_chave_nfe(a.chave) and validar_chave_nfe(b.chave)


def test_rng_injetado_torna_chave_reproduzivel():
    a = _build(AccessKeyBuilder(random.Random(42)), cnf=None)
    b = _build(AccessKeyBuilder(random.Random(42)), cnf=None)
    assert a.chave == b.chave


def test_cnpj_formatado_e_limpo():
    key = _build(cnpj="11222333000181")
    assert key.cnpj == "11222333000181"
    assert key.chave == _build().chave


def test_cnpj_com_tamanho_errado():
    with pytest.raises(ValidationError):
        _build(cnpj="123")


def test_numero_acima_de_9_digitos():
    with pytest.raises(FieldOverflowError):
        _build(numero=1000000000)


def test_serie_acima_de_3_digitos():
    with pytest.raises(FieldOverflowError):
        _build(serie=1000)


def test_cnf_invalido():
    with pytest.raises(FieldOverflowError):
        _build(cnf="123456789")
    with pytest.raises(ValueError):
        _build(cnf="0")


def test_uf_desconhecida():
    with pytest.raises(ConfigurationError):
        _build(uf="XX")
