import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure the project root is on sys.path so `import nfce_fiscal_br` works in tests
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from nfce_fiscal_br.schemas import EmissionContext  # noqa: E402

BRT = timezone(timedelta(hours=-3))

CNPJ_EMITENTE = "11.222.333/0001-81"
CNPJ_RESP_TEC = "11.444.777/0001-61"


@pytest.fixture
def emitted_at():
    """Data/hora fixa de emissão (janeiro de 2024, Brasília)."""
    return datetime(2024, 1, 15, 10, 30, 0, tzinfo=BRT)


@pytest.fixture
def issuer_data():
    """Emitente válido em Palmas/TO."""
    return {
        "cnpj": CNPJ_EMITENTE,
        "razao_social": "Loja Exemplo LTDA",
        "nome_fantasia": "Loja Exemplo",
        "logradouro": "Quadra 104 Norte",
        "numero": "10",
        "bairro": "Plano Diretor Norte",
        "municipio": "Palmas",
        "codigo_municipio": "1721000",
        "uf": "TO",
        "cep": "77001-002",
        "fone": "(63) 3212-0000",
        "inscricao_estadual": "29.000.000-0",
        "crt": "1",
    }


@pytest.fixture
def tax_authority_data():
    """Configuração SEFAZ em homologação."""
    return {
        "serie": 1,
        "ambiente": "homologacao",
        "csc_id": "1",
        "csc": "ABC123",
    }


@pytest.fixture
def tech_responsible_data():
    return {
        "cnpj": CNPJ_RESP_TEC,
        "contato": "Suporte Técnico",
        "email": "suporte@example.com",
        "fone": "(63) 99999-0000",
    }


@pytest.fixture
def order_data():
    """Pedido com um item de R$ 25,00."""
    return {
        "id": "1001",
        "total_value": "25.00",
        "items": [
            {"id": "7", "name": "Caneca", "quantity": "1", "unit_price": "25.00"},
        ],
    }


@pytest.fixture
def context_data(order_data, issuer_data, tax_authority_data, tech_responsible_data):
    return {
        "order": order_data,
        "issuer": issuer_data,
        "tax_authority": tax_authority_data,
        "tech_responsible": tech_responsible_data,
        "sequence": {"numero": 123},
    }


@pytest.fixture
def context(context_data):
    """EmissionContext completo e válido."""
    return EmissionContext.model_validate(context_data)
