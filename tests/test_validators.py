from nfce_fiscal_br.schemas import EmissionContext
from nfce_fiscal_br.services.validators import NFCeValidator, validar_contexto


def _validate(context_data):
    return NFCeValidator(EmissionContext.model_validate(context_data)).validate()


def test_contexto_valido(context):
    resultado = validar_contexto(context)
    assert resultado == {"valid": True, "errors": [], "warnings": []}


def test_emitente_invalido(context_data):
    context_data["issuer"].update({
        "cnpj": "11111111111111",
        "uf": "XX",
        "codigo_municipio": "123",
        "cep": "7700",
        "bairro": None,
    })
    is_valid, errors, _ = _validate(context_data)

    assert not is_valid
    assert "CNPJ da empresa inválido" in errors
    assert "UF inválida: XX" in errors
    assert "Código do município da empresa deve ter 7 dígitos" in errors
    assert "CEP deve ter 8 dígitos" in errors
    assert "Bairro do emitente é obrigatório" in errors


def test_municipio_de_outra_uf_gera_aviso(context_data):
    context_data["issuer"]["codigo_municipio"] = "3550308"
    is_valid, errors, warnings = _validate(context_data)
    assert is_valid
    assert "Código do município não pertence à UF do emitente" in warnings


def test_pedido_sem_itens(context_data):
    context_data["order"]["items"] = []
    is_valid, errors, _ = _validate(context_data)
    assert not is_valid
    assert "A nota deve ter pelo menos um item" in errors


def test_item_com_ncm_e_cfop_invalidos(context_data):
    context_data["order"]["items"][0].update({"ncm": "123", "cfop": "51"})
    is_valid, errors, _ = _validate(context_data)
    assert not is_valid
    assert "Item 1: NCM deve ter 8 dígitos" in errors
    assert "Item 1: CFOP deve ter 4 dígitos" in errors


def test_soma_dos_itens_difere_do_total(context_data):
    context_data["order"]["total_value"] = "30.00"
    is_valid, _, warnings = _validate(context_data)
    assert is_valid
    assert "Soma dos itens difere do valor total do pedido" in warnings


def test_numeracao_acima_da_largura(context_data):
    context_data["tax_authority"]["serie"] = 1000
    context_data["sequence"]["numero"] = 1000000000
    is_valid, errors, _ = _validate(context_data)
    assert not is_valid
    assert "Série deve ter no máximo 3 dígitos: 1000" in errors
    assert "Número da NFC-e deve ter no máximo 9 dígitos: 1000000000" in errors


def test_responsavel_tecnico_invalido(context_data):
    context_data["tech_responsible"].update({"cnpj": "123", "email": "sem-arroba"})
    is_valid, errors, _ = _validate(context_data)
    assert not is_valid
    assert "CNPJ do responsável técnico inválido" in errors
    assert "E-mail do responsável técnico inválido" in errors
