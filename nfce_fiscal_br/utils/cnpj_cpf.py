"""
Validação de CNPJ e da chave de acesso da NFC-e
"""

from nfce_fiscal_br.utils.formatters import somente_digitos

# Pesos de 2 a 9, repetindo, aplicados da direita para a esquerda
PESOS_CHAVE = [2, 3, 4, 5, 6, 7, 8, 9]

PESOS_CNPJ_DV1 = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
PESOS_CNPJ_DV2 = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]


def _dv_modulo_11(soma):
    resto = soma % 11
    return 0 if resto < 2 else 11 - resto


def validar_cnpj(cnpj):
    """
    Valida um CNPJ

    Args:
        cnpj: CNPJ com ou sem formatação

    Returns:
        bool: True se válido, False caso contrário
    """
    cnpj = somente_digitos(cnpj)

    if len(cnpj) != 14:
        return False

    # Todos os dígitos iguais passam no cálculo mas são inválidos
    if cnpj == cnpj[0] * 14:
        return False

    dv1 = _dv_modulo_11(sum(int(cnpj[i]) * PESOS_CNPJ_DV1[i] for i in range(12)))
    if int(cnpj[12]) != dv1:
        return False

    dv2 = _dv_modulo_11(sum(int(cnpj[i]) * PESOS_CNPJ_DV2[i] for i in range(13)))
    return int(cnpj[13]) == dv2


def calcular_dv_chave_nfe(chave):
    """
    Calcula o dígito verificador da chave de acesso (módulo 11)

    Args:
        chave: Primeiros 43 dígitos da chave

    Returns:
        int: Dígito verificador
    """
    if len(chave) != 43 or not chave.isdigit():
        raise ValueError("Chave deve ter 43 dígitos para cálculo do DV")

    soma = 0
    for i, digito in enumerate(reversed(chave)):
        soma += int(digito) * PESOS_CHAVE[i % 8]

    return _dv_modulo_11(soma)


def validar_chave_nfe(chave):
    """
    Valida uma chave de acesso de 44 dígitos

    Returns:
        bool: True se o DV confere
    """
    chave = somente_digitos(chave)

    if len(chave) != 44:
        return False

    return calcular_dv_chave_nfe(chave[:43]) == int(chave[43])


def parse_chave_nfe(chave):
    """
    Separa a chave de acesso em seus componentes

    Returns:
        dict: Componentes da chave ou None se o tamanho for inválido
    """
    chave = somente_digitos(chave)

    if len(chave) != 44:
        return None

    return {
        "cUF": chave[0:2],
        "AAMM": chave[2:6],
        "CNPJ": chave[6:20],
        "mod": chave[20:22],
        "serie": chave[22:25],
        "nNF": chave[25:34],
        "tpEmis": chave[34:35],
        "cNF": chave[35:43],
        "cDV": chave[43:44],
    }


def validar_inscricao_estadual(ie, uf):
    """
    Validação básica de tamanho da Inscrição Estadual

    Args:
        ie: Inscrição Estadual
        uf: Sigla do estado

    Returns:
        bool: True se o tamanho é aceito para a UF
    """
    if not ie or str(ie).upper() == "ISENTO":
        return True

    ie = somente_digitos(ie)

    # Tamanhos válidos por UF (aproximado)
    tamanhos = {
        "AC": [13], "AL": [9], "AP": [9], "AM": [9], "BA": [8, 9],
        "CE": [9], "DF": [13], "ES": [9], "GO": [9], "MA": [9],
        "MT": [11], "MS": [9], "MG": [13], "PA": [9], "PB": [9],
        "PR": [10], "PE": [9, 14], "PI": [9], "RJ": [8], "RN": [9, 10],
        "RS": [10], "RO": [14], "RR": [9], "SC": [9], "SP": [12],
        "SE": [9], "TO": [9, 11]
    }

    uf = (uf or "").upper()
    if uf in tamanhos:
        return len(ie) in tamanhos[uf]

    return 8 <= len(ie) <= 14
