"""
Códigos IBGE de UF
"""

from nfce_fiscal_br.exceptions import ConfigurationError

# Códigos IBGE das UFs
UF_CODES = {
    "AC": "12", "AL": "27", "AP": "16", "AM": "13", "BA": "29",
    "CE": "23", "DF": "53", "ES": "32", "GO": "52", "MA": "21",
    "MT": "51", "MS": "50", "MG": "31", "PA": "15", "PB": "25",
    "PR": "41", "PE": "26", "PI": "22", "RJ": "33", "RN": "24",
    "RS": "43", "RO": "11", "RR": "14", "SC": "42", "SP": "35",
    "SE": "28", "TO": "17"
}


def get_codigo_uf(uf):
    """
    Retorna o código IBGE (2 dígitos) da UF

    Raises:
        ConfigurationError: se a sigla não for uma UF
    """
    codigo = UF_CODES.get((uf or "").strip().upper())
    if not codigo:
        raise ConfigurationError(f"UF desconhecida: {uf!r}")
    return codigo
