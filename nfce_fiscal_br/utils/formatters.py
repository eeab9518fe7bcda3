"""
Formatação de campos do leiaute da NFC-e
"""

import re
from decimal import Decimal, ROUND_HALF_UP

from nfce_fiscal_br.exceptions import FieldOverflowError

XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}

_XML_RESERVADOS = re.compile(r"[&<>\"']")


def pad(number, width):
    """
    Preenche um inteiro com zeros à esquerda até a largura fixa

    Args:
        number: Inteiro não negativo (ou string de dígitos)
        width: Largura do campo

    Returns:
        str: Número com exatamente `width` dígitos

    Raises:
        FieldOverflowError: se o número já tiver mais dígitos que a largura
    """
    value = int(number)
    if value < 0:
        raise ValueError(f"Valor negativo não pode ser preenchido: {number}")

    digits = str(value)
    if len(digits) > width:
        raise FieldOverflowError(number, width)

    return digits.zfill(width)


def escape_xml(text):
    """
    Substitui os cinco caracteres reservados do XML

    Args:
        text: Texto livre (None vira string vazia)

    Returns:
        str: Texto seguro para conteúdo de elemento
    """
    if text is None:
        return ""
    return _XML_RESERVADOS.sub(lambda m: XML_ESCAPES[m.group(0)], str(text))


def format_decimal(value, places=2):
    """
    Formata um valor com casas decimais fixas (arredondamento ROUND_HALF_UP)

    Floats são convertidos pelo texto para não herdar erro binário.
    Valores malformados levantam decimal.InvalidOperation.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    quantum = Decimal(1).scaleb(-places)
    return f"{value.quantize(quantum, rounding=ROUND_HALF_UP):.{places}f}"


def somente_digitos(value):
    """Remove tudo que não for dígito"""
    if value is None:
        return ""
    return re.sub(r"[^0-9]", "", str(value))
