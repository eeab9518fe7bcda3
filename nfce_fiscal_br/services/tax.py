"""
Valor aproximado dos tributos (Lei da Transparência, vTotTrib)

A alíquota fixa é apenas uma estimativa e não substitui o cálculo por
CFOP/CST de cada item.
"""

from decimal import Decimal

from nfce_fiscal_br.utils.formatters import format_decimal


class TaxEstimator:
    """Interface para o cálculo do vTotTrib"""

    def estimate_item(self, line, line_total):
        """
        Tributos aproximados de um item

        Args:
            line: OrderLine
            line_total: vProd do item já formatado (str com 2 casas)

        Returns:
            str: Valor com 2 casas decimais
        """
        raise NotImplementedError

    def estimate_total(self, order, total):
        """Tributos aproximados da nota, a partir do vNF formatado"""
        raise NotImplementedError


class FlatRateTaxEstimator(TaxEstimator):
    """Aplica uma alíquota única sobre o valor"""

    def __init__(self, rate=None):
        if rate is None:
            from nfce_fiscal_br.config import get_settings
            rate = get_settings().aliquota_tributos_aproximados
        self.rate = Decimal(str(rate))

    def estimate_item(self, line, line_total):
        return format_decimal(Decimal(line_total) * self.rate, 2)

    def estimate_total(self, order, total):
        return format_decimal(Decimal(total) * self.rate, 2)
