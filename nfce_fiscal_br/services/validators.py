"""
Validators - Validações do contexto de emissão da NFC-e
"""

from decimal import Decimal

from nfce_fiscal_br.utils.cnpj_cpf import validar_cnpj, validar_inscricao_estadual
from nfce_fiscal_br.utils.formatters import format_decimal, somente_digitos
from nfce_fiscal_br.utils.ibge import UF_CODES

MAX_ITENS = 990
MAX_SERIE = 999
MAX_NUMERO = 999999999


class NFCeValidator:
    """Validador do contexto de emissão"""

    def __init__(self, context):
        """
        Inicializa o validador

        Args:
            context: EmissionContext
        """
        self.ctx = context
        self.errors = []
        self.warnings = []

    def validate(self):
        """
        Executa todas as validações

        Returns:
            tuple: (is_valid, errors, warnings)
        """
        self.errors = []
        self.warnings = []

        self._validate_emitente()
        self._validate_sefaz()
        self._validate_itens()
        self._validate_totais()
        self._validate_resp_tec()

        return len(self.errors) == 0, self.errors, self.warnings

    def _validate_emitente(self):
        """Valida dados da empresa emitente"""
        issuer = self.ctx.issuer

        if not validar_cnpj(issuer.cnpj):
            self.errors.append("CNPJ da empresa inválido")

        uf = (issuer.uf or "").upper()
        if uf not in UF_CODES:
            self.errors.append(f"UF inválida: {issuer.uf}")

        if not issuer.inscricao_estadual:
            self.errors.append("Inscrição Estadual da empresa não configurada")
        elif uf in UF_CODES and not validar_inscricao_estadual(issuer.inscricao_estadual, uf):
            self.warnings.append("Inscrição Estadual da empresa pode estar inválida")

        codigo_municipio = somente_digitos(issuer.codigo_municipio)
        if len(codigo_municipio) != 7:
            self.errors.append("Código do município da empresa deve ter 7 dígitos")
        elif uf in UF_CODES and codigo_municipio[:2] != UF_CODES[uf]:
            self.warnings.append("Código do município não pertence à UF do emitente")

        if issuer.cep and len(somente_digitos(issuer.cep)) != 8:
            self.errors.append("CEP deve ter 8 dígitos")

        campos_obrigatorios = [
            ("logradouro", "Logradouro"),
            ("numero", "Número"),
            ("bairro", "Bairro"),
            ("municipio", "Município"),
        ]
        for campo, label in campos_obrigatorios:
            if not getattr(issuer, campo, None):
                self.errors.append(f"{label} do emitente é obrigatório")

    def _validate_sefaz(self):
        """Valida série, numeração e CSC"""
        tax_authority = self.ctx.tax_authority

        if tax_authority.serie > MAX_SERIE:
            self.errors.append(f"Série deve ter no máximo 3 dígitos: {tax_authority.serie}")

        if self.ctx.sequence.numero > MAX_NUMERO:
            self.errors.append(f"Número da NFC-e deve ter no máximo 9 dígitos: {self.ctx.sequence.numero}")

        if not tax_authority.csc or not tax_authority.csc_id:
            self.errors.append("CSC e ID do CSC são obrigatórios para NFC-e")

    def _validate_itens(self):
        """Valida itens do pedido"""
        items = self.ctx.order.items

        if not items:
            self.errors.append("A nota deve ter pelo menos um item")
            return

        if len(items) > MAX_ITENS:
            self.errors.append(f"Máximo de {MAX_ITENS} itens por nota")

        for idx, item in enumerate(items, 1):
            prefix = f"Item {idx}: "

            if not item.name:
                self.errors.append(prefix + "Descrição é obrigatória")

            if len(somente_digitos(item.ncm)) != 8:
                self.errors.append(prefix + "NCM deve ter 8 dígitos")

            if len(somente_digitos(item.cfop)) != 4:
                self.errors.append(prefix + "CFOP deve ter 4 dígitos")

            if item.quantity <= 0:
                self.errors.append(prefix + "Quantidade deve ser maior que zero")

            if item.unit_price < 0:
                self.errors.append(prefix + "Valor unitário não pode ser negativo")

    def _validate_totais(self):
        """Valida o total do pedido contra a soma dos itens"""
        order = self.ctx.order

        if order.total_value <= 0:
            self.errors.append("Valor total da nota deve ser maior que zero")

        soma_itens = sum(
            (Decimal(format_decimal(item.quantity * item.unit_price, 2)) for item in order.items),
            Decimal("0"),
        )
        if abs(soma_itens - order.total_value) > Decimal("0.01"):
            self.warnings.append("Soma dos itens difere do valor total do pedido")

    def _validate_resp_tec(self):
        """Valida o responsável técnico"""
        tech = self.ctx.tech_responsible

        if not validar_cnpj(tech.cnpj):
            self.errors.append("CNPJ do responsável técnico inválido")

        if not tech.contato:
            self.errors.append("Contato do responsável técnico é obrigatório")

        if not tech.email or "@" not in tech.email:
            self.errors.append("E-mail do responsável técnico inválido")


def validar_contexto(context):
    """
    Valida um contexto de emissão

    Returns:
        dict: Resultado da validação
    """
    is_valid, errors, warnings = NFCeValidator(context).validate()

    return {
        "valid": is_valid,
        "errors": errors,
        "warnings": warnings
    }
