"""Modelos de entrada e saída da emissão de NFC-e."""

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from nfce_fiscal_br.utils.sefaz_urls import AMBIENTE_HOMOLOGACAO, AMBIENTE_PRODUCAO


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )


class OrderLine(_Frozen):
    """Item do pedido."""

    id: str
    name: str
    quantity: Decimal = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0)
    ncm: str = "39269090"
    cfop: str = "5102"
    unit: str = "UN"


class Order(_Frozen):
    id: str
    total_value: Decimal
    items: List[OrderLine] = Field(default_factory=list)


class Issuer(_Frozen):
    """Empresa emitente."""

    cnpj: str
    razao_social: str
    nome_fantasia: Optional[str] = None
    logradouro: Optional[str] = None
    numero: Optional[str] = None
    bairro: Optional[str] = None
    municipio: Optional[str] = None
    codigo_municipio: str
    uf: str
    cep: Optional[str] = None
    fone: Optional[str] = None
    inscricao_estadual: str
    crt: str = "1"


class TaxAuthorityConfig(_Frozen):
    """Configuração SEFAZ do emitente (série, ambiente e CSC)."""

    serie: int = Field(default=1, ge=0)
    ambiente: Literal["producao", "homologacao"] = "homologacao"
    csc_id: str
    csc: str = Field(..., repr=False)
    qrcode_url: Optional[str] = None
    url_chave: Optional[str] = None

    @property
    def tp_amb(self) -> str:
        """Código do ambiente (1=Produção, 2=Homologação)"""
        return AMBIENTE_PRODUCAO if self.ambiente == "producao" else AMBIENTE_HOMOLOGACAO


class TechResponsible(_Frozen):
    """Responsável técnico pelo sistema emissor."""

    cnpj: str
    contato: str
    email: str
    fone: Optional[str] = None


class EmissionSequence(_Frozen):
    numero: int = Field(..., gt=0)


class EmissionContext(_Frozen):
    """Tudo o que a montagem de uma NFC-e precisa."""

    order: Order
    issuer: Issuer
    tax_authority: TaxAuthorityConfig
    tech_responsible: TechResponsible
    sequence: EmissionSequence


class AccessKey(_Frozen):
    """Componentes da chave de acesso de 44 dígitos."""

    c_uf: str
    aamm: str
    cnpj: str
    modelo: str = "65"
    serie: str
    numero: str
    tp_emis: str = "1"
    cnf: str
    dv: int

    @property
    def corpo(self) -> str:
        return (
            f"{self.c_uf}{self.aamm}{self.cnpj}{self.modelo}"
            f"{self.serie}{self.numero}{self.tp_emis}{self.cnf}"
        )

    @property
    def chave(self) -> str:
        return f"{self.corpo}{self.dv}"

    def __str__(self):
        return self.chave


class EmittedDocument(_Frozen):
    """Resultado da montagem: XML não assinado e a chave de acesso."""

    xml: str
    access_key: str
    qrcode_url: str
    url_chave: str
