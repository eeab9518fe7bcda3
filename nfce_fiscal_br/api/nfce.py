"""
API para montagem da NFCe
"""

from datetime import datetime, timedelta, timezone

from loguru import logger

from nfce_fiscal_br.config import get_settings
from nfce_fiscal_br.exceptions import ValidationError
from nfce_fiscal_br.schemas import EmissionContext, EmittedDocument
from nfce_fiscal_br.services.access_key import AccessKeyBuilder
from nfce_fiscal_br.services.qrcode import QRCodeBuilder
from nfce_fiscal_br.services.tax import FlatRateTaxEstimator
from nfce_fiscal_br.services.validators import validar_contexto
from nfce_fiscal_br.services.xml_builder import XMLBuilder
from nfce_fiscal_br.utils.sefaz_urls import get_url_consulta

# Horário de Brasília
BRT = timezone(timedelta(hours=-3))


def _data_emissao(emitted_at):
    if emitted_at is None:
        return datetime.now(BRT).replace(microsecond=0)
    if emitted_at.tzinfo is None:
        return emitted_at.replace(tzinfo=BRT, microsecond=0)
    return emitted_at.replace(microsecond=0)


def emitir_nfce(context, emitted_at=None, nonce=None, rng=None,
                tax_estimator=None, settings=None, validate=False):
    """
    Monta o XML de uma NFC-e e sua chave de acesso

    Args:
        context: EmissionContext (ou dict com a mesma estrutura)
        emitted_at: Data/hora da emissão (padrão: agora, horário de Brasília)
        nonce: cNF fixo; gerado aleatoriamente quando omitido
        rng: Gerador aleatório usado para o cNF
        tax_estimator: Cálculo do vTotTrib (padrão: alíquota das configurações)
        settings: Settings (padrão: get_settings())
        validate: Executa o NFCeValidator antes de montar

    Returns:
        EmittedDocument: XML não assinado, chave e URLs do QR Code
    """
    if not isinstance(context, EmissionContext):
        context = EmissionContext.model_validate(context)

    settings = settings or get_settings()

    if validate:
        resultado = validar_contexto(context)
        for warning in resultado["warnings"]:
            logger.warning("Pedido {}: {}", context.order.id, warning)
        if not resultado["valid"]:
            raise ValidationError(
                f"Pedido {context.order.id} não pode gerar NFC-e",
                errors=resultado["errors"],
            )

    issuer = context.issuer
    tax_authority = context.tax_authority
    data_emissao = _data_emissao(emitted_at)

    logger.info(
        "Montando NFC-e do pedido {} (série {}, número {})",
        context.order.id, tax_authority.serie, context.sequence.numero,
    )

    access_key = AccessKeyBuilder(rng).build(
        uf=issuer.uf,
        emitted_at=data_emissao,
        cnpj=issuer.cnpj,
        serie=tax_authority.serie,
        numero=context.sequence.numero,
        cnf=nonce,
    )

    qrcode = QRCodeBuilder(tax_authority.csc_id, tax_authority.csc)
    qrcode_url = qrcode.url(
        access_key.chave, tax_authority.tp_amb, issuer.uf, url_base=tax_authority.qrcode_url
    )
    url_chave = get_url_consulta(issuer.uf, tax_authority.tp_amb, override=tax_authority.url_chave)

    if tax_estimator is None:
        tax_estimator = FlatRateTaxEstimator(settings.aliquota_tributos_aproximados)

    xml = XMLBuilder(
        context,
        access_key,
        qrcode_url,
        url_chave,
        data_emissao,
        tax_estimator=tax_estimator,
        ver_proc=settings.ver_proc,
    ).build()

    logger.info("NFC-e do pedido {} montada: chave {}", context.order.id, access_key.chave)

    return EmittedDocument(
        xml=xml,
        access_key=access_key.chave,
        qrcode_url=qrcode_url,
        url_chave=url_chave,
    )


def gerar_xml_nfce(context, **kwargs):
    """
    Variante que retorna dict

    Returns:
        dict: {"xml": ..., "chave_acesso": ...}
    """
    documento = emitir_nfce(context, **kwargs)
    return {
        "xml": documento.xml,
        "chave_acesso": documento.access_key,
    }
