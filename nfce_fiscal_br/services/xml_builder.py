"""
XML Builder para NFCe
Gera o XML da NFC-e (modelo 65) conforme leiaute 4.00 da SEFAZ
"""

from loguru import logger
from lxml import etree

from nfce_fiscal_br.exceptions import DocumentAssemblyError
from nfce_fiscal_br.services.tax import FlatRateTaxEstimator
from nfce_fiscal_br.utils.formatters import escape_xml, format_decimal, somente_digitos

# Namespace da NFe
NAMESPACE_NFE = "http://www.portalfiscal.inf.br/nfe"

VERSAO_LEIAUTE = "4.00"

ZERO = "0.00"


class XMLBuilder:
    """Construtor de XML para NFCe"""

    def __init__(self, context, access_key, qrcode_url, url_chave, emitted_at,
                 tax_estimator=None, ver_proc="NFCePlus_1.0"):
        """
        Inicializa o builder

        Args:
            context: EmissionContext com pedido, emitente e configurações
            access_key: AccessKey já calculada
            qrcode_url: URL completa do QR Code
            url_chave: URL de consulta por chave
            emitted_at: datetime com fuso da emissão (mesmo usado na chave)
            tax_estimator: Cálculo do vTotTrib (padrão: alíquota fixa)
            ver_proc: Versão do aplicativo emissor
        """
        self.ctx = context
        self.key = access_key
        self.qrcode_url = qrcode_url
        self.url_chave = url_chave
        self.emitted_at = emitted_at
        self.tax = tax_estimator or FlatRateTaxEstimator()
        self.ver_proc = ver_proc

    def build(self):
        """
        Constrói o XML completo da NFC-e (sem assinatura)

        Returns:
            str: XML da NFC-e
        """
        xml = []
        xml.append('<?xml version="1.0" encoding="UTF-8"?>')
        xml.append(f'<NFe xmlns="{NAMESPACE_NFE}">')
        xml.append(f'<infNFe versao="{VERSAO_LEIAUTE}" Id="NFe{self.key.chave}">')

        self._add_ide(xml)
        self._add_emit(xml)
        self._add_det(xml)
        self._add_total(xml)
        self._add_transp(xml)
        self._add_pag(xml)
        self._add_inf_resp_tec(xml)

        xml.append("</infNFe>")
        self._add_inf_nfe_supl(xml)
        xml.append("</NFe>")

        xml_str = "\n".join(xml)
        self._check_well_formed(xml_str)

        logger.debug("XML da NFC-e {} montado ({} itens)", self.key.chave, len(self.ctx.order.items))
        return xml_str

    def _add_ide(self, xml):
        """Adiciona grupo de identificação"""
        tax_authority = self.ctx.tax_authority

        xml.append("<ide>")
        self._add_element(xml, "cUF", self.key.c_uf, escape=False)
        self._add_element(xml, "cNF", self.key.cnf, escape=False)
        self._add_element(xml, "natOp", "VENDA")
        self._add_element(xml, "mod", self.key.modelo, escape=False)
        self._add_element(xml, "serie", tax_authority.serie, escape=False)
        self._add_element(xml, "nNF", self.ctx.sequence.numero, escape=False)
        self._add_element(xml, "dhEmi", self.emitted_at.isoformat(timespec="seconds"), escape=False)
        # Saída, operação interna
        self._add_element(xml, "tpNF", "1", escape=False)
        self._add_element(xml, "idDest", "1", escape=False)
        self._add_element(xml, "cMunFG", somente_digitos(self.ctx.issuer.codigo_municipio), escape=False)
        # DANFE NFC-e
        self._add_element(xml, "tpImp", "4", escape=False)
        self._add_element(xml, "tpEmis", self.key.tp_emis, escape=False)
        self._add_element(xml, "cDV", self.key.dv, escape=False)
        self._add_element(xml, "tpAmb", tax_authority.tp_amb, escape=False)
        self._add_element(xml, "finNFe", "1", escape=False)
        # Consumidor final, operação presencial
        self._add_element(xml, "indFinal", "1", escape=False)
        self._add_element(xml, "indPres", "1", escape=False)
        self._add_element(xml, "procEmi", "0", escape=False)
        self._add_element(xml, "verProc", self.ver_proc)
        xml.append("</ide>")

    def _add_emit(self, xml):
        """Adiciona grupo do emitente"""
        issuer = self.ctx.issuer

        xml.append("<emit>")
        self._add_element(xml, "CNPJ", somente_digitos(issuer.cnpj), escape=False)
        self._add_element(xml, "xNome", issuer.razao_social)
        if issuer.nome_fantasia:
            self._add_element(xml, "xFant", issuer.nome_fantasia)

        xml.append("<enderEmit>")
        self._add_element(xml, "xLgr", issuer.logradouro)
        self._add_element(xml, "nro", issuer.numero)
        self._add_element(xml, "xBairro", issuer.bairro)
        self._add_element(xml, "cMun", somente_digitos(issuer.codigo_municipio), escape=False)
        self._add_element(xml, "xMun", issuer.municipio)
        self._add_element(xml, "UF", issuer.uf.upper())
        self._add_element(xml, "CEP", somente_digitos(issuer.cep), escape=False)
        if issuer.fone:
            self._add_element(xml, "fone", somente_digitos(issuer.fone), escape=False)
        xml.append("</enderEmit>")

        self._add_element(xml, "IE", somente_digitos(issuer.inscricao_estadual), escape=False)
        self._add_element(xml, "CRT", issuer.crt)
        xml.append("</emit>")

    def _add_det(self, xml):
        """Adiciona grupo de detalhes (itens)"""
        for idx, item in enumerate(self.ctx.order.items, start=1):
            xml.append(f'<det nItem="{idx}">')
            valor_total = self._format_decimal(item.quantity * item.unit_price, 2)
            self._add_prod(xml, item, valor_total)
            self._add_imposto(xml, item, valor_total)
            xml.append("</det>")

    def _add_prod(self, xml, item, valor_total):
        """Adiciona dados do produto"""
        quantidade = self._format_decimal(item.quantity, 4)
        valor_unitario = self._format_decimal(item.unit_price, 10)

        xml.append("<prod>")
        self._add_element(xml, "cProd", item.id)
        self._add_element(xml, "cEAN", "SEM GTIN")
        self._add_element(xml, "xProd", item.name)
        self._add_element(xml, "NCM", somente_digitos(item.ncm), escape=False)
        self._add_element(xml, "CFOP", somente_digitos(item.cfop), escape=False)
        self._add_element(xml, "uCom", item.unit)
        self._add_element(xml, "qCom", quantidade, escape=False)
        self._add_element(xml, "vUnCom", valor_unitario, escape=False)
        self._add_element(xml, "vProd", valor_total, escape=False)
        self._add_element(xml, "cEANTrib", "SEM GTIN")
        self._add_element(xml, "uTrib", item.unit)
        self._add_element(xml, "qTrib", quantidade, escape=False)
        self._add_element(xml, "vUnTrib", valor_unitario, escape=False)
        # Compõe o valor total da nota
        self._add_element(xml, "indTot", "1", escape=False)
        self._add_element(xml, "xPed", self.ctx.order.id)
        xml.append("</prod>")

    def _add_imposto(self, xml, item, valor_total):
        """Adiciona grupo de impostos (Simples Nacional, CSOSN 102)"""
        xml.append("<imposto>")
        self._add_element(xml, "vTotTrib", self.tax.estimate_item(item, valor_total), escape=False)
        xml.append(
            "<ICMS><ICMSSN102><orig>0</orig><CSOSN>102</CSOSN></ICMSSN102></ICMS>"
        )
        xml.append(
            f"<PIS><PISOutr><CST>99</CST><vBC>{ZERO}</vBC>"
            f"<pPIS>{ZERO}</pPIS><vPIS>{ZERO}</vPIS></PISOutr></PIS>"
        )
        xml.append(
            f"<COFINS><COFINSOutr><CST>99</CST><vBC>{ZERO}</vBC>"
            f"<pCOFINS>{ZERO}</pCOFINS><vCOFINS>{ZERO}</vCOFINS></COFINSOutr></COFINS>"
        )
        xml.append("</imposto>")

    def _add_total(self, xml):
        """Adiciona grupo de totais"""
        order = self.ctx.order
        total = self._format_decimal(order.total_value, 2)

        xml.append("<total>")
        xml.append("<ICMSTot>")
        for tag in ("vBC", "vICMS", "vICMSDeson", "vFCP", "vBCST", "vST", "vFCPST", "vFCPSTRet"):
            self._add_element(xml, tag, ZERO, escape=False)
        self._add_element(xml, "vProd", total, escape=False)
        for tag in ("vFrete", "vSeg", "vDesc", "vII", "vIPI", "vIPIDevol", "vPIS", "vCOFINS", "vOutro"):
            self._add_element(xml, tag, ZERO, escape=False)
        self._add_element(xml, "vNF", total, escape=False)
        # Valor aproximado dos tributos
        self._add_element(xml, "vTotTrib", self.tax.estimate_total(order, total), escape=False)
        xml.append("</ICMSTot>")
        xml.append("</total>")

    def _add_transp(self, xml):
        """Adiciona grupo de transporte (sem frete)"""
        xml.append("<transp>")
        self._add_element(xml, "modFrete", "9", escape=False)
        xml.append("</transp>")

    def _add_pag(self, xml):
        """Adiciona grupo de pagamento (à vista, dinheiro)"""
        xml.append("<pag>")
        xml.append("<detPag>")
        self._add_element(xml, "indPag", "0", escape=False)
        self._add_element(xml, "tPag", "01", escape=False)
        self._add_element(xml, "vPag", self._format_decimal(self.ctx.order.total_value, 2), escape=False)
        xml.append("</detPag>")
        xml.append("</pag>")

    def _add_inf_resp_tec(self, xml):
        """Adiciona responsável técnico"""
        tech = self.ctx.tech_responsible

        xml.append("<infRespTec>")
        self._add_element(xml, "CNPJ", somente_digitos(tech.cnpj), escape=False)
        self._add_element(xml, "xContato", tech.contato)
        self._add_element(xml, "email", tech.email)
        self._add_element(xml, "fone", somente_digitos(tech.fone), escape=False)
        xml.append("</infRespTec>")

    def _add_inf_nfe_supl(self, xml):
        """Adiciona informações suplementares (QR Code e URL de consulta)"""
        xml.append("<infNFeSupl>")
        xml.append(f"<qrCode><![CDATA[{self.qrcode_url}]]></qrCode>")
        self._add_element(xml, "urlChave", self.url_chave)
        xml.append("</infNFeSupl>")

    def _check_well_formed(self, xml_str):
        """Garante que o documento é XML bem formado com a raiz NFe"""
        try:
            root = etree.fromstring(xml_str.encode("utf-8"))
        except etree.XMLSyntaxError as e:
            raise DocumentAssemblyError("XML da NFC-e malformado", details=str(e)) from e

        if root.tag != "{%s}NFe" % NAMESPACE_NFE:
            raise DocumentAssemblyError(f"Elemento raiz inesperado: {root.tag}")

    def _add_element(self, xml, tag, text, escape=True):
        """Adiciona um elemento simples; texto livre é escapado"""
        if escape:
            value = escape_xml(text)
        else:
            value = "" if text is None else str(text)
        xml.append(f"<{tag}>{value}</{tag}>")

    def _format_decimal(self, value, decimals=2):
        """Formata um valor decimal"""
        return format_decimal(value, decimals)
