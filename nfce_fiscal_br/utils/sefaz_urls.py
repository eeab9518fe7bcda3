"""
URLs de QR Code e de consulta por chave da NFC-e, por UF e ambiente
"""

from nfce_fiscal_br.exceptions import ConfigurationError

AMBIENTE_PRODUCAO = "1"
AMBIENTE_HOMOLOGACAO = "2"

URLS_QRCODE = {
    "TO": {
        AMBIENTE_PRODUCAO: "https://www.sefaz.to.gov.br/nfce/qrcode",
        AMBIENTE_HOMOLOGACAO: "https://homologacao.sefaz.to.gov.br/nfce/qrcode",
    },
    "SP": {
        AMBIENTE_PRODUCAO: "https://www.nfce.fazenda.sp.gov.br/qrcode",
        AMBIENTE_HOMOLOGACAO: "https://www.homologacao.nfce.fazenda.sp.gov.br/qrcode",
    },
    "SC": {
        AMBIENTE_PRODUCAO: "https://sat.sef.sc.gov.br/nfce/consulta",
        AMBIENTE_HOMOLOGACAO: "https://hom.sat.sef.sc.gov.br/nfce/consulta",
    },
}

URLS_CONSULTA = {
    "TO": {
        AMBIENTE_PRODUCAO: "https://www.sefaz.to.gov.br/nfce/consulta",
        AMBIENTE_HOMOLOGACAO: "https://homologacao.sefaz.to.gov.br/nfce/consulta",
    },
    "SP": {
        AMBIENTE_PRODUCAO: "https://www.nfce.fazenda.sp.gov.br/consulta",
        AMBIENTE_HOMOLOGACAO: "https://www.homologacao.nfce.fazenda.sp.gov.br/consulta",
    },
    "SC": {
        AMBIENTE_PRODUCAO: "https://sat.sef.sc.gov.br/nfce/consulta",
        AMBIENTE_HOMOLOGACAO: "https://hom.sat.sef.sc.gov.br/nfce/consulta",
    },
}


def _resolver(tabela, nome, uf, ambiente, override):
    if override:
        return override

    urls = tabela.get((uf or "").upper())
    if not urls or ambiente not in urls:
        raise ConfigurationError(
            f"URL de {nome} da NFC-e não cadastrada para UF {uf!r} (ambiente {ambiente})",
            details="Informe a URL na configuração da SEFAZ do emitente.",
        )
    return urls[ambiente]


def get_url_qrcode(uf, ambiente, override=None):
    """Retorna a URL base do QR Code (sem o parâmetro p)"""
    return _resolver(URLS_QRCODE, "QR Code", uf, ambiente, override)


def get_url_consulta(uf, ambiente, override=None):
    """Retorna a URL de consulta por chave (urlChave)"""
    return _resolver(URLS_CONSULTA, "consulta", uf, ambiente, override)
