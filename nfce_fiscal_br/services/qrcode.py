"""
Gerador do QR Code da NFC-e (versão 2, emissão online)

p = chave|2|tpAmb|cIdToken|cHashQRCode
cHashQRCode = SHA-1(chave|2|tpAmb|cIdToken| + CSC), hexadecimal minúsculo
"""

import hashlib

from nfce_fiscal_br.utils.sefaz_urls import (
    AMBIENTE_HOMOLOGACAO,
    AMBIENTE_PRODUCAO,
    get_url_qrcode,
)

VERSAO_QRCODE = "2"


class QRCodeBuilder:
    """Monta os parâmetros e a URL do QR Code"""

    def __init__(self, csc_id, csc):
        """
        Args:
            csc_id: Identificador do CSC (cIdToken), usado como informado
            csc: Código de Segurança do Contribuinte; só entra no hash
        """
        self.csc_id = str(csc_id)
        self._csc = csc

    def payload_sem_hash(self, chave, tp_amb):
        """Parte dos parâmetros que antecede o hash"""
        if tp_amb not in (AMBIENTE_PRODUCAO, AMBIENTE_HOMOLOGACAO):
            raise ValueError(f"Ambiente inválido: {tp_amb}. Use 1 (Produção) ou 2 (Homologação)")
        return f"{chave}|{VERSAO_QRCODE}|{tp_amb}|{self.csc_id}|"

    def hash(self, payload):
        """SHA-1 do payload concatenado ao CSC"""
        return hashlib.sha1((payload + self._csc).encode("utf-8")).hexdigest()

    def parametros(self, chave, tp_amb):
        """Valor do parâmetro p, sem o CSC"""
        payload = self.payload_sem_hash(chave, tp_amb)
        return payload + self.hash(payload)

    def url(self, chave, tp_amb, uf, url_base=None):
        """
        URL completa do QR Code

        Args:
            chave: Chave de acesso (44 dígitos)
            tp_amb: "1" produção ou "2" homologação
            uf: UF do emitente, para localizar o endpoint
            url_base: Endpoint configurado que substitui o da tabela
        """
        base = get_url_qrcode(uf, tp_amb, override=url_base)
        return f"{base}?p={self.parametros(chave, tp_amb)}"
