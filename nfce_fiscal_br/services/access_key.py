"""
Chave de Acesso - Montagem da chave de 44 dígitos da NFC-e
cUF + AAMM + CNPJ + mod + serie + nNF + tpEmis + cNF + cDV
"""

import random

from loguru import logger

from nfce_fiscal_br.exceptions import ValidationError
from nfce_fiscal_br.schemas import AccessKey
from nfce_fiscal_br.utils.cnpj_cpf import calcular_dv_chave_nfe
from nfce_fiscal_br.utils.formatters import pad, somente_digitos
from nfce_fiscal_br.utils.ibge import get_codigo_uf

MODELO_NFCE = "65"
TP_EMIS_NORMAL = "1"
CNF_MAX = 99999999


class AccessKeyBuilder:
    """Construtor da chave de acesso da NFC-e"""

    def __init__(self, rng=None):
        """
        Inicializa o builder

        Args:
            rng: Gerador aleatório para o cNF (padrão: random.Random() novo)
        """
        self.rng = rng or random.Random()

    def gerar_cnf(self):
        """Gera o código numérico cNF (1 a 99999999, 8 dígitos)"""
        return pad(self.rng.randint(1, CNF_MAX), 8)

    def build(self, uf, emitted_at, cnpj, serie, numero, cnf=None):
        """
        Monta a chave de acesso

        Args:
            uf: Sigla da UF do emitente
            emitted_at: datetime da emissão (fornece AAMM)
            cnpj: CNPJ do emitente, com ou sem formatação
            serie: Série da NFC-e (até 3 dígitos)
            numero: Número da NFC-e (até 9 dígitos)
            cnf: Código numérico; gerado quando omitido

        Returns:
            AccessKey: Componentes da chave, com o DV calculado
        """
        cnpj_digitos = somente_digitos(cnpj)
        if len(cnpj_digitos) != 14:
            raise ValidationError(
                "CNPJ do emitente deve ter 14 dígitos",
                errors=[f"CNPJ informado: {cnpj!r}"],
            )

        if cnf is None:
            cnf = self.gerar_cnf()
        else:
            if int(cnf) < 1:
                raise ValueError(f"cNF deve estar entre 1 e {CNF_MAX}: {cnf}")
            cnf = pad(cnf, 8)

        key = dict(
            c_uf=get_codigo_uf(uf),
            aamm=emitted_at.strftime("%y%m"),
            cnpj=cnpj_digitos,
            modelo=MODELO_NFCE,
            serie=pad(serie, 3),
            numero=pad(numero, 9),
            tp_emis=TP_EMIS_NORMAL,
            cnf=cnf,
        )
        corpo = "".join(key[campo] for campo in (
            "c_uf", "aamm", "cnpj", "modelo", "serie", "numero", "tp_emis", "cnf"
        ))

        access_key = AccessKey(dv=calcular_dv_chave_nfe(corpo), **key)
        logger.debug("Chave de acesso gerada: {}", access_key.chave)
        return access_key
