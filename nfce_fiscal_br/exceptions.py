"""Exceções da emissão de NFC-e."""


class NFCeError(Exception):
    """Exceção base para erros de montagem da NFC-e."""

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(NFCeError):
    """Dados de entrada inválidos para a emissão."""

    def __init__(self, message: str, errors: list = None, details: str = None):
        super().__init__(message, details)
        self.errors = list(errors or [])


class FieldOverflowError(NFCeError):
    """Valor numérico maior que a largura fixa do campo."""

    def __init__(self, value, width: int):
        super().__init__(
            f"Valor {value} excede a largura de {width} dígitos",
            details="O campo nunca é truncado; corrija o valor na origem.",
        )
        self.value = value
        self.width = width


class ConfigurationError(NFCeError):
    """Configuração fiscal incompleta ou desconhecida (UF, endpoints)."""
    pass


class DocumentAssemblyError(NFCeError):
    """O XML montado não é bem formado."""
    pass
