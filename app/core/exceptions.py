"""
Obras ERP - Domain Exceptions
Erros de regra de negocio levantados pelos servicos e convertidos
em respostas {"error": ...} pelos handlers de app.main
"""
from fastapi import status


class DomainError(Exception):
    """Erro base de dominio"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BusinessRuleError(DomainError):
    """Violacao de regra de negocio (percentuais, exclusao com dependencias...)"""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(DomainError):
    """Campo unico duplicado (ex: email)"""
    status_code = status.HTTP_409_CONFLICT
