# app/shared/database/errors.py
"""
Señales de la capa de persistencia.

Los repositorios traducen "fila no encontrada" / "cero filas afectadas" y
violaciones de unicidad a estas excepciones; los servicios las convierten
en errores de negocio. Nunca llegan a la capa HTTP.
"""


class RepositoryError(Exception):
    """Base para señales de repositorio"""

    def __init__(self, entity: str, message: str = ""):
        self.entity = entity
        super().__init__(message or entity)


class RecordNotFoundError(RepositoryError):
    """No existe la fila buscada o la sentencia condicional no afectó filas"""

    def __init__(self, entity: str, message: str = ""):
        super().__init__(entity, message or f"{entity} not found")


class DuplicateRecordError(RepositoryError):
    """Ya existe una fila que viola una restricción de unicidad"""

    def __init__(self, entity: str, message: str = ""):
        super().__init__(entity, message or f"{entity} already exists")
