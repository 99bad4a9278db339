"""Custom exception classes for the LMS Admin API.

This module defines application-specific exceptions following Google Python
Style Guide. Managers raise them; route handlers translate them into HTTP
errors. Messages are user facing and are returned verbatim in the error body.
"""


class LmsAdminError(Exception):
    """Base exception for all LMS Admin API errors."""

    message = "Erro interno do servidor"

    def __init__(self, message: str = None):
        """Initialize the exception.

        Args:
            message: Optional message overriding the class default.
        """
        self.message = message or self.message
        super().__init__(self.message)


class EntityNotFoundError(LmsAdminError):
    """Raised when a requested record cannot be found."""

    def __init__(self, entity_id: str = None, message: str = None):
        """Initialize the exception.

        Args:
            entity_id: The ID of the record that was not found.
            message: Optional message overriding the class default.
        """
        self.entity_id = entity_id
        super().__init__(message)


class UserNotFoundError(EntityNotFoundError):
    message = "Usuário não encontrado"


class DepartmentNotFoundError(EntityNotFoundError):
    message = "Departamento não encontrado"


class CourseNotFoundError(EntityNotFoundError):
    message = "Curso não encontrado"


class UserCourseNotFoundError(EntityNotFoundError):
    message = "Matrícula não encontrada"


class DuplicateEntityError(LmsAdminError):
    """Raised when a unique value (email, department name, enrollment) is taken."""

    pass


class DependentRecordsError(LmsAdminError):
    """Raised when a record cannot be deleted because others reference it."""

    pass


class EnrollmentLimitError(LmsAdminError):
    """Raised when a user reached the department's simultaneous course limit."""

    def __init__(self, limit: int):
        """Initialize the exception.

        Args:
            limit: The department's simultaneous course limit.
        """
        self.limit = limit
        super().__init__(
            f"Usuário atingiu o limite de {limit} cursos simultâneos "
            "permitidos para seu departamento"
        )


class InvalidCredentialsError(LmsAdminError):
    """Raised on unknown email or password mismatch."""

    message = "Credenciais inválidas"


class InactiveAccountError(LmsAdminError):
    """Raised when a disabled account tries to authenticate."""

    message = "Conta inativa"


class ValidationError(LmsAdminError):
    """Raised when data validation fails outside the request schemas."""

    message = "Erro de validação"
