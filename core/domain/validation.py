from core.domain.errors import TaskValidationError

TITLE_MAX_LENGTH = 255


def validate_title(title: str | None) -> str:
    """
    Normaliza y valida el título de una tarea.

    Retorna el título sin espacios en los extremos.

    Raises:
        TaskValidationError: si falta, está vacío o excede la longitud máxima.
    """
    if title is None or not title.strip():
        raise TaskValidationError("Title is required")
    title = title.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise TaskValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters"
        )
    return title
