"""
Reintentos del arranque: conectar al servidor de base de datos, crear el
esquema y probar el pool.

Un servidor que aún está levantando (contenedor recién creado, red que tarda)
rechaza las primeras conexiones; esas fallas se reintentan con espera
creciente. Un error de SQL o de permisos no se reintenta.
"""

import logging
import time
from typing import Callable, TypeVar

from sqlalchemy.exc import DisconnectionError, OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fallas de conexión, no de la consulta en sí.
RETRYABLE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    ConnectionError,
    TimeoutError,
    OSError,
    OperationalError,
    DisconnectionError,
)


def retry_with_backoff(
    func: Callable[[], T],
    max_retries: int = 2,
    base_delay: float = 0.5,
    retryable_exceptions: tuple[type[BaseException], ...] = RETRYABLE_EXCEPTIONS,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Llama a `func` hasta `max_retries + 1` veces.

    Entre intentos espera `base_delay`, `2 * base_delay`, `4 * base_delay`...
    Si el último intento falla, se relanza ese error; las excepciones fuera
    de `retryable_exceptions` salen en el primer intento.

    `sleep` se sustituye en los tests para no esperar.
    """
    attempts = max_retries + 1
    for attempt in range(1, attempts + 1):
        try:
            return func()
        except retryable_exceptions as e:
            if attempt == attempts:
                logger.error(
                    f"❌ Base de datos inaccesible tras {attempts} intentos: {e}"
                )
                raise
            delay = base_delay * 2 ** (attempt - 1)
            logger.warning(
                f"🔁 Intento {attempt}/{attempts} fallido ({e}); "
                f"nuevo intento en {delay:.1f}s"
            )
            sleep(delay)
    raise ValueError(f"max_retries must be >= 0, got {max_retries}")
