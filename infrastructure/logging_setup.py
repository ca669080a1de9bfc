import logging
import sys

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "info") -> None:
    """
    Configura el logger raíz con un único handler a stderr.

    Llamar UNA vez, al arrancar el proceso.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Evita handlers duplicados si se llama más de una vez.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(handler)

    # El SQL emitido solo interesa en DEBUG.
    if root.level > logging.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
