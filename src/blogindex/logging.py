import logging
import sys

ROOT_LOGGER_NAME = "blogindex"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configure_root(verbose: bool) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    return root


def get_logger(name: str = ROOT_LOGGER_NAME, verbose: bool = False) -> logging.Logger:
    """Return ``name`` under the shared ``blogindex`` logger.

    Only the parent carries a handler and a level; ``blogindex.build`` and
    ``blogindex.extract`` inherit both, so every message is emitted once.
    """

    root = _configure_root(verbose)
    if name == ROOT_LOGGER_NAME:
        return root
    if not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
