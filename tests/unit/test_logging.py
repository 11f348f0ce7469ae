from __future__ import annotations

import logging

from blogindex.logging import ROOT_LOGGER_NAME, get_logger


def test_child_loggers_share_parent_handler() -> None:
    build = get_logger("blogindex.build")
    extract = get_logger("blogindex.extract")
    root = logging.getLogger(ROOT_LOGGER_NAME)

    assert build.parent is root
    assert extract.parent is root
    assert build.handlers == []
    assert extract.handlers == []
    assert len(root.handlers) == 1

    get_logger("blogindex.build")
    assert len(root.handlers) == 1


def test_verbose_switches_parent_level() -> None:
    logger = get_logger("blogindex.build", verbose=True)
    assert logger.getEffectiveLevel() == logging.DEBUG
    logger = get_logger("blogindex.build", verbose=False)
    assert logger.getEffectiveLevel() == logging.INFO


def test_bare_names_are_nested_under_parent() -> None:
    assert get_logger("init").name == "blogindex.init"
    assert get_logger().name == ROOT_LOGGER_NAME
