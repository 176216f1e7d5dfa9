import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from corpuskit.utils.log import setup_logging


def test_setup_logging_installs_single_rich_handler():
    console = Console(file=io.StringIO(), width=120)

    logger = setup_logging("debug", console=console)
    setup_logging("DEBUG", console=console)

    rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
    assert logger.name == "corpuskit"
    assert logger.level == logging.DEBUG
    assert len(rich_handlers) == 1

    logging.getLogger("corpuskit.reporting.slda_export").info("exported 3 documents")
    assert "exported 3 documents" in console.file.getvalue()


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("chatty")
