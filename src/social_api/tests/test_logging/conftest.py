import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """
    setup_logging() replaces the root handlers; put pytest's back afterwards so later tests
    (and caplog) keep working.
    """
    root = logging.getLogger()
    handlers, filters, level = root.handlers[:], root.filters[:], root.level
    named = {
        name: (logging.getLogger(name).handlers[:], logging.getLogger(name).propagate, logging.getLogger(name).level)
        for name in ("uvicorn.error", "uvicorn.access", "sqlalchemy.engine")
    }

    yield

    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.filters[:] = filters
    root.setLevel(level)
    for name, (named_handlers, propagate, named_level) in named.items():
        logger = logging.getLogger(name)
        logger.handlers[:] = named_handlers
        logger.propagate = propagate
        logger.setLevel(named_level)
