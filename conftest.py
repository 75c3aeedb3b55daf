import logging

import pytest


@pytest.fixture
def ratreal_log(caplog):
    """Capture everything the ratreal loggers emit."""
    caplog.set_level(logging.DEBUG, logger='ratreal')
    return caplog
