# python
import logging

import pytest

from encryptor.logging_config import _HANDLER_NAME
from encryptor.settings import Settings

KEY_HEX = "".join(f"{i:02x}" for i in range(32))
OTHER_KEY_HEX = "ff" * 32


@pytest.fixture
def key_hex():
    return KEY_HEX


@pytest.fixture(params=["sync", "async"])
def backend(request):
    return request.param


@pytest.fixture
def settings(backend):
    return Settings(encryptor_key=KEY_HEX, backend=backend, api_key="dummy")


@pytest.fixture(autouse=True)
def _reset_logging_handler():
    # setup_logging binds to whatever sys.stdout is current (capsys swaps it)
    yield
    root = logging.getLogger()
    for h in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(h)
