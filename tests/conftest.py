import os

import pytest

from layercrypt.core.config import LayerCryptConfig


@pytest.fixture(autouse=True)
def _clean_config(monkeypatch):
    for key in list(os.environ):
        if key.startswith("LAYERCRYPT_"):
            monkeypatch.delenv(key)
    LayerCryptConfig.reset_instance()
    yield
    LayerCryptConfig.reset_instance()
