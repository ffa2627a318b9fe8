import logging

import pytest

from htmlxpath import Document
from htmlxpath.utils import config as config_module
from htmlxpath.utils.logging import LOGGER_NAME

HELLO_WORLD = b"<html><body><p>Hello <b>World</b></p></body></html>"

SAMPLE = """<!DOCTYPE html>
<html><head><title>Sample</title></head><body>
<div id="intro"><p>First <em>para</em></p><p>Second</p></div>
<div id="links"><a href="/one">One</a><a href="/two">Two</a><br></div>
<p>Outside<!-- hidden --> text</p>
</body></html>""".encode("utf-8")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the global configuration at an empty temp file for every test."""
    monkeypatch.setenv(config_module.CONFIG_ENV_VAR, str(tmp_path / "config.json"))
    config_module.set_config(None)
    yield
    config_module.set_config(None)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture(params=["html5lib", "lxml"])
def backend(request):
    return request.param


@pytest.fixture
def sample_root(backend):
    return Document.load(SAMPLE, backend).root_node()
