"""
    Copyright 2018 Inmanta

    Licensed under the Apache License, Version 2.0 (the "License");
    you may not use this file except in compliance with the License.
    You may obtain a copy of the License at

        http://www.apache.org/licenses/LICENSE-2.0

    Unless required by applicable law or agreed to in writing, software
    distributed under the License is distributed on an "AS IS" BASIS,
    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
    See the License for the specific language governing permissions and
    limitations under the License.

    Contact: code@inmanta.com
"""
import logging
import os

import pytest
from click import testing

from bracket import const
from bracket.config import Config
from bracket.logging import BracketLoggerConfig


@pytest.fixture(autouse=True)
def clean_config(monkeypatch, tmp_path):
    """
    Make sure no config file or environment variable of the user running the tests leaks into them.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith(const.ENVIRON_PREFIX + "_"):
            monkeypatch.delenv(key)
    Config._reset()
    Config.load_config()
    yield
    Config._reset()


@pytest.fixture(autouse=True)
def cleanup_logger():
    root_log_level = logging.root.level
    BracketLoggerConfig.clean_instance()
    yield
    BracketLoggerConfig.clean_instance()
    # Make sure we maintain the initial root log level, so that logging in pytest works as expected.
    logging.root.setLevel(root_log_level)


@pytest.fixture
def cli():
    return testing.CliRunner()


@pytest.fixture
def write_file(tmp_path):
    def write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return write
