import os

import pytest
from pyfakefs.fake_filesystem_unittest import Patcher



@pytest.fixture
def fs():
    with Patcher() as patcher:
        yield patcher.fs


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's real ~/.buildopsrc and BUILDOPS_* variables out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for key in list(os.environ):
        if key.startswith("BUILDOPS_"):
            monkeypatch.delenv(key)
    yield home


@pytest.fixture
def template_root(tmp_path):
    """A user template root holding License/MIT.txt, plus an empty built-in root."""
    root = tmp_path / "templates"
    (root / "License").mkdir(parents=True)
    (root / "License" / "MIT.txt").write_text("Copyright (c) {{YEAR}} {{AUTHOR}}", encoding="utf-8")
    builtin = tmp_path / "builtin"
    builtin.mkdir()
    return root, builtin
