"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from propstore import PropertyStore

SAMPLE_PROPERTIES = """\
#sample properties
stringKey=stringValue
stringKeyEmpty=
booleanKey=true
booleanKeyEmpty=
booleanKeyInvalid=yes
integerKey=1234
integerKeyEmpty=
integerKeyInvalid=12a4
longKey=123456
longKeyEmpty=
longKeyInvalid=1234.5
floatKey=12.34
floatKeyEmpty=
floatKeyInvalid=twelve
floatKeyNoDecimal=1234
doubleKey=1234.56
doubleKeyEmpty=
doubleKeyInvalid=1,5
doubleKeyNoDecimal=123456
objectKey=1-Eins
"""


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    for name in ("PROPSTORE_ENCODING", "PROPSTORE_TIMESTAMP", "PROPSTORE_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def properties_file(tmp_path):
    path = tmp_path / "testproperties.foo"
    path.write_text(SAMPLE_PROPERTIES, encoding="utf-8")
    return path


@pytest.fixture
def empty_properties_file(tmp_path):
    path = tmp_path / "emptyproperties.foo"
    path.write_text("", encoding="utf-8")
    return path


@pytest.fixture
def store(properties_file):
    loaded = PropertyStore()
    loaded.load(properties_file)
    return loaded
