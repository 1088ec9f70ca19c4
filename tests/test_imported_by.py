"""Tests for src/pkggodev/imported_by.py and the unimplemented lookups."""

import pytest

from conftest import BASE_URL
from pkggodev.errors import ErrorList
from pkggodev.models import Imports, License

PACKAGE = "github.com/acme/widget"
URL = f"{BASE_URL}/{PACKAGE}?tab=importedby"

PAGE = """
<html><body>
<div class="ImportedBy">
  <ul>
    <li><a class="u-breakWord" href="/example.com/one"> example.com/one </a></li>
    <li><a class="u-breakWord" href="/example.com/two">example.com/two</a></li>
    <li><a class="u-breakWord" href="/example.com/one">example.com/one</a></li>
  </ul>
</div>
</body></html>
"""


class TestImportedBy:
    def test_order_and_duplicates_kept(self, client, fake_session):
        fake_session.add(URL, PAGE)
        result = client.imported_by(PACKAGE)
        assert result.package == PACKAGE
        assert result.imported_by == (
            "example.com/one",
            "example.com/two",
            "example.com/one",
        )
        assert fake_session.calls == [URL]

    def test_empty_page(self, client, fake_session):
        fake_session.add(URL, "<html><body></body></html>")
        assert client.imported_by(PACKAGE).imported_by == ()

    def test_not_found(self, client):
        with pytest.raises(ErrorList) as exc_info:
            client.imported_by(PACKAGE)
        assert exc_info.value.not_found

    def test_to_dict(self, client, fake_session):
        fake_session.add(URL, PAGE)
        assert client.imported_by(PACKAGE).to_dict()["imported_by"][1] == (
            "example.com/two"
        )


class TestNotYetScraped:
    def test_imports(self, client, fake_session):
        assert client.imports(PACKAGE) is None
        assert fake_session.calls == []

    def test_licenses(self, client, fake_session):
        assert client.licenses(PACKAGE) is None
        assert fake_session.calls == []


class TestDeclaredRecords:
    def test_imports_is_hashable(self):
        record = Imports(
            package=PACKAGE,
            imports=("fmt", "golang.org/x/net/html"),
            module_imports=(("golang.org/x/net", ("golang.org/x/net/html",)),),
            standard_library_imports=("fmt",),
        )
        assert hash(record) == hash(
            Imports(
                package=PACKAGE,
                imports=("fmt", "golang.org/x/net/html"),
                module_imports=(("golang.org/x/net", ("golang.org/x/net/html",)),),
                standard_library_imports=("fmt",),
            )
        )
        assert {record, record} == {record}

    def test_license_is_hashable(self):
        a = License("MIT", "LICENSE", "text")
        b = License("MIT", "LICENSE", "text")
        assert len({a, b}) == 1
