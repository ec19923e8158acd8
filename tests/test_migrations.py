"""Generator version migration."""

from bs4 import BeautifulSoup

from conftest import structure
from sitestage.migrations import GeneratorMigrator
from sitestage.migrations.generator import format_version, parse_version
from sitestage.site import SiteModel
from sitestage.utils import text_content


def migrate(markup):
    document = BeautifulSoup(markup, "html.parser")
    results = []
    GeneratorMigrator().process(document, SiteModel(), results.append)
    return document, results


def test_parse_version():
    assert parse_version("Silex v2.2.7") == (2, 2, 7)
    assert parse_version("Silex v2.10.0") > parse_version("Silex v2.9.9")
    assert parse_version(None) == (0, 0, 0)
    assert format_version((2, 2, 7)) == "2.2.7"


def test_up_to_date_document_is_left_alone():
    markup = '<html><head><meta name="generator" content="Silex v2.2.7"></head></html>'
    document, results = migrate(markup)
    assert results == [False]
    assert structure(str(document)) == structure(markup)


def test_old_document_is_stamped():
    document, results = migrate('<html><head><meta name="generator" content="Silex v2.1.0"></head></html>')
    assert results == [True]
    assert document.find("meta", attrs={"name": "generator"})["content"] == "Silex v2.2.7"
    assert text_content(document.find("script", class_="silex-json-styles")) == "{}"


def test_document_without_generator_gets_one():
    document, results = migrate("<html><body></body></html>")
    assert results == [True]
    assert document.head.find("meta", attrs={"name": "generator"}) is not None


def test_document_without_html_does_not_loop():
    _, results = migrate("<p>fragment</p>")
    assert results == [False]
