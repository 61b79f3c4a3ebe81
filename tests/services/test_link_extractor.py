from sitecrawl.services.link_extractor import LinkExtractor

BASE = "http://h"


def _extract(html, base=BASE):
    return LinkExtractor().extract_links(html, base)


def test_mixed_links_scenario():
    html = (
        '<a href="/a">A</a>'
        '<a href="http://h/b">B</a>'
        '<a href="http://other/c">C</a>'
        '<a href="/d#frag">D</a>'
    )
    assert _extract(html) == {"http://h/a", "http://h/b", "http://h/d"}


def test_single_quotes_and_extra_attributes():
    html = "<a class='nav' id=\"x\" href='/about'>About</a>"
    assert _extract(html) == {"http://h/about"}


def test_amp_entity_and_percent_decoding():
    html = '<a href="/search?q=a%20b&amp;page=2">s</a>'
    assert _extract(html) == {"http://h/search?q=a b&page=2"}


def test_invalid_percent_sequence_is_kept():
    html = '<a href="/bad%ffpath">x</a>'
    assert _extract(html) == {"http://h/bad%ffpath"}


def test_https_link_to_same_host_is_kept():
    assert _extract('<a href="https://h/secure">x</a>') == {"https://h/secure"}


def test_unsupported_forms_are_dropped():
    html = (
        '<a href="//h/proto-relative">1</a>'
        '<a href="relative/path">2</a>'
        '<a href="mailto:someone@h">3</a>'
        '<a href="javascript:void(0)">4</a>'
        '<a href="?q=1">5</a>'
        '<a href="#top">6</a>'
        '<a href="">7</a>'
        '<a href="ftp://h/file">8</a>'
    )
    assert _extract(html) == set()


def test_root_relative_links_anchor_to_base_not_page():
    # base is scheme://host even when the page lives deeper
    assert _extract('<a href="/x">x</a>', base="https://h") == {"https://h/x"}


def test_base_with_port_requires_matching_port():
    html = '<a href="http://h:8080/a">a</a><a href="http://h/b">b</a><a href="/c">c</a>'
    assert _extract(html, base="http://h:8080") == {"http://h:8080/a", "http://h:8080/c"}


def test_duplicates_collapse():
    html = '<a href="/a">1</a><a href="/a">2</a><a href="http://h/a">3</a>'
    assert _extract(html) == {"http://h/a"}


def test_malformed_html_is_tolerated():
    html = """<html><head><title>Broken
    <body>
        <a href="/page1">Link 1</a>
        <a href="/page2">Link 2
        <a href="/page3">Link 3</a>
    """
    assert _extract(html) == {"http://h/page1", "http://h/page2", "http://h/page3"}


def test_non_html_body_yields_nothing():
    assert _extract('{"href": "/api", "links": ["/a"]}') == set()
    assert _extract("") == set()


def test_extraction_is_idempotent():
    html = '<a href="/a">a</a><a href="/b#x">b</a>'
    extractor = LinkExtractor()
    assert extractor.extract_links(html, BASE) == extractor.extract_links(html, BASE)


def test_anchor_without_whitespace_before_href_is_ignored():
    assert _extract('<ahref="/a">x</a>') == set()
