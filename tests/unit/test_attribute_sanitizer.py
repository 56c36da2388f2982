from __future__ import annotations

from bs4 import BeautifulSoup

from tidy.services.attribute_sanitizer import AttributeSanitizer


def _tree() -> BeautifulSoup:
    html = (
        '<div id="a" onclick="go()" style="color: red" data-foo="1">'
        '<p class="c" style="margin: 0" aria-label="label" tabindex="0">text</p>'
        '<img src="x.png" alt="x" loading="lazy" data-srcset="x2.png 2x">'
        "</div>"
    )
    return BeautifulSoup(html, "html.parser")


def test_sanitize_strips_non_whitelisted_attributes() -> None:
    soup = _tree()
    root = soup.div
    stripped = AttributeSanitizer().sanitize(root)

    assert stripped == 5
    assert root.attrs == {"id": "a", "data-foo": "1"}
    p = root.find("p")
    assert p.attrs == {"class": ["c"], "aria-label": "label"}
    img = root.find("img")
    assert set(img.attrs) == {"src", "alt", "data-srcset"}


def test_sanitize_is_idempotent() -> None:
    soup = _tree()
    sanitizer = AttributeSanitizer()
    sanitizer.sanitize(soup.div)

    assert sanitizer.sanitize(soup.div) == 0


def test_sanitize_keeps_structure() -> None:
    soup = _tree()
    root = soup.div
    children_before = [c.name for c in root.find_all(True)]

    AttributeSanitizer().sanitize(root)

    assert root.name == "div"
    assert [c.name for c in root.find_all(True)] == children_before
    assert root.find("p").get_text() == "text"


def test_sanitize_only_touches_given_subtree() -> None:
    soup = BeautifulSoup('<section style="x"><div style="y"><p style="z">t</p></div></section>', "html.parser")

    AttributeSanitizer().sanitize(soup.div)

    assert soup.section.get("style") == "x"
    assert soup.div.get("style") is None
    assert soup.p.get("style") is None


def test_sanitize_uses_custom_whitelist() -> None:
    soup = BeautifulSoup('<a href="/x" rel="nofollow" target="_blank">x</a>', "html.parser")

    stripped = AttributeSanitizer(allowed_attributes=["href", "REL"]).sanitize(soup.a)

    assert stripped == 1
    assert soup.a.attrs == {"href": "/x", "rel": ["nofollow"]}
