from __future__ import annotations

from bs4 import BeautifulSoup

from tidy.services.content_scorer import ContentScorer


def _words(n: int) -> str:
    return " ".join(["word"] * n)


def test_score_article_content_example() -> None:
    html = f"""<div class="article-content">
<p>{_words(100)}</p>
<p>{_words(100)}</p>
<p>{_words(49)} <a href="/more">more</a></p>
<img src="a.png">
<img src="b.png">
</div>"""
    soup = BeautifulSoup(html, "html.parser")

    # 25 (class) + 2 (250 words) + 3 (paragraphs) + 6 (two images)
    assert ContentScorer().score(soup.div) == 36


def test_score_sidebar_widget_example() -> None:
    soup = BeautifulSoup(f'<div class="sidebar-widget">{_words(10)}</div>', "html.parser")

    assert ContentScorer().score(soup.div) == -25


def test_positive_and_negative_patterns_both_apply() -> None:
    soup = BeautifulSoup('<div class="article-sidebar"></div>', "html.parser")

    assert ContentScorer().score(soup.div) == 0


def test_id_is_checked_as_well_as_class() -> None:
    soup = BeautifulSoup('<section id="Story"></section>', "html.parser")

    assert ContentScorer().score(soup.section) == 25


def test_link_heavy_element_is_penalised() -> None:
    soup = BeautifulSoup('<div><a href="/a">Home</a> <a href="/b">About</a></div>', "html.parser")

    assert ContentScorer().score(soup.div) == -10


def test_word_and_image_bonuses_are_capped() -> None:
    images = "".join(f'<img src="{i}.png">' for i in range(5))
    soup = BeautifulSoup(f"<div>{_words(1000)}{images}</div>", "html.parser")

    assert ContentScorer().score(soup.div) == 3 + 9


def test_empty_element_scores_zero() -> None:
    soup = BeautifulSoup("<div></div>", "html.parser")

    assert ContentScorer().score(soup.div) == 0


def test_scoring_does_not_mutate_tree() -> None:
    html = '<div class="post"><p>a</p><a href="/x">b</a></div>'
    soup = BeautifulSoup(html, "html.parser")

    ContentScorer().score(soup.div)

    assert str(soup) == html


def test_score_candidates_orders_by_score_and_keeps_document_order_on_ties() -> None:
    html = """
    <div id="first"><p>a</p></div>
    <div id="second"><p>b</p></div>
    <section class="blog"><p>c</p></section>
    <div class="menu"><p>d</p></div>
    <span class="article"><p>e</p></span>
    """
    soup = BeautifulSoup(html, "html.parser")

    candidates = ContentScorer().score_candidates(soup)

    assert [c.element.get("id") or c.element.name for c in candidates] == ["section", "first", "second"]
    assert [c.score for c in candidates] == [26, 1, 1]


def test_custom_block_elements() -> None:
    soup = BeautifulSoup('<td class="content"><p>x</p></td>', "html.parser")

    candidates = ContentScorer(block_elements=["TD"]).score_candidates(soup)

    assert len(candidates) == 1
    assert candidates[0].element.name == "td"
