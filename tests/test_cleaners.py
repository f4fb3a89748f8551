"""Tests for URL cleaning strategies."""

from urllib.parse import quote

from retail_urls.cleaners import (
    AMAZON_STRATEGY,
    GENERIC_STRATEGY,
    STRATEGY_CHAIN,
    WALMART_STRATEGY,
    RetailerKind,
    clean_url,
    clean_urls_in_html,
    clean_urls_in_html_by_strategy,
    clean_urls_in_html_for,
    select_strategy,
)

WALMART_PRODUCT = "https://www.walmart.com/ip/Ozark-Trail-Backpack/123456789"
WALMART_REDIRECT = (
    "https://www.walmart.com/sp/track?bt=1&eventST=click"
    "&rd=https%3A%2F%2Fwww.walmart.com%2Fip%2FOzark-Trail-Backpack%2F123456789%3FclassType%3DREGULAR"
    "&utm_source=x"
)
AMAZON_CLICK = (
    "https://www.amazon.com/sspa/click?ie=UTF8&spc=MTo"
    "&url=%2FSwissGear-Backpack%2Fdp%2FB079R47PHD%2Fref%3Dsr_1_1_sspa%3Fkeywords%3Dbackpack%26psc%3D1"
    "&sp_csd=d2lk"
)

CORPUS = [
    "https://example.com/page?utm_source=newsletter&utm_medium=email&valid_param=keep_me",
    "https://example.com/a?x=1&fbclid=abc#top",
    "https://Example.com",
    "https://example.com/s?q=a+b&gclid=1",
    "https://www.amazon.com/SwissGear-Travel-Backpacks-Black-21-5/dp/B079R47PHD/ref=asc_df_B097WDNHXM/?tag=hyprod-20&hvadid=1",
    "https://www.amazon.com/s?k=backpacks&ref=nb_sb_noss_1",
    "https://www.amazon.com/gp/product/B00EXAMPLE/ref=ppx_yo_dt?ie=UTF8&psc=1",
    "https://www.amazon.com/gp/bestsellers/ref=zg_bs_nav_0?utm_source=x&pg=2",
    "https://www.amazon.com/ref=nav_logo",
    AMAZON_CLICK,
    WALMART_REDIRECT,
    WALMART_PRODUCT + "?athbdg=L1600&from=/search",
    "https://www.walmart.com/browse/home/123?utm_medium=email&page=2",
    "https://www.walmart.com/track?rd=https%3A%2F%2Fwww.walmart.com%2Fcp%2Fgrocery",
    "https://www.safeway.com/shop/product-details.970555.html?storeId=1&utm_campaign=x",
    "https://www.albertsons.com/shop/aisles/produce.html?ref=home&sort=price",
    "not-a-valid-url",
]


def test_generic_cleaning():
    """Test tracking parameters are removed and others kept in order."""
    url = "https://example.com/page?utm_source=newsletter&utm_medium=email&valid_param=keep_me"
    assert clean_url(url) == "https://example.com/page?valid_param=keep_me"
    assert clean_url("https://example.com/a?x=1&fbclid=abc#top") == "https://example.com/a?x=1#top"
    assert clean_url("https://Example.com") == "https://example.com/"


def test_amazon_product():
    """Test Amazon product URLs keep only title and ASIN."""
    url = "https://www.amazon.com/SwissGear-Travel-Backpacks-Black-21-5/dp/B079R47PHD/ref=asc_df_B097WDNHXM/?tag=hyprod-20&hvadid=1"
    assert clean_url(url) == "https://www.amazon.com/SwissGear-Travel-Backpacks-Black-21-5/dp/B079R47PHD"

    gp = "https://www.amazon.com/gp/product/B00EXAMPLE/ref=ppx_yo_dt?ie=UTF8&psc=1"
    assert clean_url(gp) == "https://www.amazon.com/gp/product/B00EXAMPLE"


def test_amazon_search_and_other_pages():
    """Test Amazon search and non-product pages."""
    assert clean_url("https://www.amazon.com/s?k=backpacks&ref=nb_sb_noss_1") == "https://www.amazon.com/s"
    assert (
        clean_url("https://www.amazon.com/gp/bestsellers/ref=zg_bs_nav_0?utm_source=x&pg=2")
        == "https://www.amazon.com/gp/bestsellers?pg=2"
    )
    assert clean_url("https://www.amazon.com/ref=nav_logo") == "https://www.amazon.com/"


def test_amazon_click_redirect():
    """Test sponsored click wrappers are unwrapped and cleaned."""
    assert clean_url(AMAZON_CLICK) == "https://www.amazon.com/SwissGear-Backpack/dp/B079R47PHD"


def test_amazon_nested_click_redirect():
    """Test wrappers inside wrappers are unwrapped recursively."""
    inner = "https://www.amazon.com/sspa/click?url=" + quote("/dp/B079R47PHD/ref=x", safe="")
    outer = "https://www.amazon.com/sp/click?url=" + quote(inner, safe="")
    assert clean_url(outer) == "https://www.amazon.com/dp/B079R47PHD"


def test_walmart_redirect():
    """Test rd= tracking redirects resolve to the product URL."""
    assert clean_url(WALMART_REDIRECT) == WALMART_PRODUCT


def test_walmart_product_and_other_pages():
    """Test Walmart direct product and listing URLs."""
    assert clean_url(WALMART_PRODUCT + "?athbdg=L1600&from=/search") == WALMART_PRODUCT
    assert (
        clean_url("https://www.walmart.com/browse/home/123?utm_medium=email&page=2")
        == "https://www.walmart.com/browse/home/123?page=2"
    )
    non_product = "https://www.walmart.com/track?rd=https%3A%2F%2Fwww.walmart.com%2Fcp%2Fgrocery"
    assert clean_url(non_product) == non_product


def test_safeway_albertsons():
    """Test Safeway and Albertsons product and aisle URLs."""
    assert (
        clean_url("https://www.safeway.com/shop/product-details.970555.html?storeId=1&utm_campaign=x")
        == "https://www.safeway.com/shop/product-details.970555.html"
    )
    assert (
        clean_url("https://www.albertsons.com/shop/product-details.188020052.html")
        == "https://www.albertsons.com/shop/product-details.188020052.html"
    )
    assert (
        clean_url("https://www.albertsons.com/shop/aisles/produce.html?ref=home&sort=price")
        == "https://www.albertsons.com/shop/aisles/produce.html?sort=price"
    )


def test_malformed_input_unchanged():
    """Test unparsable and placeholder input passes through."""
    assert clean_url("not-a-valid-url") == "not-a-valid-url"
    assert clean_url("mailto:someone@example.com") == "mailto:someone@example.com"
    assert clean_url("N/A") == "N/A"
    assert clean_url("") == ""
    assert clean_url(None) is None
    assert AMAZON_STRATEGY.canonicalize("amazon.com/dp/B079R47PHD") == "amazon.com/dp/B079R47PHD"


def test_select_strategy():
    """Test dispatch picks the first recognizing strategy by hostname."""
    assert select_strategy("https://www.amazon.co.uk/dp/B079R47PHD").kind == RetailerKind.AMAZON
    assert select_strategy(WALMART_PRODUCT).kind == RetailerKind.WALMART
    assert select_strategy("https://www.safeway.com/").kind == RetailerKind.SAFEWAY_ALBERTSONS
    assert select_strategy("https://example.com/?next=amazon.com").kind == RetailerKind.GENERIC
    assert select_strategy("not-a-valid-url") is GENERIC_STRATEGY


def test_fallback_is_last_and_total():
    """Test the generic fallback closes the chain and recognizes anything."""
    assert STRATEGY_CHAIN[-1] is GENERIC_STRATEGY
    for strategy in STRATEGY_CHAIN[:-1]:
        assert strategy.recognize(None) is False
        assert strategy.recognize("not-a-valid-url") is False
    assert GENERIC_STRATEGY.recognize(None) is True


def test_clean_url_idempotent():
    """Test cleaning twice equals cleaning once."""
    for url in CORPUS:
        once = clean_url(url)
        assert clean_url(once) == once, url


def test_clean_urls_in_html():
    """Test URLs inside markup are cleaned and text is untouched."""
    html = (
        '<a href="https://www.amazon.com/s?k=backpacks&amp;ref=nb_sb_noss_1">Search</a> '
        '<img src="https://example.com/i.png?utm_source=x&amp;w=200"> '
        "see https://example.com/x?gclid=1 for details"
    )
    assert clean_urls_in_html(html) == (
        '<a href="https://www.amazon.com/s">Search</a> '
        '<img src="https://example.com/i.png?w=200"> '
        "see https://example.com/x for details"
    )
    assert clean_urls_in_html("") == ""
    assert clean_urls_in_html("no links here") == "no links here"


def test_clean_urls_in_html_keeps_escaped_ampersands():
    """Test kept parameters are re-escaped in attribute values."""
    html = '<a href="https://example.com/p?a=1&amp;utm_source=x&amp;b=2">p</a>'
    assert clean_urls_in_html(html) == '<a href="https://example.com/p?a=1&amp;b=2">p</a>'


def test_strategy_html_passes():
    """Test per-strategy passes only touch owned URLs and match the single pass."""
    html = (
        f'<a href="{WALMART_PRODUCT}?athbdg=L1600">w</a>'
        '<a href="https://example.com/x?utm_term=y">g</a>'
        f'<a href="{AMAZON_CLICK.replace("&", "&amp;")}">a</a>'
    )

    walmart_only = clean_urls_in_html_for(WALMART_STRATEGY, html)
    assert f'href="{WALMART_PRODUCT}"' in walmart_only
    assert "utm_term=y" in walmart_only
    assert "sspa/click" in walmart_only

    assert clean_urls_in_html_by_strategy(html) == clean_urls_in_html(html)


def test_amazon_title_stops_at_first_dp_segment():
    """Test only the text before the first /dp/ is kept as the title."""
    url = "https://www.amazon.com/x/dp/short/dp/B079R47PHD"
    assert clean_url(url) == "https://www.amazon.com/x/dp/B079R47PHD"


def test_clean_urls_in_html_keeps_trailing_punctuation():
    """Test punctuation right after a URL stays in the text."""
    text = (
        "(see https://www.amazon.com/dp/B079R47PHD/ref=x) and "
        "https://www.amazon.com/dp/B079R47PHD/ref=y, ok. "
        "https://example.com/p?utm_source=z."
    )
    assert clean_urls_in_html(text) == (
        "(see https://www.amazon.com/dp/B079R47PHD) and "
        "https://www.amazon.com/dp/B079R47PHD, ok. "
        "https://example.com/p."
    )

    style = '<div style="background:url(https://example.com/a.png?utm_source=x)"></div>'
    assert clean_urls_in_html(style) == '<div style="background:url(https://example.com/a.png)"></div>'


def test_strategy_html_pass_is_exported():
    """Test the per-strategy HTML pass is part of the package API."""
    import retail_urls

    assert retail_urls.clean_urls_in_html_for is clean_urls_in_html_for
    assert "clean_urls_in_html_for" in retail_urls.__all__
