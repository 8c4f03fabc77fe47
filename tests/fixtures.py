"""HTML fixtures modelled on the markup of the supported news sites, plus a fetch spy."""

from __future__ import annotations

from typing import Callable, List

from fxnews.services.fetcher import FetchResponse


class SpyFetcher:
    """Stands in for :class:`~fxnews.services.fetcher.PageFetcher` and records calls."""

    def __init__(self, response: FetchResponse | Callable[[str], FetchResponse]) -> None:
        self._response = response
        self.calls: List[str] = []

    def fetch(self, url: str, max_attempts: int | None = None) -> FetchResponse:
        self.calls.append(url)
        if callable(self._response):
            return self._response(url)
        return self._response


DAILYFOREX_ARTICLE_URL = "https://dailyforex.com/forex-technical-analysis/2024/01/15/some-article"

# Five 80 character paragraphs, 400 characters of body text in total.
DAILYFOREX_PARAGRAPHS = [f"Paragraph {index} " + "x" * 68 for index in range(5)]
_DAILYFOREX_BODY = "".join("<p>" + text + "</p>" for text in DAILYFOREX_PARAGRAPHS)

DAILYFOREX_ARTICLE_HTML = f"""
<html>
  <head>
    <meta property="og:title" content="EUR/USD Technical Analysis: Bulls Regroup" />
    <script type="application/ld+json">
      {{"@context": "https://schema.org", "@type": "NewsArticle",
        "headline": "EUR/USD Technical Analysis",
        "author": {{"@type": "Person", "name": "Jane Trader"}},
        "datePublished": "2024-01-15T08:00:00Z"}}
    </script>
  </head>
  <body>
    <h1>EUR/USD Technical Analysis</h1>
    <span class="author-name">DailyForex Staff</span>
    <div class="content-body article-content">
      {_DAILYFOREX_BODY}
      <p>Short line</p>
    </div>
  </body>
</html>
"""

INVESTING_LISTING_URL = "https://www.investing.com/news/forex-news"

INVESTING_LISTING_HTML = """
<html>
  <body>
    <section>
      <article>
        <a data-test="article-title-link" href="/news/forex-news/eurusd-climbs-after-ecb-1234567">
          EUR/USD climbs after ECB
        </a>
      </article>
      <article>
        <a data-test="article-title-link" href="/news/forex-news/dollar-slips-on-jobs-data-7654321">
          Dollar slips on jobs data
        </a>
      </article>
      <a class="title-link" href="/news/forex-news/eurusd-climbs-after-ecb-1234567#comments">
        EUR/USD extends gains
      </a>
      <a class="nav-title" href="/currencies/eur-usd">EUR/USD quote</a>
      <a href="/about-us">About us</a>
    </section>
  </body>
</html>
"""

INVESTING_ARTICLE_URL = "https://www.investing.com/news/forex-news/eurusd-climbs-after-ecb-1234567"

INVESTING_ARTICLE_HTML = """
<html>
  <head><meta property="og:title" content="EUR/USD climbs after ECB" /></head>
  <body>
    <h1>EUR/USD climbs after ECB decision</h1>
    <a data-test="article-provider-link" href="/members/reuters">Reuters</a>
    <time data-test="article-publish-date" datetime="2024-01-15 09:30:00">Jan 15, 2024</time>
    <div id="article">
      <p>The euro rose against the dollar on Monday after the European Central Bank held rates.</p>
      <p>Advertisement - scroll to continue reading the rest of this article below the banner.</p>
      <p>Traders now price two cuts before the summer, according to futures market data.</p>
      <p>Ad</p>
    </div>
  </body>
</html>
"""

DAILYFOREX_LISTING_URL = "https://www.dailyforex.com/forex-news"

DAILYFOREX_LISTING_HTML = """
<html>
  <head>
    <script type="application/ld+json">
      {"@context": "https://schema.org", "@type": "ItemList", "itemListElement": [
        {"@type": "ListItem", "position": 1,
         "url": "https://www.dailyforex.com/forex-news/2024/01/eurusd-forecast/210001",
         "name": "EUR/USD Forecast"},
        {"@type": "ListItem", "position": 2,
         "item": {"url": "/forex-news/2024/01/gbpusd-signal/210002", "name": "GBP/USD Signal"}},
        {"@type": "ListItem", "position": 3, "name": "Missing link"}
      ]}
    </script>
    <script type="application/ld+json">
      [{"@type": "NewsArticle", "url": "/forex-news/2024/01/usdjpy-analysis/210003",
        "headline": "USD/JPY Analysis", "description": "Yen weakens further"}]
    </script>
    <script type="application/ld+json">{not valid json</script>
  </head>
  <body>
    <a href="/forex-news/2024/01/ignored/210009">Ignored because JSON-LD wins</a>
  </body>
</html>
"""

DAILYFOREX_PLAIN_LISTING_HTML = """
<html>
  <body>
    <a href="/forex-news/2024/01/eurusd/210001">EUR/USD weekly analysis</a>
    <a href="/brokers">Compare brokers</a>
    <a href="/forex-articles/what-is-a-pip">Learn the basics</a>
    <a href="/education">Market report archive</a>
    <a href="javascript:void(0)">Newsletter</a>
    <a href="/articles/empty"> </a>
  </body>
</html>
"""
