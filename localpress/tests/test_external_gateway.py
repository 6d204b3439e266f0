"""ExternalSourceGateway tests (best-effort provider fetches)"""

import asyncio

from localpress.ingestion.external_gateway import ExternalSourceGateway
from localpress.models.coverage_area import CoverageArea


# ─── Fixture ────────────────────────────────────────────

AREA = CoverageArea(
    id="area-90210",
    zip_code="90210",
    city="Beverly Hills",
    state="CA",
    county="Los Angeles County",
    active=True,
)


def _make_record(article_id, title=None, link=None, pub_date="2024-03-03 08:00:00", category=None):
    return {
        "article_id": article_id,
        "title": title or f"Story {article_id}",
        "link": link or f"https://news.example.com/{article_id}",
        "description": f"Summary of {article_id}",
        "pubDate": pub_date,
        "category": category or ["domestic"],
        "source_name": "Example News",
    }


# ═══════════════════════════════════════════════════════════
# Search terms
# ═══════════════════════════════════════════════════════════

class TestBuildSearchTerms:

    def test_city_county_city_state(self):
        assert ExternalSourceGateway.build_search_terms(AREA) == [
            "Beverly Hills", "Los Angeles County", "Beverly Hills CA",
        ]

    def test_no_county(self):
        area = CoverageArea(zip_code="60601", city="Chicago", state="IL")
        assert ExternalSourceGateway.build_search_terms(area) == ["Chicago", "Chicago IL"]

    def test_duplicates_and_blanks_dropped(self):
        area = CoverageArea(zip_code="11111", city="Springfield", state="", county="Springfield")
        assert ExternalSourceGateway.build_search_terms(area) == ["Springfield"]


# ═══════════════════════════════════════════════════════════
# Location news
# ═══════════════════════════════════════════════════════════

class TestFetchForArea:

    def test_two_terms_sized_by_candidates(self, fake_newsdata):
        fake_newsdata.results_by_query = {
            "Beverly Hills": [_make_record("bh1")],
            "Los Angeles County": [_make_record("la1")],
        }
        articles = asyncio.run(ExternalSourceGateway(fake_newsdata).fetch_for_area(AREA, limit=10))

        assert [call["q"] for call in fake_newsdata.calls] == ["Beverly Hills", "Los Angeles County"]
        assert all(call["size"] == 4 for call in fake_newsdata.calls)
        assert all(call["timeframe"] == "7" for call in fake_newsdata.calls)
        assert [a.slug for a in articles] == ["bh1", "la1"]
        assert [a.id for a in articles] == ["newsdata-0-bh1", "newsdata-1-la1"]
        assert all(a.zip_code_areas == [AREA] for a in articles)
        assert all(a.is_external for a in articles)

    def test_failed_term_skipped(self, fake_newsdata):
        fake_newsdata.results_by_query = {
            "Beverly Hills": [_make_record("bh1")],
            "Los Angeles County": [_make_record("la1")],
        }
        fake_newsdata.failing = {"Beverly Hills"}
        articles = asyncio.run(ExternalSourceGateway(fake_newsdata).fetch_for_area(AREA))
        assert [a.slug for a in articles] == ["la1"]

    def test_all_terms_fail(self, fake_newsdata):
        fake_newsdata.fail_all = True
        assert asyncio.run(ExternalSourceGateway(fake_newsdata).fetch_for_area(AREA)) == []

    def test_duplicates_across_terms_removed(self, fake_newsdata):
        shared = _make_record("same", title="Wildfire update", link="https://news.example.com/fire")
        fake_newsdata.results_by_query = {
            "Beverly Hills": [shared],
            "Los Angeles County": [dict(shared, article_id="same2")],
        }
        articles = asyncio.run(ExternalSourceGateway(fake_newsdata).fetch_for_area(AREA))
        assert [a.slug for a in articles] == ["same"]

    def test_truncated_to_limit(self, fake_newsdata):
        fake_newsdata.results_by_query = {
            "Beverly Hills": [_make_record(f"bh{i}") for i in range(5)],
            "Los Angeles County": [_make_record(f"la{i}") for i in range(5)],
        }
        articles = asyncio.run(ExternalSourceGateway(fake_newsdata).fetch_for_area(AREA, limit=3))
        # ceil(3 / 3) = 1 per term
        assert [a.slug for a in articles] == ["bh0", "la0"]

        articles = asyncio.run(ExternalSourceGateway(fake_newsdata).fetch_for_area(AREA, limit=5))
        # ceil(5 / 3) = 2 per term, 4 records
        assert len(articles) == 4

    def test_single_term_area(self, fake_newsdata):
        area = CoverageArea(id="area-x", zip_code="11111", city="Springfield", state="", active=True)
        fake_newsdata.default_results = [_make_record(f"s{i}") for i in range(20)]
        articles = asyncio.run(ExternalSourceGateway(fake_newsdata).fetch_for_area(area, limit=10))
        assert len(fake_newsdata.calls) == 1
        assert fake_newsdata.calls[0]["size"] == 10
        assert len(articles) == 10

    def test_malformed_record_keeps_rest_of_batch(self, fake_newsdata):
        bad = dict(_make_record("bad"), category=5, title=2024, link=99)
        fake_newsdata.results_by_query = {
            "Beverly Hills": [_make_record("bh1"), bad],
            "Los Angeles County": [_make_record("la1")],
        }
        articles = asyncio.run(ExternalSourceGateway(fake_newsdata).fetch_for_area(AREA))
        assert [a.slug for a in articles] == ["bh1", "bad", "la1"]
        assert articles[1].title == "2024"

    def test_zero_limit(self, fake_newsdata):
        assert asyncio.run(ExternalSourceGateway(fake_newsdata).fetch_for_area(AREA, limit=0)) == []
        assert fake_newsdata.calls == []


# ═══════════════════════════════════════════════════════════
# Keyword / general / breaking
# ═══════════════════════════════════════════════════════════

class TestOtherFetches:

    def test_keyword_search(self, fake_newsdata):
        fake_newsdata.results_by_query = {"festival": [_make_record(f"f{i}") for i in range(15)]}
        articles = asyncio.run(ExternalSourceGateway(fake_newsdata).search_by_keyword("festival", limit=10))
        call = fake_newsdata.calls[0]
        assert call["q"] == "festival"
        assert call["size"] == 10
        assert call["country"] == ["us"]
        assert call["timeframe"] == "7"
        assert len(articles) == 10
        assert all(a.zip_code_areas == [] for a in articles)

    def test_keyword_search_failure(self, fake_newsdata):
        fake_newsdata.fail_all = True
        assert asyncio.run(ExternalSourceGateway(fake_newsdata).search_by_keyword("festival")) == []

    def test_general(self, fake_newsdata):
        fake_newsdata.default_results = [_make_record("g1")]
        articles = asyncio.run(ExternalSourceGateway(fake_newsdata).fetch_general(limit=5))
        call = fake_newsdata.calls[0]
        assert call["category"] == ["politics", "business", "domestic"]
        assert call["timeframe"] == "3"
        assert [a.slug for a in articles] == ["g1"]

    def test_breaking(self, fake_newsdata):
        fake_newsdata.default_results = [_make_record("b1")]
        asyncio.run(ExternalSourceGateway(fake_newsdata).fetch_breaking())
        assert fake_newsdata.calls[0]["timeframe"] == "1"
        assert fake_newsdata.calls[0]["size"] == 10

    def test_configured_timeframe(self, fake_newsdata, config_manager, monkeypatch):
        monkeypatch.setenv("LOCALPRESS_NEWSDATA_TIMEFRAMES_BREAKING", "2")
        asyncio.run(ExternalSourceGateway(fake_newsdata, config=config_manager).fetch_breaking())
        assert fake_newsdata.calls[0]["timeframe"] == "2"
