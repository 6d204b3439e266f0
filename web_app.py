"""LocalPress web interface (JSON API + minimal page)

Zip code lookup, recent headlines, keyword search and the tip/newsletter/
contact forms. All data comes from localpress.aggregation; this module only
validates input and shapes responses.
"""

import asyncio
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from flask import Flask, jsonify, render_template_string, request

from localpress.aggregation import Aggregator, create_aggregator
from localpress.aggregation.factory import create_cosmic_client
from localpress.errors import LocalPressError, ValidationError
from localpress.models.category import CATEGORY_CONFIGS
from localpress.tips.tip_service import TipService
from localpress.utils.config_manager import ConfigManager
from localpress.utils.logger import get_logger, setup_logging
from localpress.utils.validators import is_valid_zip_code, require_email, require_zip_code

load_dotenv()

logger = get_logger(__name__)

app = Flask(__name__)

GENERIC_ERROR = "Something went wrong. Please try again later."

# Built lazily so importing the module does not need credentials
_config: Optional[ConfigManager] = None
_aggregator: Optional[Aggregator] = None
_tip_service: Optional[TipService] = None


def get_config() -> ConfigManager:
    global _config
    if _config is None:
        _config = ConfigManager()
    return _config


def get_aggregator() -> Aggregator:
    global _aggregator
    if _aggregator is None:
        _aggregator = create_aggregator(get_config())
    return _aggregator


def get_tip_service() -> TipService:
    global _tip_service
    if _tip_service is None:
        config = get_config()
        _tip_service = TipService(
            create_cosmic_client(config),
            public_limit=config.get_int("cms.limits.public_tips", 10),
        )
    return _tip_service


def _error(message: str, status: int, **extra: Any) -> Tuple[Any, int]:
    return jsonify({"success": False, "error": message, **extra}), status


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>LocalPress - Your Neighborhood News Hub</title>
    <style>
        body { font-family: system-ui, sans-serif; max-width: 960px; margin: 0 auto; padding: 24px; }
        .card { border: 1px solid #ddd; border-radius: 8px; padding: 12px 16px; margin: 12px 0; }
        .badge { font-size: 12px; padding: 2px 8px; border-radius: 999px; background: #eef; }
        .meta { color: #666; font-size: 13px; }
    </style>
</head>
<body>
    <h1>LocalPress</h1>
    <p>Enter your zip code to discover local news, community events, and stories that matter to your neighborhood.</p>
    <input id="zip" placeholder="Zip code (e.g. 90210)" maxlength="10">
    <button onclick="loadZip()">Find Local News</button>
    <h2 id="heading">Recent Headlines</h2>
    <div id="articles"></div>
    <script>
        function render(articles) {
            const box = document.getElementById('articles');
            box.innerHTML = '';
            if (!articles.length) { box.textContent = 'No news available at the moment.'; return; }
            for (const a of articles) {
                const div = document.createElement('div');
                div.className = 'card';
                const badge = document.createElement('span');
                badge.className = 'badge';
                badge.textContent = a.category.value;
                const h3 = document.createElement('h3');
                h3.textContent = a.headline;
                const meta = document.createElement('div');
                meta.className = 'meta';
                meta.textContent = (a.publication_date || '') + (a.news_source ? ' - ' + a.news_source.source_name : '');
                const p = document.createElement('p');
                p.textContent = a.summary || '';
                div.append(badge, h3, meta, p);
                box.appendChild(div);
            }
        }
        async function loadRecent() {
            const res = await fetch('/api/articles');
            const data = await res.json();
            render(data.articles || []);
        }
        async function loadZip() {
            const zip = document.getElementById('zip').value.trim();
            const res = await fetch('/api/news/' + encodeURIComponent(zip));
            const data = await res.json();
            const heading = document.getElementById('heading');
            if (!data.success) { heading.textContent = data.error; render([]); return; }
            heading.textContent = data.coverage
                ? 'Local News for ' + data.area.city + ', ' + data.area.state
                : "We don't have coverage for zip code " + zip + ' yet.';
            render(data.articles);
        }
        window.onload = loadRecent;
    </script>
</body>
</html>
"""


@app.route("/")
def index():
    return render_template_string(HTML)


@app.route("/api/categories")
def api_categories():
    return jsonify({
        "success": True,
        "categories": [
            {"key": c.key, "value": c.value, "color": c.color, "description": c.description}
            for c in CATEGORY_CONFIGS
        ],
    })


@app.route("/api/articles")
def api_articles():
    limit = request.args.get("limit", type=int)
    if limit is None:
        limit = get_config().get_int("aggregation.recent_default_limit", 20)
    if limit <= 0:
        return _error("limit must be positive", 400)

    try:
        articles = asyncio.run(get_aggregator().get_all_articles(limit=limit))
    except LocalPressError as e:
        logger.error("Error loading recent headlines: %s", e)
        return _error(GENERIC_ERROR, 500, articles=[])

    return jsonify({"success": True, "count": len(articles), "articles": [a.to_dict() for a in articles]})


@app.route("/api/news/<zip_code>")
def api_news(zip_code: str):
    if not is_valid_zip_code(zip_code):
        return _error("Invalid zip code", 400, articles=[])

    zip_code = zip_code.strip()
    try:
        page = asyncio.run(get_aggregator().get_area_page(zip_code))
    except LocalPressError as e:
        logger.error("Error loading news content for %s: %s", zip_code, e)
        return _error(GENERIC_ERROR, 500, articles=[])

    return jsonify({
        "success": True,
        "zip_code": zip_code,
        "coverage": page.covered,
        "area": page.area.to_dict() if page.area else None,
        "count": len(page.articles),
        "articles": [a.to_dict() for a in page.articles],
    })


@app.route("/api/search")
def api_search():
    keyword = request.args.get("keyword", "").strip()
    zip_code = request.args.get("zip", "").strip() or None

    if not keyword:
        return _error("keyword is required", 400, articles=[])
    if zip_code and not is_valid_zip_code(zip_code):
        return _error("Invalid zip code", 400, articles=[])

    try:
        articles = asyncio.run(get_aggregator().search_articles(keyword, zip_code=zip_code))
    except LocalPressError as e:
        logger.error("Error searching for %r: %s", keyword, e)
        return _error(GENERIC_ERROR, 500, articles=[])

    return jsonify({"success": True, "count": len(articles), "articles": [a.to_dict() for a in articles]})


@app.route("/api/article/<slug>")
def api_article(slug: str):
    try:
        article = asyncio.run(get_aggregator().get_article(slug))
    except LocalPressError as e:
        logger.error("Error loading article %s: %s", slug, e)
        return _error(GENERIC_ERROR, 500)

    if article is None:
        return _error("Article not found", 404)
    return jsonify({"success": True, "article": article.to_dict()})


@app.route("/api/tips", methods=["GET", "POST"])
def api_tips():
    try:
        if request.method == "GET":
            tips = asyncio.run(get_tip_service().get_public_tips())
            return jsonify({"success": True, "tips": [t.to_dict() for t in tips]})

        data = _json_body()
        tip = asyncio.run(get_tip_service().create_tip(
            amount=data.get("amount"),
            tipper_name=data.get("tipper_name", ""),
            message=data.get("message", ""),
            email=data.get("email") or None,
            show_publicly=bool(data.get("show_publicly", False)),
        ))
    except ValidationError as e:
        return _error(e.message, 400, field=e.field)
    except LocalPressError as e:
        logger.error("Error handling tip request: %s", e)
        return _error(GENERIC_ERROR, 500)

    return jsonify({"success": True, "message": "Thank you for supporting local journalism!", "tip": tip.to_dict()}), 201


@app.route("/api/newsletter", methods=["POST"])
def api_newsletter():
    data = _json_body()
    try:
        email = require_email(data.get("email"))
        zip_code = require_zip_code(data.get("zip_code"))
    except ValidationError as e:
        return _error(e.message, 400, field=e.field)

    logger.info("Newsletter signup for zip code %s", zip_code)
    return jsonify({"success": True, "email": email, "zip_code": zip_code})


@app.route("/api/contact", methods=["POST"])
def api_contact():
    data = _json_body()
    name = (data.get("name") or "").strip()
    subject = (data.get("subject") or "").strip()
    message = (data.get("message") or "").strip()
    try:
        require_email(data.get("email"))
        for field_name, value in (("name", name), ("subject", subject), ("message", message)):
            if not value:
                raise ValidationError(field_name, f"{field_name.capitalize()} is required")
    except ValidationError as e:
        return _error(e.message, 400, field=e.field)

    logger.info("Contact form submitted: %s", subject)
    return jsonify({"success": True, "message": "Thank you for your message. We'll get back to you soon."})


if __name__ == "__main__":
    setup_logging()
    config = get_config()
    host = config.get("web.host", "127.0.0.1")
    port = config.get_int("web.port", 9001)
    print("\n" + "=" * 60)
    print("  LocalPress web interface")
    print("=" * 60)
    print(f"\n  http://{host}:{port}\n")
    app.run(host=host, port=port, debug=False)
