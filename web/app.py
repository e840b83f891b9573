"""
Game Price Tracker Web Dashboard

FastAPI app to search Steam/GOG deals, filter and sort them, and keep a
favorites list.
"""

import html
import logging
from dataclasses import replace
from typing import List, Optional

from fastapi import Depends, FastAPI, Form, HTTPException, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel, ConfigDict

from config.logger import setup_logging
from scrapers.base import Deal
from tracker import DealTracker
from utils.currency import format_price
from utils.deal_filters import PLATFORM_OPTIONS, apply_filters
from utils.stores import store_name_for

logger = logging.getLogger(__name__)

app = FastAPI(title="Game Price Tracker", version="1.0")

_tracker: Optional[DealTracker] = None


def get_tracker() -> DealTracker:
    """Process-wide tracker, created on first use"""
    global _tracker
    if _tracker is None:
        _tracker = DealTracker()
    return _tracker


@app.on_event("startup")
async def startup_event():
    setup_logging()
    logger.info("Game Price Tracker dashboard started")


class DealPayload(BaseModel):
    """Deal snapshot in CheapShark's field names"""
    model_config = ConfigDict(extra="allow")

    gameID: str
    title: str
    storeID: str
    salePrice: float
    normalPrice: float
    isOnSale: Optional[bool] = None
    savings: float = 0.0
    thumb: Optional[str] = None


def deal_to_json(deal: Deal) -> dict:
    data = deal.to_dict()
    data['storeName'] = store_name_for(deal.store_id)
    data['displayPrice'] = format_price(deal.sale_price)
    return data


HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <title>Game Price Tracker 🎮</title>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>
        :root {{
            --bg-dark: #0f0f1a;
            --bg-card: #1a1a2e;
            --accent: #00d9ff;
            --sale: #4ecdc4;
            --danger: #ff6b6b;
            --text: #eee;
            --text-muted: #888;
        }}
        * {{ box-sizing: border-box; margin: 0; padding: 0; }}
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: var(--bg-dark);
            color: var(--text);
            min-height: 100vh;
        }}
        .container {{ max-width: 1000px; margin: 0 auto; padding: 20px; }}
        h1 {{ color: var(--accent); font-size: 28px; text-align: center; margin-bottom: 25px; }}
        h2 {{ margin: 35px 0 15px; }}
        .search-form {{ display: flex; gap: 10px; justify-content: center; flex-wrap: wrap; }}
        .search-input {{
            flex: 1;
            min-width: 200px;
            max-width: 500px;
            padding: 12px 16px;
            font-size: 16px;
            border: 2px solid #333;
            border-radius: 10px;
            background: var(--bg-card);
            color: var(--text);
        }}
        .btn {{
            padding: 10px 20px;
            border: none;
            border-radius: 8px;
            cursor: pointer;
            font-weight: bold;
        }}
        .btn-search {{ background: var(--accent); color: #000; }}
        .btn-add {{ background: var(--sale); color: #000; margin-top: 10px; }}
        .btn-remove {{ background: var(--danger); color: #000; margin-top: 10px; }}
        .options {{
            display: flex;
            gap: 20px;
            margin: 15px 0 25px;
            justify-content: center;
            flex-wrap: wrap;
            font-size: 14px;
            color: var(--text-muted);
        }}
        .options select, .options input {{
            padding: 6px;
            border: 1px solid #444;
            border-radius: 5px;
            background: var(--bg-card);
            color: var(--text);
        }}
        .options input {{ width: 80px; }}
        .message {{ text-align: center; margin: 20px 0; color: var(--text-muted); }}
        .message.error {{ color: var(--danger); }}
        .deals {{
            display: grid;
            grid-template-columns: repeat(auto-fill, minmax(260px, 1fr));
            gap: 15px;
        }}
        .deal {{
            background: var(--bg-card);
            border-radius: 12px;
            padding: 16px;
            text-align: center;
        }}
        .deal h3 {{ font-size: 16px; margin-bottom: 8px; }}
        .deal img {{ margin: 8px auto; border-radius: 6px; max-width: 100%; }}
        .old-price {{ text-decoration: line-through; color: var(--danger); }}
        .sale-price {{ font-weight: bold; }}
        .badge {{
            display: inline-block;
            padding: 3px 10px;
            border-radius: 999px;
            font-size: 11px;
            background: #1f3d3a;
            color: var(--sale);
            margin-top: 6px;
        }}
        .store {{ color: var(--text-muted); font-size: 13px; margin-top: 6px; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>🎮 Game Price Tracker</h1>

        <form class="search-form" method="get" action="/search" id="searchForm">
            <input type="text" name="q" class="search-input" placeholder="Search for a game"
                   value="{query}" required>
            <button type="submit" class="btn btn-search">Search</button>
        </form>

        <div class="options">
            <label>Sort by:
                <select name="sort" form="searchForm">
                    <option value="price" {sort_price}>Price (Low to High)</option>
                    <option value="discount" {sort_discount}>Discount (High to Low)</option>
                </select>
            </label>
            <label>Platform:
                <select name="platform" form="searchForm">{platform_options}</select>
            </label>
            <label>Min Price: <input type="number" step="any" name="min_price" value="{min_price}" form="searchForm"></label>
            <label>Max Price: <input type="number" step="any" name="max_price" value="{max_price}" form="searchForm"></label>
        </div>

        {content}

        {favorites}
    </div>
</body>
</html>"""


def _escape(value) -> str:
    return html.escape("" if value is None else str(value))


def render_page(tracker: DealTracker) -> str:
    state = tracker.state
    filters = state.filters

    platform_options = "".join(
        f'<option value="{p}" {"selected" if filters.platform_filter == p else ""}>{"All" if p == "all" else p}</option>'
        for p in PLATFORM_OPTIONS
    )

    return HTML_TEMPLATE.format(
        query=_escape(state.search_term),
        sort_price="selected" if filters.sort_option == "price" else "",
        sort_discount="selected" if filters.sort_option == "discount" else "",
        platform_options=platform_options,
        min_price=_escape(filters.min_price),
        max_price=_escape(filters.max_price),
        content=render_results(tracker),
        favorites=render_favorites(tracker.favorites),
    )


def render_results(tracker: DealTracker) -> str:
    state = tracker.state
    parts = []

    if state.error:
        parts.append(f'<div class="message error">{_escape(state.error)}</div>')
    if state.is_loading:
        parts.append('<div class="message">Loading...</div>')
    if not state.is_loading and state.no_results:
        parts.append('<div class="message">No results found.</div>')

    cards = [deal_card(deal) for deal in tracker.visible_deals()]
    if cards:
        parts.append('<div class="deals">' + '\n'.join(cards) + '</div>')

    return '\n'.join(parts)


def deal_card(deal: Deal) -> str:
    if deal.is_on_sale:
        price_html = (
            f'<span class="old-price">{format_price(deal.normal_price)}</span> '
            f'<span class="sale-price">{format_price(deal.sale_price)}</span>'
        )
        badge = '<span class="badge">On Sale!</span>'
    else:
        price_html = format_price(deal.sale_price)
        badge = ""

    thumb = f'<img src="{_escape(deal.thumb)}" alt="{_escape(deal.title)}">' if deal.thumb else ""

    return f"""<div class="deal">
    <h3>{_escape(deal.title)}</h3>
    <p>{price_html}</p>
    {badge}
    <p class="store">{store_name_for(deal.store_id)}</p>
    {thumb}
    <form method="post" action="/favorites">
        <input type="hidden" name="game_id" value="{_escape(deal.game_id)}">
        <button type="submit" class="btn btn-add">Add to Favorites</button>
    </form>
</div>"""


def render_favorites(favorites: List[Deal]) -> str:
    if not favorites:
        return ""

    cards = []
    for deal in favorites:
        cards.append(f"""<div class="deal">
    <h3>{_escape(deal.title)}</h3>
    <p>{format_price(deal.sale_price)}</p>
    <form method="post" action="/favorites/{_escape(deal.game_id)}/delete">
        <button type="submit" class="btn btn-remove">Remove from Favorites</button>
    </form>
</div>""")

    return '<h2>Your Favorites</h2>\n<div class="deals">' + '\n'.join(cards) + '</div>'


@app.get("/", response_class=HTMLResponse)
async def home(
    sort: Optional[str] = None,
    platform: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    tracker: DealTracker = Depends(get_tracker)
):
    tracker.update_filters(sort, platform, min_price, max_price)
    return render_page(tracker)


@app.get("/search", response_class=HTMLResponse)
async def search(
    q: str = Query(..., min_length=1),
    sort: Optional[str] = None,
    platform: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    tracker: DealTracker = Depends(get_tracker)
):
    """Search for deals and render the dashboard"""
    tracker.update_filters(sort, platform, min_price, max_price)
    await tracker.search(q)
    return render_page(tracker)


@app.post("/favorites")
async def add_favorite(game_id: str = Form(...), tracker: DealTracker = Depends(get_tracker)):
    deal = tracker.find_deal(game_id)
    if deal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Deal not in current results")
    tracker.add_favorite(deal)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@app.post("/favorites/{game_id}/delete")
async def remove_favorite(game_id: str, tracker: DealTracker = Depends(get_tracker)):
    tracker.remove_favorite(game_id)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@app.get("/api/search")
async def api_search(
    q: str = Query(..., min_length=1),
    sort: Optional[str] = None,
    platform: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    tracker: DealTracker = Depends(get_tracker)
):
    """API endpoint for programmatic access.

    The response is built from this request's own fetch and filters, so an
    overlapping search on the shared tracker cannot leak into it.
    """
    filters = replace(tracker.update_filters(sort, platform, min_price, max_price))
    result = await tracker.search(q)
    deals = apply_filters(result.deals, filters) if result.ok else []

    return {
        'query': q,
        'status': result.status.value,
        'error': result.error,
        'no_results': result.no_results,
        'attempts': result.attempts,
        'total': len(deals),
        'items': [deal_to_json(deal) for deal in deals]
    }


@app.get("/api/favorites")
async def api_get_favorites(tracker: DealTracker = Depends(get_tracker)):
    return {"deals": [deal_to_json(deal) for deal in tracker.favorites]}


@app.post("/api/favorites", status_code=status.HTTP_201_CREATED)
async def api_add_favorite(payload: DealPayload, tracker: DealTracker = Depends(get_tracker)):
    """Save a deal to favorites"""
    favorites = tracker.add_favorite(Deal.from_api(payload.model_dump(exclude_unset=True)))
    return {"status": "saved", "gameID": payload.gameID, "total": len(favorites)}


@app.delete("/api/favorites/{game_id}")
async def api_remove_favorite(game_id: str, tracker: DealTracker = Depends(get_tracker)):
    favorites = tracker.remove_favorite(game_id)
    return {"status": "removed", "gameID": game_id, "total": len(favorites)}


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "ok", "version": "1.0"}


if __name__ == "__main__":
    import uvicorn
    from config.settings import PORT
    uvicorn.run(app, host="0.0.0.0", port=PORT)
