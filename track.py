#!/usr/bin/env python3
"""
Game Price Tracker - search Steam and GOG deals from the command line

Usage:
    python track.py "portal"
    python track.py "portal" --sort discount --platform GOG
    python track.py "witcher" --min-price 5 --max-price 20
    python track.py "portal" --favorite 123
    python track.py --list-favorites
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from config.logger import setup_logging
from config.settings import DEFAULT_RETRIES
from scrapers.base import Deal
from tracker import DealTracker
from utils.currency import format_price
from utils.deal_filters import PLATFORM_OPTIONS, SORT_OPTIONS
from utils.stores import store_name_for


def format_deal_line(index: int, deal: Deal) -> str:
    price = format_price(deal.sale_price)
    if deal.is_on_sale:
        price = f"{price} (was {format_price(deal.normal_price)}, On Sale!)"
    return f"{index:>3}. [{store_name_for(deal.store_id)}] {deal.title[:50]} - {price}  id={deal.game_id}"


def print_results(tracker: DealTracker):
    """Print the current search state to console"""
    state = tracker.state

    print(f"\n{'='*60}")
    print(f"🎮 Results: {state.search_term}")
    print(f"{'='*60}")

    if state.error:
        print(f"\n❌ {state.error}")
        return

    if state.no_results:
        print("\nNo results found.")
        return

    filters = state.filters
    deals = tracker.visible_deals()
    print(f"Sort: {filters.sort_option} | Platform: {filters.platform_filter}")
    print(f"Showing {len(deals)} of {len(state.deals)} deals\n")

    for i, deal in enumerate(deals, 1):
        print(format_deal_line(i, deal))


def print_favorites(favorites: List[Deal]):
    print(f"\n⭐ Your Favorites ({len(favorites)})")
    print("-" * 60)
    if not favorites:
        print("  (none)")
    for deal in favorites:
        print(f"  • {deal.title[:50]} - {format_price(deal.sale_price)}  id={deal.game_id}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search Steam and GOG game deals")
    parser.add_argument("query", nargs="?", default="", help="Game title to search for")
    parser.add_argument("--sort", default="price", choices=SORT_OPTIONS, help="Sort order (default: price)")
    parser.add_argument("--platform", default="all", choices=PLATFORM_OPTIONS, help="Store filter (default: all)")
    parser.add_argument("--min-price", default=None, help="Minimum price in EUR")
    parser.add_argument("--max-price", default=None, help="Maximum price in EUR")
    parser.add_argument("--retries", type=int, default=DEFAULT_RETRIES, help="Retries for failed requests (default: 3)")
    parser.add_argument("--favorite", action="append", default=[], metavar="GAME_ID",
                        help="Add a deal from the results to favorites")
    parser.add_argument("--unfavorite", action="append", default=[], metavar="GAME_ID",
                        help="Remove a game from favorites")
    parser.add_argument("--list-favorites", action="store_true", help="Print saved favorites")
    return parser


async def run(args: argparse.Namespace, tracker: Optional[DealTracker] = None) -> int:
    tracker = tracker or DealTracker(retries=args.retries)
    tracker.update_filters(
        sort_option=args.sort,
        platform_filter=args.platform,
        min_price=args.min_price,
        max_price=args.max_price,
    )
    exit_code = 0

    if args.query:
        await tracker.search(args.query)
        print_results(tracker)
        if tracker.state.error:
            exit_code = 1

    for game_id in args.favorite:
        deal = tracker.find_deal(game_id)
        if deal is None:
            print(f"⚠️ No deal with id {game_id} in the current results")
            continue
        tracker.add_favorite(deal)
        print(f"⭐ Added {deal.title} to favorites")

    for game_id in args.unfavorite:
        tracker.remove_favorite(game_id)
        print(f"🗑️ Removed {game_id} from favorites")

    if args.list_favorites or args.favorite or args.unfavorite:
        print_favorites(tracker.favorites)

    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.query and not (args.list_favorites or args.unfavorite):
        parser.print_usage(sys.stderr)
        return 1

    setup_logging()
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
