"""CLI entry point — python -m newsboard."""

import argparse
import sys
import time
from datetime import datetime

from .config import get_cache_duration_ms, get_refresh_interval, load_config, save_config
from .errors import AllSourcesFailed
from .log import set_verbose
from .sources.base import CATEGORIES, Category, now_ms


def format_time_ago(timestamp: int, now: int | None = None) -> str:
    """Human label for an epoch-ms timestamp: just now / 5 min ago / 3 h ago / Mar 4."""
    now = now_ms() if now is None else now
    diff = now - timestamp

    minutes = diff // 60_000
    hours = diff // 3_600_000
    days = diff // 86_400_000

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes} min ago"
    if hours < 24:
        return f"{hours} h ago"
    if days < 7:
        return f"{days} d ago"
    date = datetime.fromtimestamp(timestamp / 1000)
    return f"{date:%b} {date.day}"


def print_items(items, limit: int):
    if not items:
        print("  No news available.")
        return
    for i, item in enumerate(items[:limit], 1):
        hot = f" [{item.hot}]" if item.hot > 10 else ""
        print(f"  {i:2d}. [{item.source_name}] {item.title}{hot}")
        print(f"      {format_time_ago(item.timestamp)} · {item.url}")
        if item.description:
            print(f"      {item.description}")


def print_result(result, limit: int):
    if result is None:
        print("  A load for this category is already running.")
        return
    print_items(result.items, limit)
    minutes = get_cache_duration_ms() // 60_000
    print(f"\n  Updated {format_time_ago(result.timestamp)}, cached for {minutes} minutes")


def cmd_sources(args):
    from .api import get_fetcher, reset

    toggle = args.enable or args.disable
    if toggle:
        registry = get_fetcher().registry
        if toggle not in registry:
            print(f"  Unknown source: {toggle}")
            sys.exit(1)
        config = load_config()
        overrides = config.get("sources")
        if not isinstance(overrides, dict):
            overrides = config["sources"] = {}
        overrides[toggle] = {"enabled": bool(args.enable)}
        save_config(config)
        reset()
        print(f"  {'Enabled' if args.enable else 'Disabled'} {toggle}")
        return

    for source in get_fetcher().registry:
        if args.category and source.category is not Category(args.category):
            continue
        status = "on " if source.enabled else "off"
        print(f"  [{status}] {source.id:<16} {source.name:<22} "
              f"{source.category.label:<11} {source.kind.value}")


def cmd_fetch(args):
    from .api import fetch_all_news, fetch_source_news

    if args.source:
        items = fetch_source_news(args.source)
    else:
        items = fetch_all_news(args.category)
    print_items(items, args.limit)


def cmd_load(args):
    from .api import force_refresh, load_with_cache

    try:
        if args.force:
            result = force_refresh(args.category)
        else:
            result = load_with_cache(args.category)
    except AllSourcesFailed as e:
        print(f"  Load failed: {e}")
        sys.exit(1)
    print_result(result, args.limit)


def cmd_clear(args):
    from .api import get_cache_manager

    get_cache_manager().invalidate(args.category)
    print(f"  Cleared cache for {args.category or 'all'}")


def cmd_watch(args):
    from .api import get_cache_manager
    from .scheduler import RefreshScheduler
    from .session import NewsSession

    session = NewsSession(get_cache_manager(), args.category)
    interval = args.interval * 60 if args.interval else get_refresh_interval()
    scheduler = RefreshScheduler(session, interval)

    try:
        print_result(session.load(), args.limit)
    except AllSourcesFailed as e:
        print(f"  Load failed: {e}")

    shown = session.last_result.timestamp if session.last_result else None
    scheduler.start()
    print(f"\n  Watching — refresh every {interval / 60:g} min (Ctrl-C to stop)")
    try:
        while True:
            time.sleep(1)
            latest = session.last_result
            if latest is not None and latest.timestamp != shown:
                shown = latest.timestamp
                print()
                print_result(latest, args.limit)
    except KeyboardInterrupt:
        pass
    finally:
        scheduler.stop(timeout=5)


def main():
    categories = [c.value for c in Category]

    parser = argparse.ArgumentParser(
        description="Newsboard — trending news from many sources, one time-sorted list",
        epilog="Categories: " + ", ".join(f"{c.value} ({CATEGORIES[c]['name']})" for c in Category),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd")

    # sources
    p_sources = sub.add_parser("sources", help="List configured sources, or switch one on or off")
    p_sources.add_argument("--category", choices=categories)
    toggle = p_sources.add_mutually_exclusive_group()
    toggle.add_argument("--enable", metavar="ID", help="Enable a source in config.json")
    toggle.add_argument("--disable", metavar="ID", help="Disable a source in config.json")

    # fetch
    p_fetch = sub.add_parser("fetch", help="Fetch live, bypassing the cache")
    p_fetch.add_argument("--category", choices=categories)
    p_fetch.add_argument("--source", help="Fetch a single source by id")
    p_fetch.add_argument("--limit", type=int, default=30, help="Max items to show")

    # load
    p_load = sub.add_parser("load", help="Load through the 30-minute cache")
    p_load.add_argument("--category", choices=categories)
    p_load.add_argument("--force", action="store_true", help="Drop the cache entry and refetch")
    p_load.add_argument("--limit", type=int, default=30, help="Max items to show")

    # clear
    p_clear = sub.add_parser("clear", help="Delete the cache entry for a category")
    p_clear.add_argument("--category", choices=categories)

    # watch
    p_watch = sub.add_parser("watch", help="Keep loading on the auto-refresh interval")
    p_watch.add_argument("--category", choices=categories)
    p_watch.add_argument("--interval", type=float, default=None, help="Minutes between refreshes")
    p_watch.add_argument("--limit", type=int, default=30, help="Max items to show")

    args = parser.parse_args()

    if args.verbose:
        set_verbose(True)

    if not args.cmd:
        parser.print_help()
        return

    if args.cmd == "sources":
        cmd_sources(args)
    elif args.cmd == "fetch":
        cmd_fetch(args)
    elif args.cmd == "load":
        cmd_load(args)
    elif args.cmd == "clear":
        cmd_clear(args)
    elif args.cmd == "watch":
        cmd_watch(args)


if __name__ == "__main__":
    main()
