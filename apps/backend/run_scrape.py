#!/usr/bin/env python3
"""
Run one scrape from the command line.

Usage:
    python run_scrape.py                      # all sources, configured store
    python run_scrape.py --source ssc --source upsc --store memory
    python run_scrape.py --list
"""
import sys
import json
import asyncio
import logging
import argparse

from dotenv import load_dotenv

load_dotenv()

from app.config import get_settings
from core.net import build_fetcher
from crawler.sources.registry import build_default_registry
from orchestrator import build_orchestrator
from pipeline.notice_store import StoreError

logger = logging.getLogger("run_scrape")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Scrape government job notices once")
    parser.add_argument('--source', action='append', dest='sources', metavar='NAME',
                        help='Run only this source (repeatable); see --list')
    parser.add_argument('--store', choices=['postgres', 'memory'],
                        help='Notice store (default: GOVTJOBS_STORE or postgres when DATABASE_URL is set)')
    parser.add_argument('--list', action='store_true', help='List sources and exit')
    parser.add_argument('--log-level', help='Log level (default: GOVTJOBS_LOG_LEVEL or INFO)')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, (args.log_level or settings.log_level).upper(), logging.INFO))

    if args.list:
        registry = build_default_registry(build_fetcher())
        for source in registry.list_sources():
            print(f"{source['name']:<16} {source['category']:<9} {source['source_name']}")
        return 0

    try:
        orchestrator = build_orchestrator(settings, source_names=args.sources, store_kind=args.store)
    except KeyError as e:
        logger.error(f"[run_scrape] {e.args[0]}")
        return 2
    except StoreError as e:
        logger.error(f"[run_scrape] Store unavailable: {e}")
        return 1

    result = asyncio.run(orchestrator.run_all())
    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
