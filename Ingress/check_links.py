#!/usr/bin/env python3
"""
Check the external reference links of every catalog entry.

Usage:
    python Ingress/check_links.py
    python Ingress/check_links.py --source output/catalog/catalog.json
    python Ingress/check_links.py --workers 20 --timeout 5
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from catalog import Catalog, CatalogError
from catalog.config import load_config, load_env_file
from catalog.links import check_references


def main(argv=None):
    load_env_file()
    config = load_config()

    parser = argparse.ArgumentParser(description="Validate reference links of catalog entries")
    parser.add_argument(
        "--source",
        type=Path,
        default=config.source,
        help=f"Definition source (default: {config.source})"
    )
    parser.add_argument("--workers", type=int, default=config.link_check_workers)
    parser.add_argument("--timeout", type=float, default=config.link_check_timeout)
    args = parser.parse_args(argv)

    try:
        catalog = Catalog.from_source(args.source)
    except CatalogError as e:
        print(f"✗ Cannot load catalog: {e}")
        return 1

    print(f"Checking references of {len(catalog)} entries from {args.source}...")
    results = check_references(catalog, max_workers=args.workers, timeout=args.timeout)
    broken = [r for r in results if not r.ok]

    print("\n--- LINK VALIDATION REPORT ---")
    print(f"Total Unique Links: {len(results)}")
    print(f"Broken/Suspect Links: {len(broken)}")

    if broken:
        for result in broken:
            status = result.status if result.status is not None else result.error
            print(f"  [X] Status {status} | {result.url}")
            print(f"      cited by: {', '.join(result.entry_ids)}")
        return 1

    print("  ✓ All links are healthy!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
