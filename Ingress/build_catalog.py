#!/usr/bin/env python3
"""
Build the entry catalog from annotated markdown files.

This script:
1. Reads the reference guide markdown files (.md)
2. Extracts entries based on metadata and heading structure
3. Validates all entries as one catalog (unique ids, known categories)
4. Writes catalog.json, the versioned definition source

Usage:
    python Ingress/build_catalog.py
    python Ingress/build_catalog.py --input md/design_principles.md
    python Ingress/build_catalog.py --reset
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from catalog import Catalog, CatalogError
from catalog.builder import CatalogBuilder
from catalog.config import BASE_DIR, load_config, load_env_file


MD_DIR = BASE_DIR / "md"


def main(argv=None):
    load_env_file()
    config = load_config()

    parser = argparse.ArgumentParser(
        description="Build entry catalog from markdown files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Build catalog from all .md files
    python Ingress/build_catalog.py

    # Build from specific file
    python Ingress/build_catalog.py --input md/design_principles.md

    # Reset existing catalog first
    python Ingress/build_catalog.py --reset

    # Verbose output
    python Ingress/build_catalog.py --verbose
        """
    )

    parser.add_argument(
        "--input",
        type=Path,
        action="append",
        help="Markdown file to process, may be repeated (default: all .md files in md/)"
    )

    parser.add_argument(
        "--catalog-dir",
        type=Path,
        default=config.output_dir,
        help=f"Output directory for catalog (default: {config.output_dir})"
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Remove existing catalog before building"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed output"
    )

    args = parser.parse_args(argv)

    print("\n" + "=" * 70)
    print("Entry Catalog Builder")
    print("=" * 70)

    # Determine input files
    if args.input:
        missing = [p for p in args.input if not p.exists()]
        if missing:
            print(f"\n✗ Error: File not found: {missing[0]}")
            return 1
        md_files = args.input
    else:
        if not MD_DIR.exists():
            print(f"\n✗ Error: Directory not found: {MD_DIR}")
            return 1

        md_files = sorted(MD_DIR.glob("*.md"))

        if not md_files:
            print(f"\n✗ Error: No .md files found in {MD_DIR}")
            return 1

    print(f"\nInput: {len(md_files)} markdown file(s)")
    for md_file in md_files:
        print(f"  • {md_file.name}")
    print(f"Output: {args.catalog_dir}")
    print("=" * 70)

    builder = CatalogBuilder(args.catalog_dir)

    try:
        stats = builder.build_from_markdown(md_files, clean_existing=args.reset)
    except CatalogError as e:
        print(f"\n✗ Definition error: {e}")
        print("  Nothing was written.")
        return 1

    if stats['entries_count'] == 0:
        print("\n⚠ No entries with metadata found")
        return 1

    print(f"\n✓ Extracted {stats['entries_count']} entries")
    if args.verbose:
        for label, count in stats['by_category'].items():
            print(f"    {label}: {count}")

    print("\n" + "=" * 70)
    print("CATALOG BUILD COMPLETE")
    print("=" * 70)
    print(f"\nCatalog file: {stats['catalog_file']}")

    # Read the written file back to prove it loads
    catalog = Catalog.from_source(builder.catalog_file)

    print("\n" + "=" * 70)
    print("SAMPLE QUERIES")
    print("=" * 70)
    for category in catalog.categories()[:3]:
        entries = catalog.list_by_category(category)
        print(f"\n{category.label} ({len(entries)}):")
        for entry in entries[:3]:
            print(f"  • {entry.title} (id: {entry.id})")

    print("\n" + "=" * 70)
    print("Next steps:")
    print(f"  1. Point CATALOG_SOURCE at {builder.catalog_file}")
    print("  2. Run 'python Ingress/check_links.py' to verify references")
    print("  3. Start the query service: python Backend/app.py")
    print("=" * 70 + "\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
