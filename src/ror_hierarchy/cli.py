"""ror-hierarchy CLI: build artifacts from a registry dump and query them."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_build_summary(result, quiet: bool, show_funders: bool = True) -> None:
    if quiet:
        return
    from ._internal.io.artifacts import format_size

    stats = result.stats
    print(f"Loaded {stats.record_count} organizations")
    if show_funders:
        print("")
        print("=== Funder Mapping Statistics ===")
        print(f"  Total funder-to-ROR mappings: {stats.funder_mappings}")
        print(f"  Funder ids claimed by more than one organization: {stats.alias_collisions}")
    if stats.hierarchy is not None:
        print("")
        print("=== Hierarchy Statistics ===")
        print(f"  Total organizations: {stats.hierarchy.total_organizations}")
        print(f"  Organizations with ancestors: {stats.hierarchy.with_ancestors}")
        print(f"  Organizations with descendants: {stats.hierarchy.with_descendants}")
        print(f"  Organizations with both: {stats.hierarchy.with_both}")
    if stats.output_sizes:
        print("")
        print("=== Output Files ===")
        for path, size in stats.output_sizes.items():
            print(f"  File: {path} ({format_size(size)})")
    print("")
    print("[OK] Build complete")


def _print_lookup_result(result, identifier: str, as_json: bool, quiet: bool) -> None:
    if as_json:
        from ._internal.canonical_json import canonical_dumps

        payload = result.model_dump(mode="json") if result is not None else None
        print(canonical_dumps(payload))
        return
    if result is None:
        print(f"Organization not found: {identifier}")
        print("(Tried as both ROR ID and Funder ID)")
        return
    if quiet:
        return
    if result.resolved_from_alias:
        print(f"Funder ID: {result.input_id}")
        print(f"Resolved to ROR ID: {result.org_id}")
    else:
        print(f"ROR ID: {result.org_id}")
    print("")
    print(f"Ancestors ({len(result.ancestors)}):")
    for org_id in result.ancestors:
        print(f"  - {org_id}")
    print("")
    print(f"Descendants ({len(result.descendants)}):")
    for org_id in result.descendants:
        print(f"  - {org_id}")


def main():
    """Main CLI entry point for ror-hierarchy commands."""
    try:
        package_version = get_version("ror-hierarchy")
    except PackageNotFoundError:
        package_version = "dev"

    parser = argparse.ArgumentParser(
        prog="ror-hierarchy",
        description="Organization hierarchy closures and funder id resolution"
    )
    parser.add_argument("--version", action="version", version=f"ror-hierarchy {package_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log progress and debug details to stderr."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # build command
    build_parser = subparsers.add_parser(
        "build",
        help="Build funder mapping and hierarchy in a single pass",
        parents=[parent_parser]
    )
    build_parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Input registry data file (defaults to the latest v*schema_v2.json in the current directory)"
    )
    build_parser.add_argument(
        "--funder-output",
        type=Path,
        default=None,
        help="Output funder mapping file (default: funder_to_ror.json.gz)"
    )
    build_parser.add_argument(
        "--hierarchy-output",
        type=Path,
        default=None,
        help="Output hierarchy file (default: ror_hierarchy.json.gz)"
    )

    # build-funders command
    funders_parser = subparsers.add_parser(
        "build-funders",
        help="Build only the funder id to ROR id mapping",
        parents=[parent_parser]
    )
    funders_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Input registry data file"
    )
    funders_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file (default: funder_to_ror.json.gz)"
    )

    # build-hierarchy command
    hierarchy_parser = subparsers.add_parser(
        "build-hierarchy",
        help="Build only the ancestor/descendant hierarchy",
        parents=[parent_parser]
    )
    hierarchy_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Input registry data file"
    )
    hierarchy_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file (default: ror_hierarchy.json.gz)"
    )

    # lookup command
    lookup_parser = subparsers.add_parser(
        "lookup",
        help="Look up ancestors and descendants by ROR id or funder id",
        parents=[parent_parser]
    )
    lookup_parser.add_argument(
        "id",
        help="ROR id or funder id"
    )
    lookup_parser.add_argument(
        "--hierarchy",
        type=Path,
        default=None,
        help="Hierarchy file (default: ror_hierarchy.json.gz)"
    )
    lookup_parser.add_argument(
        "--funders",
        type=Path,
        default=None,
        help="Funder mapping file (default: funder_to_ror.json.gz)"
    )
    lookup_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON"
    )
    lookup_parser.add_argument(
        "--canonical-prefix",
        default=None,
        help="Prefix that marks an identifier as canonical (default: https://ror.org/)"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args.verbose)

    from .config import HierarchyConfig
    from ._internal.io.artifacts import ArtifactLoadError, find_latest_data_file
    from ._internal.io.records import RecordsLoadError

    try:
        config = HierarchyConfig.from_env(canonical_prefix=getattr(args, "canonical_prefix", None))

        if args.command == "build":
            from .pipeline import run_build

            input_path: Optional[Path] = args.input
            if input_path is None:
                input_path = find_latest_data_file(Path.cwd(), config.input_pattern)
                if input_path is None:
                    print("Error: No ROR data file found in the current directory.", file=sys.stderr)
                    print("Pass --input with the path to a registry data dump.", file=sys.stderr)
                    sys.exit(1)
            result = run_build(
                input_path,
                funder_output=args.funder_output or Path(config.funder_output),
                hierarchy_output=args.hierarchy_output or Path(config.hierarchy_output),
            )
            _print_build_summary(result, args.quiet)
            sys.exit(0)

        if args.command == "build-funders":
            from .pipeline import run_build_funders

            result = run_build_funders(args.input, args.output or Path(config.funder_output))
            _print_build_summary(result, args.quiet)
            sys.exit(0)

        if args.command == "build-hierarchy":
            from .pipeline import run_build_hierarchy

            result = run_build_hierarchy(args.input, args.output or Path(config.hierarchy_output))
            _print_build_summary(result, args.quiet, show_funders=False)
            sys.exit(0)

        if args.command == "lookup":
            from .lookup import HierarchyLookup

            service = HierarchyLookup.from_files(
                args.hierarchy or Path(config.hierarchy_output),
                args.funders or Path(config.funder_output),
                canonical_prefix=config.canonical_prefix,
            )
            result = service.lookup(args.id)
            _print_lookup_result(result, args.id, args.json, args.quiet)
            sys.exit(0 if result is not None else 1)

    except (RecordsLoadError, ArtifactLoadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
