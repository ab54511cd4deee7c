#!/usr/bin/env python3
"""
kubedig - read-only Kubernetes discovery.
Runs named buckets (authorization, version) against the current context and prints their results.
"""

import argparse
import logging
import sys
from typing import List, Optional

#
# NOTE: Keep kubedig imports lazy (inside functions) so `--help` and `--list` work
# without importing the kubernetes client.
#


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or "WARNING").upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def list_buckets() -> None:
    """Print every registered bucket with its aliases and description."""
    from kubedig.buckets import build_default_registry

    reg = build_default_registry()
    for spec in reg.specs():
        aliases = f" ({', '.join(spec.aliases)})" if spec.aliases else ""
        print(f"{spec.name}{aliases}: {spec.description}")


def dig(
    names: List[str],
    *,
    namespace: Optional[str] = None,
    output: str = "human",
    side_effects: bool = False,
) -> None:
    """
    Run the requested buckets and print their results.

    Args:
        names: Bucket names or aliases; `all` runs every registered bucket
        namespace: Namespace to scope namespaced checks to (default: current context)
        output: human | json | yaml
    """
    from kubedig.buckets import BucketConfig, build_default_registry
    from kubedig.dump import dump_results
    from kubedig.providers.k8s_provider import get_k8s_provider
    from kubedig.report import render_all

    reg = build_default_registry()
    if any(n.strip().lower() == "all" for n in names):
        names = reg.names()

    provider = get_k8s_provider()
    ns = namespace if namespace is not None else provider.current_namespace()
    config = BucketConfig(namespace=ns, provider=provider)

    results = reg.run(names, config, allow_side_effects=side_effects)

    if output in ("json", "yaml"):
        print(dump_results(results, fmt=output))  # type: ignore[arg-type]
    else:
        print(render_all(results))


def main(argv: Optional[List[str]] = None):
    """CLI entry point."""
    from kubedig.config import OUTPUT_FORMATS, load_settings

    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Dig into a Kubernetes cluster with read-only discovery buckets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List available buckets
  python main.py --list

  # What can the current token do in kube-system?
  python main.py auth -n kube-system

  # Everything, as JSON
  python main.py all -o json
        """,
    )
    parser.add_argument("buckets", nargs="*", metavar="BUCKET", help="Bucket names or aliases (`all` runs every bucket)")
    parser.add_argument("--list", "-l", action="store_true", help="List available buckets")
    parser.add_argument(
        "--namespace",
        "-n",
        default=settings.namespace,
        help="Namespace for namespaced checks (default: KUBEDIG_NAMESPACE or the current context's namespace)",
    )
    parser.add_argument(
        "--output",
        "-o",
        choices=list(OUTPUT_FORMATS),
        default=settings.output,
        help=f"Output format (default: {settings.output})",
    )
    parser.add_argument(
        "--side-effects",
        action="store_true",
        default=settings.side_effects,
        help="Allow buckets that have side effects on the cluster",
    )
    parser.add_argument("--log-level", default=settings.log_level, help=f"Log level (default: {settings.log_level})")

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        if args.list:
            list_buckets()
            return

        if args.buckets:
            dig(args.buckets, namespace=args.namespace, output=args.output, side_effects=args.side_effects)
            return

        # No arguments provided
        parser.print_help()
        print("\nTip: Use `--list` to see available buckets")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        raise


if __name__ == "__main__":
    main()
