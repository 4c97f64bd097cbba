#!/usr/bin/env python3
"""
SafeWalk Routing - Command Line Interface

Selects a route from a saved routing-engine response and an incident file.
"""

import argparse
import logging
import sys

from .algorithms import RouteSelector
from .config import RoutingConfig
from .data import load_candidate_paths, load_incident_data
from .exceptions import RoutePlanningError
from .formatting import format_distance, format_duration


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Select the fastest or safest of several routes")
    parser.add_argument("routes", help="OSRM route response JSON (geometries=geojson)")
    parser.add_argument("--incidents", help="Incident data JSON or GeoJSON file")
    parser.add_argument("--preference", default="fastest", choices=["fastest", "safest"],
                        help="Routing preference")
    parser.add_argument("--density-method", default="brute_force",
                        choices=["brute_force", "kd_tree"], help="Incident density estimator")
    parser.add_argument("--sampled-average", action="store_true",
                        help="Average crime exposure over sampled points only")
    parser.add_argument("--log-level", default="warning",
                        choices=["debug", "info", "warning", "error"], help="Log level")
    return parser


def main(argv=None) -> int:
    """
    Run one selection and print the result.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = RoutingConfig(
        density_method=args.density_method,
        scoring_mode='sampled_average' if args.sampled_average else 'reference'
    )

    try:
        candidates = load_candidate_paths(args.routes)
        incidents = load_incident_data(args.incidents) if args.incidents else []
        selection = RouteSelector(config).select(candidates, args.preference, incidents)
    except (OSError, ValueError, RoutePlanningError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(f"✅ {args.preference.title()} route: candidate {selection.index + 1} of {len(candidates)}")
    print(f"   Distance: {format_distance(selection.distance)}")
    print(f"   Duration: {format_duration(selection.duration)}")
    if selection.scoring_applied:
        print(f"   Risk score: {selection.score:.2f}")
        for i, scored in enumerate(selection.scored_paths):
            marker = "*" if i == selection.index else " "
            print(f"   {marker} [{i + 1}] score={scored.score:.2f} distance={scored.distance:.0f}m")
    elif args.preference == "safest":
        print("   Only one route available - safety scoring skipped")

    return 0


if __name__ == "__main__":
    sys.exit(main())
