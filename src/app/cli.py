# src/app/cli.py
"""
Operator command channel for bootstrap and seeding.
Runs with the service-role key and is never mounted on the HTTP API.

    hypeshelf-admin grant-admin <user_id>
    hypeshelf-admin backfill-staff-picks
    hypeshelf-admin seed-movies
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from src.app.domain.errors import HypeShelfError
from src.app.services.seed_service import SeedService

logger = logging.getLogger("hypeshelf-admin")


def _build_seed_service() -> SeedService:
    from supabase import create_client

    from src.app.config import settings
    from src.app.infra.db.supabase_repo import (
        SupabaseRecommendationRepository,
        SupabaseUserRoleRepository,
    )

    client = create_client(str(settings.SUPABASE_URL), settings.SUPABASE_SERVICE_ROLE_KEY)
    return SeedService(
        recommendations=SupabaseRecommendationRepository(client),
        users=SupabaseUserRoleRepository(client),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hypeshelf-admin", description="HypeShelf operator commands")
    sub = parser.add_subparsers(dest="command", required=True)

    grant = sub.add_parser("grant-admin", help="Give a user the admin role")
    grant.add_argument("user_id", help="Identity provider subject of the user")

    sub.add_parser("backfill-staff-picks", help="Mark recommendations by current admins as staff picks")
    sub.add_parser("seed-movies", help="Insert the sample movie list once")
    return parser


def run(args: argparse.Namespace, service: SeedService) -> dict:
    if args.command == "grant-admin":
        return service.grant_admin(args.user_id)
    if args.command == "backfill-staff-picks":
        return {"updated": service.backfill_admin_staff_picks().updated}
    if args.command == "seed-movies":
        result = service.seed_movies()
        return {"skipped": result.skipped, "count": result.count}
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None, service: Optional[SeedService] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    args = build_parser().parse_args(argv)

    try:
        output = run(args, service or _build_seed_service())
    except HypeShelfError as exc:
        logger.error("Command %s failed: %s", args.command, exc)
        return 1

    print(json.dumps(output))
    return 0


if __name__ == "__main__":
    sys.exit(main())
