from typing import List, Optional
import argparse
import asyncio
import json
from logging.config import dictConfig
import logging
import os
import sys

import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from vsts.repoinfo.config import Settings, create_client_session
from vsts.repoinfo.context import RepositoryContext, parse_repository_type
from vsts.repoinfo.resolve.repository import resolve_repository_info

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig()
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)


async def realMain(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="repoinfo-resolve", description="Resolve repository server identity"
    )
    parser.add_argument("remote_url", nargs="+", help="The remote url(s) to resolve.")
    parser.add_argument(
        "--type",
        default="tfvc",
        type=parse_repository_type,
        help="The repository type: git, tfvc or external.",
    )
    parser.add_argument(
        "--project",
        default=None,
        help="The team project name, when already known.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the resolved identity as JSON.",
    )

    args = vars(parser.parse_args(argv))

    settings = Settings()
    configure_logging(settings.debug)
    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn, integrations=[AioHttpIntegration()])

    remote_urls: List[str] = args.get("remote_url", [])
    failures = 0

    async with create_client_session(settings) as session:
        for remote_url in remote_urls:
            context = RepositoryContext(
                type=args["type"],
                remote_url=remote_url,
                team_project_name=args.get("project"),
            )
            try:
                resolved = await resolve_repository_info(session, context)
            except Exception as e:
                sentry_sdk.capture_exception(e)
                logging.exception("Exception resolving remote url %s", remote_url)
                failures += 1
                continue

            if args.get("json"):
                print(json.dumps(resolved.identity.to_wire(), indent=2))
            else:
                identity = resolved.identity
                print(
                    f"resolved {remote_url} server={identity.server_url}"
                    f" collection={identity.collection.name}"
                    f" project={identity.repository.project.name}"
                )
            if resolved.corrected_remote_url is not None:
                print(f"corrected remote url {resolved.corrected_remote_url}")

    return 1 if failures else 0


def main() -> None:
    sys.exit(asyncio.run(realMain()))


if __name__ == "__main__":
    main()
