"""Command line tool for Amazon Redshift temporary authorization.

usage: redshift-credentials [options] [-- user command]

Without a user command the credentials are printed (``eval`` the default
``env`` output to export them). With a user command, the command runs with
the credentials merged into its environment.
"""

import argparse
import asyncio
import subprocess
import sys
from typing import List, Optional, Sequence, Tuple

from pydantic import ValidationError

from redshift_credentials.common.aws_utils import AWS_CALL_ERRORS
from redshift_credentials.config import RedshiftCredentialsSettings, get_settings
from redshift_credentials.constants import APPLICATION_NAME, OUTPUT_FORMATS, VERSION
from redshift_credentials.credentials import (
    RedshiftCredentialsClient,
    RedshiftCredentialsError,
    Request,
    default_selector,
)
from redshift_credentials.credentials.models import CredentialBundle
from redshift_credentials.observability.logger_adaptor import (
    configure_logging,
    get_logger,
)
from redshift_credentials.outputs import get_output
from redshift_credentials.outputs.env import build_environment

logger = get_logger(__name__)

LOG_LEVELS = ("debug", "info", "notice", "warn", "warning", "error")


def split_command(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split ``argv`` at the first ``--`` into tool options and the user command."""
    argv = list(argv)
    if "--" in argv:
        index = argv.index("--")
        return argv[:index], argv[index + 1 :]
    return argv, []


def build_parser(settings: RedshiftCredentialsSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APPLICATION_NAME,
        usage=f"{APPLICATION_NAME} [options] [-- user command]",
        description="redshift-credentials is a command-like tool for Amazon Redshift temporary authorization",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.lower,
        default=settings.log_level.lower(),
        help="redshift-credentials log level",
    )
    parser.add_argument("--endpoint", default="", help="redshift endpoint url")
    parser.add_argument(
        "--workgroup", default="", help="redshift serverless workgroup name"
    )
    parser.add_argument(
        "--cluster", default="", help="redshift provisioned cluster identifier"
    )
    parser.add_argument(
        "--db-user", default="", help="redshift database user name (provisioned only)"
    )
    parser.add_argument("--db-name", default="", help="redshift database name")
    parser.add_argument(
        "--duration-seconds",
        type=int,
        default=0,
        help="number of seconds until the returned temporary password expires (900 ~ 3600)",
    )
    parser.add_argument(
        "--prefix",
        default=settings.prefix,
        help="prefixes environment variable names when writing to environment variables (e.g., REDSHIFT_)",
    )
    parser.add_argument(
        "--output",
        choices=OUTPUT_FORMATS,
        default=settings.output,
        help="output format of the credential when no user command is given [env|json|yaml]",
    )
    parser.add_argument("--region", default=settings.region, help="AWS region")
    parser.add_argument("--profile", default=settings.profile, help="AWS profile")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {VERSION}"
    )
    return parser


async def fetch_bundle(
    args: argparse.Namespace, settings: RedshiftCredentialsSettings
) -> CredentialBundle:
    request = Request.create(
        endpoint=args.endpoint,
        workgroup_name=args.workgroup,
        cluster_identifier=args.cluster,
        db_user=args.db_user,
        db_name=args.db_name,
        duration_seconds=args.duration_seconds,
    )
    client = RedshiftCredentialsClient.from_session(
        profile_name=args.profile,
        region_name=args.region,
        max_attempts=settings.max_attempts,
        selector=default_selector(settings.filter_command),
    )
    return await client.get_credentials(request)


def run_command(command: List[str], bundle: CredentialBundle, prefix: str) -> int:
    """Run the user command with the credentials in its environment."""
    try:
        completed = subprocess.run(command, env=build_environment(bundle, prefix))
    except OSError as e:
        logger.error(f"command runtime error, {e}")
        return 1
    return completed.returncode


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging()
        logger.error(f"invalid configuration, {e}")
        return 1
    options, command = split_command(sys.argv[1:] if argv is None else argv)
    args = build_parser(settings).parse_args(options)
    configure_logging(args.log_level)

    try:
        bundle = asyncio.run(fetch_bundle(args, settings))
    except RedshiftCredentialsError as e:
        logger.error(f"failed to get redshift credentials, {e}")
        return 1
    except AWS_CALL_ERRORS as e:
        logger.error(f"failed to load default aws config, {e}")
        return 1
    except KeyboardInterrupt:
        logger.error("interrupted")
        return 130

    if not command:
        sys.stdout.write(get_output(args.output, args.prefix).render(bundle))
        sys.stdout.flush()
        return 0
    return run_command(command, bundle, args.prefix)


if __name__ == "__main__":
    sys.exit(main())
