"""
Command line entry point for the HelpJuice → HelpScout migration.

Usage::

  python main.py \\
    --categories-path export/categories.csv \\
    --questions-path export/questions.csv \\
    --answers-path export/answers.csv \\
    --helpjuice-name acme \\
    --scout-api "$HELPSCOUT_API" \\
    [--collection-id 5214...] [--dry-run] [--limit 50]

Values not given on the command line are read from the JSON configuration
file (``--config``), then from the environment.  A ``.env`` file in the
working directory is loaded first.
"""

from __future__ import annotations

import argparse
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from juicescout.migration_tool import HelpJuiceMigrationTool
from juicescout.utils.errors import FatalPayloadError, MigrationError
from juicescout.utils.pre_flight_checks import run_pre_flight_checks

CONFIG_FILE = "config/migration_config.json"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="juicescout",
        description="Migrate HelpJuice docs over to HelpScout",
    )
    p.add_argument("--config", default=CONFIG_FILE, help="Path of the JSON configuration file")
    p.add_argument("-c", "--categories-path", help="Path of the HelpJuice categories.csv file (CATEGORIES_PATH)")
    p.add_argument("-q", "--questions-path", help="Path of the HelpJuice questions.csv file (QUESTIONS_PATH)")
    p.add_argument("-a", "--answers-path", help="Path of the HelpJuice answers.csv file (ANSWERS_PATH)")
    p.add_argument("-j", "--helpjuice-name", help="Name of the HelpJuice site being migrated (required)")
    p.add_argument("-s", "--scout-api", help="API key for HelpScout (HELPSCOUT_API)")
    p.add_argument("--collection-id", help="HelpScout collection to migrate into (defaults to the first one)")
    p.add_argument("--limit", type=int, default=None, help="Migrate at most N articles")
    # Tri-state: None leaves the decision to the config file
    p.add_argument("--dry-run", dest="dry_run", action="store_true", help="Do not call HelpScout, only log the plan")
    p.add_argument("--no-dry-run", dest="dry_run", action="store_false", help="Force real API calls")
    p.add_argument("--verbose", action="store_true", default=None, help="Also log DEBUG messages")
    p.set_defaults(dry_run=None)
    return p.parse_args(argv)


def apply_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Copy the flags that were given on the command line into ``config``."""
    overrides = (
        ("helpjuice", "categories_path", args.categories_path),
        ("helpjuice", "questions_path", args.questions_path),
        ("helpjuice", "answers_path", args.answers_path),
        ("helpjuice", "name", args.helpjuice_name),
        ("helpscout", "api_key", args.scout_api),
        ("helpscout", "collection_id", args.collection_id),
        ("migration", "limit", args.limit),
        ("migration", "dry_run", args.dry_run),
        ("migration", "verbose", args.verbose),
    )
    for section, key, value in overrides:
        if value is not None:
            config.setdefault(section, {})[key] = value
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the migration and return the process exit status.

    :return: ``0`` on success, ``1`` when the run stopped on a fatal error.
    """
    load_dotenv()
    args = parse_args(argv)

    try:
        tool = HelpJuiceMigrationTool(config_file=args.config)
    except MigrationError as e:
        print(f"[ERROR] {e}")
        return 1
    apply_overrides(tool.config, args)

    try:
        run_pre_flight_checks(tool.config)
        tool.run()
    except FatalPayloadError as e:
        tool.log_message(f"Danger! {e}", level="ERROR")
        return 1
    except (MigrationError, OSError) as e:
        tool.log_message(f"Migration stopped: {e}", level="ERROR")
        return 1
    return 0
