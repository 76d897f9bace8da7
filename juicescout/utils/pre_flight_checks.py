import os

from juicescout.utils.errors import PreFlightCheckError

INPUT_FILES = (
    ("categories_path", "categories"),
    ("questions_path", "questions"),
    ("answers_path", "answers"),
)


def run_pre_flight_checks(config: dict):
    """
    Verifies that the configuration is complete before anything is migrated.

    Args:
        config: The application configuration dictionary.

    Raises:
        PreFlightCheckError: If any check fails.  The message lists every
            problem found, not only the first one.
    """
    print("[INFO] Running pre-flight checks...")

    helpjuice = config.get("helpjuice", {})
    helpscout = config.get("helpscout", {})
    dry_run = config.get("migration", {}).get("dry_run", False)
    problems = []

    if not helpjuice.get("name"):
        problems.append("The HelpJuice name is required (--helpjuice-name or HELPJUICE_NAME).")

    if not helpscout.get("api_key") and not dry_run:
        problems.append("The HelpScout API key is missing (--scout-api or HELPSCOUT_API).")

    for key, label in INPUT_FILES:
        path = helpjuice.get(key)
        if not path:
            problems.append(f"The path of the {label} CSV file is missing.")
        elif not os.path.isfile(path):
            problems.append(f"The {label} CSV file was not found: {path}")

    limit = config.get("migration", {}).get("limit")
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 0):
        problems.append(f"The article limit must be a non-negative whole number, got {limit!r}.")

    if problems:
        raise PreFlightCheckError(" ".join(problems))

    print("[INFO] Pre-flight checks passed successfully.")
