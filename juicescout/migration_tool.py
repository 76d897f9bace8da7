"""
High-level orchestration of the HelpJuice → HelpScout migration.

This module defines a :class:`HelpJuiceMigrationTool` class that ties
together the extractors, parsers, migrators and utilities into a
complete pipeline.  It parses the three HelpJuice CSV exports, creates the
categories on HelpScout, maps them back to their HelpJuice IDs, assembles
articles from questions and answers and creates them, writing log files and
a category map along the way.

Configuration is supplied via a JSON file path or directly as a
dictionary.  The ``helpscout`` section holds ``api_key``, ``base_url``,
``collection_id`` and ``timeout``; the ``helpjuice`` section holds the
source ``name`` and the three CSV paths.  Optional migration settings
(dry-run, limit, verbose, reports directory) live under ``migration``.
Missing values fall back to environment variables.
"""

from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from juicescout.extractors.helpjuice_extractor import (
    parse_csv,
    process_answers,
    process_categories,
    process_questions,
)
from juicescout.migrators.helpscout_migrator import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    MigrationStats,
    create_session,
    migrate_articles,
    migrate_categories,
)
from juicescout.models.helpjuice import Category
from juicescout.models.helpscout import Article, CategoryMapping
from juicescout.parsers.article_parser import assemble_articles
from juicescout.utils.categories import unmapped
from juicescout.utils.errors import PreFlightCheckError, report_warning, set_report_dir
from juicescout.utils.mapping_report import write_category_map_csv

DRY_RUN_COLLECTION_ID = "dry-collection"


@dataclass
class MigrationSummary:
    """Outcome of a completed run."""

    source: str
    collection_id: str
    dry_run: bool = False
    categories: MigrationStats = field(default_factory=MigrationStats)
    articles: MigrationStats = field(default_factory=MigrationStats)
    unmapped_categories: int = 0
    uncategorized_articles: int = 0
    articles_planned: int = 0
    duration_seconds: float = 0.0


def _fill(section: Dict[str, Any], key: str, env_var: str, default: str = "") -> None:
    """Set ``section[key]`` from ``env_var`` when it is missing or empty."""
    if not section.get(key):
        section[key] = os.getenv(env_var) or default


class HelpJuiceMigrationTool:
    """
    Encapsulates all state and behavior required to migrate a HelpJuice
    knowledge base to HelpScout.  This class is responsible for reading
    configuration, extracting records, assembling articles and migrating
    them.  Detailed success and failure information is recorded using the
    :mod:`juicescout.utils.errors` module.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> None:
        if config_file and os.path.exists(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                try:
                    config = json.load(f)
                except json.JSONDecodeError as e:
                    raise PreFlightCheckError(f"Invalid configuration in {config_file}: {e}") from e
        elif config is None:
            # Default configuration
            config = {}

        # Ensure essential keys exist to prevent KeyErrors.  Empty strings
        # count as unset so the environment can still fill them.
        config.setdefault("helpscout", {})
        _fill(config["helpscout"], "api_key", "HELPSCOUT_API")
        _fill(config["helpscout"], "base_url", "HELPSCOUT_BASE_URL", DEFAULT_BASE_URL)
        _fill(config["helpscout"], "collection_id", "HELPSCOUT_COLLECTION_ID")
        config["helpscout"].setdefault("timeout", DEFAULT_TIMEOUT)

        config.setdefault("helpjuice", {})
        _fill(config["helpjuice"], "name", "HELPJUICE_NAME")
        _fill(config["helpjuice"], "categories_path", "CATEGORIES_PATH")
        _fill(config["helpjuice"], "questions_path", "QUESTIONS_PATH")
        _fill(config["helpjuice"], "answers_path", "ANSWERS_PATH")

        config.setdefault("migration", {})
        config["migration"].setdefault("dry_run", False)
        config["migration"].setdefault("limit", None)
        config["migration"].setdefault("verbose", False)
        config["migration"].setdefault("reports_dir", "reports")

        self.config = config
        self.reports_dir: str = config["migration"]["reports_dir"]
        self.log_file = os.path.join(self.reports_dir, "migration", "migration.log")
        set_report_dir(os.path.join(self.reports_dir, "migration"))

    @property
    def source(self) -> str:
        return self.config["helpjuice"]["name"]

    def log_message(self, message: str, level: str = "INFO") -> None:
        if level == "DEBUG" and not self.config["migration"]["verbose"]:
            return
        print(f"[{level}] {message}")
        # Append to log file
        os.makedirs(os.path.dirname(self.log_file), exist_ok=True)
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(f"{level}: {message}\n")

    def extract_categories(self) -> List[Category]:
        path = self.config["helpjuice"]["categories_path"]
        self.log_message(f"Extracting categories from {path}")
        return process_categories(parse_csv(path))

    def extract_articles(self, mappings: List[CategoryMapping]) -> List[Article]:
        questions_path = self.config["helpjuice"]["questions_path"]
        answers_path = self.config["helpjuice"]["answers_path"]
        self.log_message(f"Extracting questions from {questions_path}")
        questions = process_questions(parse_csv(questions_path))
        self.log_message(f"Extracting answers from {answers_path}")
        answers = process_answers(parse_csv(answers_path))
        return assemble_articles(mappings, questions, answers)

    def _dry_run_categories(self, categories: List[Category], summary: MigrationSummary) -> List[CategoryMapping]:
        mappings = []
        for category in categories:
            self.log_message(f"Dry-run: would create category '{category.name}'")
            mappings.append(
                CategoryMapping(source_id=category.id, destination_id=f"dry-{category.id}", name=category.name)
            )
        summary.categories.created = len(mappings)
        return mappings

    def _flag_uncategorized(self, articles: List[Article]) -> int:
        count = 0
        for article in articles:
            if article.categories:
                continue
            count += 1
            report_warning("ARTICLE_UNCATEGORIZED", {"kind": "article", "name": article.name, "source": self.source})
        return count

    def run(self) -> MigrationSummary:
        """
        Run the whole migration in a single sequential pass.

        The steps are, in order: parse the categories, create them on
        HelpScout, map them back by name, parse questions and answers,
        assemble articles and create them.  Nothing is retried.  Rejected
        categories and articles are reported and skipped; any exception
        raised by a step stops the run.

        :return: A :class:`MigrationSummary` of the run.
        :raises MigrationError: on a fatal API, transport or format error.
        :raises OSError: if an export file cannot be read.
        """
        dry_run: bool = bool(self.config["migration"]["dry_run"])
        limit: Optional[int] = self.config["migration"]["limit"]
        helpscout_cfg = self.config["helpscout"]

        self.log_message(f"Beginning migration of {self.source}!")
        start = time.perf_counter()
        summary = MigrationSummary(source=self.source, collection_id="", dry_run=dry_run)

        session = None if dry_run else create_session(helpscout_cfg)
        try:
            categories = self.extract_categories()
            self.log_message(f"Found {len(categories)} categories to migrate.")

            if dry_run:
                mappings = self._dry_run_categories(categories, summary)
                collection_id = DRY_RUN_COLLECTION_ID
            else:
                mappings, collection_id = migrate_categories(
                    helpscout_cfg,
                    categories,
                    session=session,
                    source=self.source,
                    stats=summary.categories,
                )
            summary.collection_id = collection_id
            summary.unmapped_categories = len(unmapped(mappings))

            map_path = write_category_map_csv(mappings, out_path=os.path.join(self.reports_dir, "category_map.csv"))
            self.log_message(f"Category map written to {map_path} with {len(mappings)} entries")

            articles = self.extract_articles(mappings)
            if limit is not None:
                articles = articles[: int(limit)]
            summary.articles_planned = len(articles)
            summary.uncategorized_articles = self._flag_uncategorized(articles)
            self.log_message(f"Found {len(articles)} articles to migrate.")

            if dry_run:
                for article in articles:
                    self.log_message(f"Dry-run: would create article '{article.name}' in {article.categories}")
                    self.log_message(article.to_json(collection_id), level="DEBUG")
            else:
                summary.articles = migrate_articles(
                    helpscout_cfg, articles, collection_id, session=session, source=self.source
                )
        finally:
            if session is not None:
                session.close()

        summary.duration_seconds = time.perf_counter() - start
        self.log_message(
            f"Categories: {summary.categories.created} created, {summary.categories.failed} failed, "
            f"{summary.unmapped_categories} unmapped. Articles: {summary.articles.created} created, "
            f"{summary.articles.failed} failed, {summary.uncategorized_articles} uncategorized."
        )
        self.log_message(f"Done! Took {summary.duration_seconds:.2f}s")
        return summary
