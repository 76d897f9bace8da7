"""
Assembly of HelpScout articles from the HelpJuice export.

HelpJuice stores a question and its answer in separate files.  This module
joins them back together and attaches the HelpScout category that was
created for the question's HelpJuice category.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from juicescout.models.helpjuice import Answer, Question
from juicescout.models.helpscout import Article, CategoryMapping


def find_answer_body(question: Question, answers: Iterable[Answer]) -> str:
    """Return the body of the first answer to ``question``, or ``""``."""
    for answer in answers:
        if answer.question == question.id:
            return answer.body
    return ""


def find_destination_category(
    question: Question, mappings: Iterable[CategoryMapping]
) -> Optional[str]:
    """Return the HelpScout category ID for the question's HelpJuice category.

    Orphan mappings (``source_id == 0``) never match.
    """
    for mapping in mappings:
        if mapping.is_mapped and mapping.source_id == question.category:
            return mapping.destination_id
    return None


def assemble_articles(
    mappings: Sequence[CategoryMapping],
    questions: Iterable[Question],
    answers: Sequence[Answer],
) -> List[Article]:
    """
    Build one :class:`Article` per question, preserving question order.

    :param mappings: Category mappings produced by the category migration.
    :param questions: HelpJuice questions.
    :param answers: HelpJuice answers.  Only the first answer per question
        is used; a question without an answer gets an empty body.
    :return: The assembled articles.  A question whose category has no
        mapping yields an article with an empty category list.
    """
    articles: List[Article] = []
    for question in questions:
        category_id = find_destination_category(question, mappings)
        articles.append(
            Article(
                name=question.name,
                text=find_answer_body(question, answers),
                categories=[category_id] if category_id is not None else [],
            )
        )
    print(f"[INFO] Processed {len(articles)} articles")
    return articles
