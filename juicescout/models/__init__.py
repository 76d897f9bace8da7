"""
Typed records for both sides of the migration.

:mod:`juicescout.models.helpjuice` holds the rows read from the HelpJuice
export and :mod:`juicescout.models.helpscout` holds what is sent to, or read
back from, the HelpScout Docs API.
"""

from .helpjuice import Answer, Category, Question, lenient_int
from .helpscout import Article, CategoryMapping, CategoryPayload

__all__ = [
    "Answer",
    "Article",
    "Category",
    "CategoryMapping",
    "CategoryPayload",
    "Question",
    "lenient_int",
]
