"""
Converters used by the migration pipeline.

Currently this subpackage exposes ``assemble_articles`` from
:mod:`juicescout.parsers.article_parser`.
"""

from .article_parser import assemble_articles

__all__ = ["assemble_articles"]
