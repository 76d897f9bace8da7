"""
Top-level package for the HelpJuice → HelpScout migration tool.

Modules:

``extractors``
    Read the HelpJuice CSV exports into typed records.
``models``
    Typed records for HelpJuice rows and HelpScout payloads.
``parsers``
    Assemble HelpScout articles from questions and answers.
``migrators``
    Talk to the HelpScout Docs API.
``utils``
    Reports, errors, pre-flight checks and the category join.
"""

__version__ = "0.1.0"
