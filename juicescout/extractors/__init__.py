"""
Extractors for HelpJuice export files.

This subpackage provides functions to parse the categories, questions and
answers CSV files exported by HelpJuice into the typed records used by the
HelpScout migrator.
"""
