"""
HelpScout API migrators and helpers.

This subpackage provides functions to interact with the HelpScout Docs REST
API for listing collections and categories, creating categories and
creating articles.  It classifies failed calls into the ones a run can skip
and the ones that must stop it.
"""
