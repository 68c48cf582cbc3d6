"""
Noteful Backend - Multi-tenant note-taking API

Authenticated CRUD over notes filed under folders and labelled with tags,
every record scoped to the account that owns it.
"""

__version__ = "1.0.0"
