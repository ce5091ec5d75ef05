"""
Tools for maintaining a Hugo site's catalog of Go packages.

Each package is a Markdown file whose YAML frontmatter is kept in sync with
the package's GitHub repository.
"""

__version__ = "0.1.0"
