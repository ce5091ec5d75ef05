"""
File-backed storage for package records.

This package is responsible for:
* Encoding and decoding package records as Markdown frontmatter.
* Listing the package files in the site's content directory.
* Creating, reading and rewriting individual package files.
"""
