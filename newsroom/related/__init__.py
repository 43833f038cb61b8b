"""
Related Articles

Ranks published articles by category and tag overlap with a source article.
"""

from flask import Blueprint

related_bp = Blueprint('related', __name__)

from newsroom.related import routes  # noqa: E402,F401
