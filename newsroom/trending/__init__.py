"""
Trending Articles

This module handles:
- Scoring articles by recent view velocity with an age decay
- Flagging articles as trending, respecting operator overrides
- Listing trending articles with day-over-week growth
"""

from flask import Blueprint

trending_bp = Blueprint('trending', __name__)

from newsroom.trending import routes  # noqa: E402,F401
