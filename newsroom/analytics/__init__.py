"""
Page-view analytics.

This module handles:
- Recording deduplicated, cookie-free page views
- Counting views over time windows
- Dashboard overview and per-article statistics
"""

from flask import Blueprint

analytics_bp = Blueprint('analytics', __name__)

from newsroom.analytics import routes  # noqa: E402,F401
