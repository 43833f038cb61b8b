"""
SEO & Readability

This module handles:
- Analyzing article text for SEO, readability and AI readiness
- Persisting the three scores on articles
- The SEO dashboard overview and worst-first article list
"""

from flask import Blueprint

seo_bp = Blueprint('seo', __name__)

from newsroom.seo import routes  # noqa: E402,F401
