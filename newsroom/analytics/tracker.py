"""
Page View Tracking

Privacy-friendly, cookie-free view tracking. Each view is tied to a session
fingerprint derived from (client IP, user agent, UTC calendar day); the raw
IP and user agent are never stored. Repeat loads from the same fingerprint
within DEDUP_WINDOW_MINUTES are ignored.
"""

import hashlib
import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional
from urllib.parse import urlparse

from sqlalchemy import func

from newsroom import db
from newsroom.lib.time import utcnow_naive
from newsroom.models import Article, PageView

logger = logging.getLogger(__name__)

DEDUP_WINDOW_MINUTES = 60
SESSION_HASH_LENGTH = 16

# Outcomes of record_view()
TRACKED = 'tracked'
ALREADY_TRACKED = 'already_tracked'
ARTICLE_NOT_FOUND = 'article_not_found'

REFERRER_DIRECT = 'direct'
REFERRER_SEARCH = 'search'
REFERRER_SOCIAL = 'social'
REFERRER_REFERRAL = 'referral'
REFERRER_TYPES = (REFERRER_DIRECT, REFERRER_SEARCH, REFERRER_SOCIAL, REFERRER_REFERRAL)

DEVICE_MOBILE = 'mobile'
DEVICE_TABLET = 'tablet'
DEVICE_DESKTOP = 'desktop'
DEVICE_TYPES = (DEVICE_MOBILE, DEVICE_TABLET, DEVICE_DESKTOP)

# Matched against each dot-separated label of the referring host
SEARCH_ENGINES = {'google', 'bing', 'yahoo', 'duckduckgo', 'baidu', 'yandex'}
SOCIAL_NETWORKS = {'facebook', 'twitter', 'instagram', 'linkedin', 'tiktok', 'youtube', 'reddit'}
# Short-link and rebranded hosts matched exactly
SOCIAL_HOSTS = {'t.co', 'x.com', 'fb.me', 'lnkd.in', 'youtu.be'}

MOBILE_MARKERS = ('mobile', 'android', 'iphone', 'ipad', 'ipod', 'blackberry', 'windows phone')
TABLET_MARKERS = ('ipad', 'tablet', 'kindle', 'silk/', 'playbook')


def session_fingerprint(ip: Optional[str], user_agent: Optional[str],
                        now: Optional[datetime] = None) -> str:
    """
    One-way session hash: sha256("ip-userAgent-YYYY-MM-DD")[:16].

    The calendar day rolls the fingerprint over at UTC midnight so it can't
    be used to follow a visitor across days.
    """
    day = (now or utcnow_naive()).date().isoformat()
    raw = f"{ip or 'unknown'}-{user_agent or 'unknown'}-{day}"
    return hashlib.sha256(raw.encode('utf-8')).hexdigest()[:SESSION_HASH_LENGTH]


def _referrer_host(referrer: str) -> str:
    value = referrer.strip().lower()
    if '://' not in value:
        value = f"http://{value}"
    host = urlparse(value).hostname or ''
    return host[4:] if host.startswith('www.') else host


def _is_same_site(host: str, site_domains: Iterable[str]) -> bool:
    for domain in list(site_domains) + ['localhost', '127.0.0.1']:
        domain = domain.lower().lstrip('.')
        if domain and (host == domain or host.endswith(f".{domain}")):
            return True
    return False


def classify_referrer(referrer: Optional[str], site_domains: Iterable[str] = ()) -> str:
    """
    Bucket a referrer into direct / search / social / referral.

    Accepts either a full Referer URL, a bare host, or an already-classified
    category name (the frontend may classify client-side).
    """
    if not referrer or not referrer.strip():
        return REFERRER_DIRECT

    value = referrer.strip().lower()
    if value in REFERRER_TYPES:
        return value

    host = _referrer_host(value)
    if not host or _is_same_site(host, site_domains):
        return REFERRER_DIRECT

    labels = set(host.split('.'))
    if labels & SEARCH_ENGINES:
        return REFERRER_SEARCH
    if host in SOCIAL_HOSTS or labels & SOCIAL_NETWORKS:
        return REFERRER_SOCIAL
    return REFERRER_REFERRAL


def classify_device(user_agent: Optional[str]) -> str:
    """
    Bucket a user agent into mobile / tablet / desktop.

    Tablets win over the generic mobile match; Android devices that don't
    advertise "mobile" are tablets.
    """
    if not user_agent or not user_agent.strip():
        return DEVICE_DESKTOP

    ua = user_agent.strip().lower()
    if ua in DEVICE_TYPES:
        return ua

    if any(marker in ua for marker in TABLET_MARKERS):
        return DEVICE_TABLET
    if 'android' in ua and 'mobile' not in ua:
        return DEVICE_TABLET
    if any(marker in ua for marker in MOBILE_MARKERS):
        return DEVICE_MOBILE
    return DEVICE_DESKTOP


def record_view(
    article_id: int,
    ip: Optional[str],
    user_agent: Optional[str],
    referrer: Optional[str] = None,
    device: Optional[str] = None,
    site_domains: Iterable[str] = (),
    now: Optional[datetime] = None
) -> str:
    """
    Record a page view unless the same session already viewed the article
    within the dedup window.

    Args:
        article_id: Article being viewed
        ip: Client IP address (only used for the fingerprint)
        user_agent: Raw User-Agent header
        referrer: Referer URL or pre-classified category
        device: Pre-classified device category; derived from user_agent if absent
        site_domains: Hosts treated as same-site for referrer classification
        now: Override for the current time

    Returns:
        TRACKED, ALREADY_TRACKED or ARTICLE_NOT_FOUND
    """
    now = now or utcnow_naive()

    article = db.session.get(Article, article_id)
    if article is None or not article.is_published:
        return ARTICLE_NOT_FOUND

    session_hash = session_fingerprint(ip, user_agent, now)
    window_start = now - timedelta(minutes=DEDUP_WINDOW_MINUTES)

    existing = PageView.query.filter(
        PageView.article_id == article_id,
        PageView.session_hash == session_hash,
        PageView.timestamp >= window_start
    ).first()
    if existing:
        logger.debug(f"View already tracked for article {article_id} (session {session_hash})")
        return ALREADY_TRACKED

    view = PageView(
        article_id=article_id,
        timestamp=now,
        referrer=classify_referrer(referrer, site_domains),
        device=classify_device(device or user_agent),
        session_hash=session_hash,
    )
    db.session.add(view)

    # Increment in SQL so concurrent views don't overwrite each other
    Article.query.filter(Article.id == article_id).update(
        {Article.view_count: Article.view_count + 1},
        synchronize_session=False
    )
    db.session.commit()
    return TRACKED


def count_views(article_id: Optional[int], start: datetime, end: Optional[datetime] = None) -> int:
    """
    Count views with start <= timestamp (< end when given).

    Pass article_id=None to count views across the whole site.
    """
    query = PageView.query.filter(PageView.timestamp >= start)
    if article_id is not None:
        query = query.filter(PageView.article_id == article_id)
    if end is not None:
        query = query.filter(PageView.timestamp < end)
    return query.count()


def count_unique_sessions(start: datetime, end: Optional[datetime] = None) -> int:
    query = db.session.query(func.count(func.distinct(PageView.session_hash))).filter(
        PageView.timestamp >= start
    )
    if end is not None:
        query = query.filter(PageView.timestamp < end)
    return query.scalar() or 0
