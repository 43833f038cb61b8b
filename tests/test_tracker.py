"""
Tests for page view tracking.

Covers:
- Referrer and device classification
- Session fingerprinting
- Dedup window and view counter increments
- Window counting
"""

import pytest
from datetime import timedelta

from newsroom.analytics.tracker import (
    classify_referrer, classify_device, session_fingerprint, record_view,
    count_views, count_unique_sessions,
    TRACKED, ALREADY_TRACKED, ARTICLE_NOT_FOUND,
)

IPHONE_UA = 'Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 Mobile/15E148'
IPAD_UA = 'Mozilla/5.0 (iPad; CPU OS 17_0 like Mac OS X) AppleWebKit/605.1.15 Mobile/15E148'
ANDROID_PHONE_UA = 'Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 Chrome/120.0 Mobile Safari/537.36'
ANDROID_TABLET_UA = 'Mozilla/5.0 (Linux; Android 13; SM-X700) AppleWebKit/537.36 Chrome/120.0 Safari/537.36'
DESKTOP_UA = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/120.0 Safari/537.36'


class TestClassifyReferrer:

    @pytest.mark.parametrize('referrer', [None, '', '   '])
    def test_missing_is_direct(self, referrer):
        assert classify_referrer(referrer) == 'direct'

    @pytest.mark.parametrize('referrer', [
        'https://www.google.com/search?q=news',
        'https://www.bing.com/',
        'https://duckduckgo.com/',
        'https://yandex.ru/search',
    ])
    def test_search_engines(self, referrer):
        assert classify_referrer(referrer) == 'search'

    @pytest.mark.parametrize('referrer', [
        'https://t.co/abc123',
        'https://x.com/someone/status/1',
        'https://m.facebook.com/',
        'https://www.reddit.com/r/news',
        'https://www.linkedin.com/feed/',
    ])
    def test_social_networks(self, referrer):
        assert classify_referrer(referrer) == 'social'

    def test_other_sites_are_referral(self):
        assert classify_referrer('https://example.org/blog/post') == 'referral'

    def test_short_host_substring_is_not_social(self):
        # "t.co" inside another host must not count as Twitter
        assert classify_referrer('https://react.com/docs') == 'referral'

    def test_same_site_is_direct(self):
        assert classify_referrer('https://newsroom.test/article/foo', ['newsroom.test']) == 'direct'
        assert classify_referrer('https://www.newsroom.test/', ['newsroom.test']) == 'direct'
        assert classify_referrer('http://localhost:3000/') == 'direct'

    def test_category_names_pass_through(self):
        assert classify_referrer('social') == 'social'
        assert classify_referrer('Search') == 'search'


class TestClassifyDevice:

    def test_missing_user_agent_is_desktop(self):
        assert classify_device(None) == 'desktop'
        assert classify_device('') == 'desktop'

    def test_phones_are_mobile(self):
        assert classify_device(IPHONE_UA) == 'mobile'
        assert classify_device(ANDROID_PHONE_UA) == 'mobile'

    def test_tablets_win_over_mobile(self):
        assert classify_device(IPAD_UA) == 'tablet'
        assert classify_device(ANDROID_TABLET_UA) == 'tablet'

    def test_desktop(self):
        assert classify_device(DESKTOP_UA) == 'desktop'

    def test_category_names_pass_through(self):
        assert classify_device('tablet') == 'tablet'


class TestSessionFingerprint:

    def test_is_sixteen_hex_chars(self, now):
        fingerprint = session_fingerprint('203.0.113.5', DESKTOP_UA, now)
        assert len(fingerprint) == 16
        int(fingerprint, 16)

    def test_stable_within_a_day(self, now):
        assert session_fingerprint('203.0.113.5', DESKTOP_UA, now) == \
            session_fingerprint('203.0.113.5', DESKTOP_UA, now + timedelta(hours=3))

    def test_rolls_over_at_midnight(self, now):
        assert session_fingerprint('203.0.113.5', DESKTOP_UA, now) != \
            session_fingerprint('203.0.113.5', DESKTOP_UA, now + timedelta(days=1))

    def test_depends_on_ip_and_agent(self, now):
        base = session_fingerprint('203.0.113.5', DESKTOP_UA, now)
        assert base != session_fingerprint('203.0.113.6', DESKTOP_UA, now)
        assert base != session_fingerprint('203.0.113.5', IPHONE_UA, now)


class TestRecordView:

    def test_records_view_and_increments_counter(self, db, make_article, now):
        from newsroom.models import PageView
        article = make_article()

        outcome = record_view(article.id, '203.0.113.5', IPHONE_UA,
                              referrer='https://www.google.com/', now=now)

        assert outcome == TRACKED
        view = PageView.query.one()
        assert view.referrer == 'search'
        assert view.device == 'mobile'
        assert view.timestamp == now
        assert db.session.get(type(article), article.id).view_count == 1

    def test_same_session_within_window_is_deduplicated(self, db, make_article, now):
        from newsroom.models import Article, PageView
        article = make_article()

        assert record_view(article.id, '203.0.113.5', DESKTOP_UA, now=now) == TRACKED
        assert record_view(article.id, '203.0.113.5', DESKTOP_UA,
                           now=now + timedelta(minutes=30)) == ALREADY_TRACKED

        assert PageView.query.count() == 1
        db.session.expire_all()
        assert db.session.get(Article, article.id).view_count == 1

    def test_same_session_after_window_counts_again(self, db, make_article, now):
        from newsroom.models import PageView
        article = make_article()

        record_view(article.id, '203.0.113.5', DESKTOP_UA, now=now)
        assert record_view(article.id, '203.0.113.5', DESKTOP_UA,
                           now=now + timedelta(minutes=61)) == TRACKED
        assert PageView.query.count() == 2

    def test_different_articles_are_independent(self, db, make_article, now):
        first = make_article(title='First story')
        second = make_article(title='Second story')

        assert record_view(first.id, '203.0.113.5', DESKTOP_UA, now=now) == TRACKED
        assert record_view(second.id, '203.0.113.5', DESKTOP_UA, now=now) == TRACKED

    def test_missing_article(self, db, now):
        from newsroom.models import PageView
        assert record_view(9999, '203.0.113.5', DESKTOP_UA, now=now) == ARTICLE_NOT_FOUND
        assert PageView.query.count() == 0

    def test_draft_article_is_not_tracked(self, db, make_article, now):
        draft = make_article(published_days_ago=None)
        assert record_view(draft.id, '203.0.113.5', DESKTOP_UA, now=now) == ARTICLE_NOT_FOUND

    def test_explicit_device_overrides_user_agent(self, db, make_article, now):
        from newsroom.models import PageView
        article = make_article()
        record_view(article.id, '203.0.113.5', DESKTOP_UA, device='tablet', now=now)
        assert PageView.query.one().device == 'tablet'


class TestCountViews:

    def test_window_bounds(self, db, make_article, make_views, now):
        article = make_article()
        make_views(article, [1, 10, 23.9, 30, 47, 100])

        assert count_views(article.id, now - timedelta(hours=24)) == 3
        assert count_views(article.id, now - timedelta(hours=48), now - timedelta(hours=24)) == 2
        assert count_views(article.id, now - timedelta(days=7)) == 6

    def test_site_wide(self, db, make_article, make_views, now):
        first = make_article(title='First story')
        second = make_article(title='Second story')
        make_views(first, [1, 2])
        make_views(second, [3])

        assert count_views(None, now - timedelta(hours=24)) == 3

    def test_unique_sessions(self, db, make_article, now):
        first = make_article(title='First story')
        second = make_article(title='Second story')
        record_view(first.id, '203.0.113.5', DESKTOP_UA, now=now)
        record_view(second.id, '203.0.113.5', DESKTOP_UA, now=now)
        record_view(first.id, '198.51.100.7', IPHONE_UA, now=now)

        assert count_unique_sessions(now - timedelta(hours=24)) == 2
