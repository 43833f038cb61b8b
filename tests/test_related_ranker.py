"""
Tests for related article ranking.
"""

import pytest
from datetime import timedelta
from unittest.mock import patch

from newsroom.related.ranker import (
    similarity_score, get_related_articles, related_articles_for_page,
)


class TestSimilarityScore:

    def test_reference_example(self):
        # 2 (category) + 2 (tags) + 1 (recency)
        assert similarity_score([1, 2], ['Election', 'budget'], [1], ['ELECTION', 'Budget'], 3) == 5

    def test_each_shared_category_counts(self):
        assert similarity_score([1, 2, 3], [], [1, 2], [], 30) == 4

    def test_recency_boundary(self):
        assert similarity_score([1], [], [1], [], 6.99) == 3
        assert similarity_score([1], [], [1], [], 7) == 2

    def test_no_overlap(self):
        assert similarity_score([1], ['a'], [2], ['b'], 100) == 0


class TestGetRelatedArticles:

    def test_ranks_by_similarity(self, db, make_article, make_category, now):
        politics = make_category('Politics')
        economy = make_category('Economy')
        source = make_article(title='Source', categories=[politics, economy], tags=['election', 'budget'])
        weak = make_article(title='Weak', published_days_ago=10, categories=[politics])
        strong = make_article(title='Strong', published_days_ago=3, categories=[politics],
                              tags=['Election', 'BUDGET'])
        both = make_article(title='Both categories', published_days_ago=20, categories=[politics, economy])

        results = get_related_articles(source.id, limit=4, now=now)

        assert [r['title'] for r in results] == ['Strong', 'Both categories', 'Weak']
        top = results[0]
        assert top['similarityScore'] == 5
        assert top['category'] == 'Politics'
        assert top['categorySlug'] == 'politics'
        assert results[1]['similarityScore'] == 4
        assert results[2]['similarityScore'] == 2

    def test_ties_keep_newest_first(self, db, make_article, make_category, now):
        sport = make_category('Sport')
        source = make_article(title='Source', categories=[sport])
        older = make_article(title='Older', published_days_ago=12, categories=[sport])
        newer = make_article(title='Newer', published_days_ago=9, categories=[sport])

        results = get_related_articles(source.id, now=now)

        assert [r['title'] for r in results] == ['Newer', 'Older']

    def test_excludes_source_drafts_and_other_categories(self, db, make_article, make_category, now):
        sport = make_category('Sport')
        culture = make_category('Culture')
        source = make_article(title='Source', categories=[sport])
        make_article(title='Draft', published_days_ago=None, categories=[sport])
        make_article(title='Elsewhere', categories=[culture])
        make_article(title='Match', categories=[sport])

        results = get_related_articles(source.id, now=now)

        assert [r['title'] for r in results] == ['Match']

    def test_limit_and_candidate_pool(self, db, make_article, make_category, now):
        news = make_category('News')
        source = make_article(title='Source', categories=[news], tags=['flood'])
        # Only the newest 2 * limit candidates are scored; the tag match on the
        # oldest article never reaches the ranker
        make_article(title='Oldest', published_days_ago=50, categories=[news], tags=['flood'])
        for index in range(4):
            make_article(title=f'Recent {index}', published_days_ago=index + 1, categories=[news])

        results = get_related_articles(source.id, limit=2, now=now)

        assert len(results) == 2
        assert 'Oldest' not in [r['title'] for r in results]

    def test_source_without_categories(self, db, make_article):
        source = make_article(title='Loner')
        make_article(title='Another')
        assert get_related_articles(source.id) == []

    def test_missing_source(self, db):
        assert get_related_articles(31337) is None

    def test_output_shape(self, db, make_article, make_category, now):
        world = make_category('World')
        source = make_article(title='Source', categories=[world])
        make_article(title='Other', categories=[world], excerpt='Summary',
                     featured_image_url='https://cdn.example.com/a.webp')

        item = get_related_articles(source.id, now=now)[0]

        assert set(item) == {
            'id', 'title', 'slug', 'excerpt', 'category', 'categorySlug',
            'featuredImage', 'publishedAt', 'similarityScore',
        }
        assert item['featuredImage'] == 'https://cdn.example.com/a.webp'
        assert item['excerpt'] == 'Summary'


class TestRelatedForPage:

    def test_swallows_errors(self, db):
        with patch('newsroom.related.ranker.get_related_articles', side_effect=RuntimeError('boom')):
            assert related_articles_for_page(1) == []

    def test_missing_source_is_empty(self, db):
        assert related_articles_for_page(31337) == []


class TestRelatedEndpoint:

    def test_related(self, client, make_article, make_category):
        tech = make_category('Tech')
        source = make_article(title='Source', categories=[tech])
        make_article(title='Gadget review', categories=[tech])

        resp = client.get(f'/api/related/{source.id}')

        assert resp.status_code == 200
        assert [a['title'] for a in resp.get_json()['data']] == ['Gadget review']

    def test_missing(self, client):
        resp = client.get('/api/related/999')
        assert resp.status_code == 404

    def test_bad_limit(self, client, make_article):
        article = make_article()
        assert client.get(f'/api/related/{article.id}?limit=21').status_code == 400
