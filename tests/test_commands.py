"""
Tests for CLI commands and the scheduled trending job.
"""

import pytest
from unittest.mock import patch

from newsroom.commands import calculate_trending, update_seo_scores


class TestCalculateTrendingCommand:

    def test_manual_run(self, app, db, make_article):
        make_article(title='First story')
        runner = app.test_cli_runner()

        result = runner.invoke(calculate_trending)

        assert result.exit_code == 0
        assert 'Processed 1 articles: 1 updated, 0 failed' in result.output

    def test_recent_flag(self, app, db):
        runner = app.test_cli_runner()
        with patch('newsroom.commands.calculate_trending_scores',
                   return_value={'processed': 0, 'updated': 0, 'failed': 0}) as mock_calc:
            result = runner.invoke(calculate_trending, ['--recent'])

        assert result.exit_code == 0
        mock_calc.assert_called_once_with(recent_only=True)


class TestUpdateSeoScoresCommand:

    def test_updates_published(self, app, db, make_article):
        from newsroom.models import Article
        article = make_article(title='First story', body='One short paragraph.')
        runner = app.test_cli_runner()

        result = runner.invoke(update_seo_scores)

        assert result.exit_code == 0
        assert db.session.get(Article, article.id).readability_score == 100


class TestScheduler:

    def test_registers_hourly_job(self, app):
        from newsroom import scheduler as scheduler_module

        try:
            sched = scheduler_module.init_scheduler(app)
            job = sched.get_job(scheduler_module.TRENDING_JOB_ID)

            assert job is not None
            assert job.max_instances == 1
            assert job.coalesce is True
            assert str(job.trigger.fields[6]) == '0'  # minute
        finally:
            scheduler_module.shutdown_scheduler()

    def test_scheduled_run_uses_recent_variant(self, app, db):
        from newsroom.scheduler import run_scheduled_trending

        with patch('newsroom.trending.scorer.calculate_trending_scores',
                   return_value={'processed': 0, 'updated': 0, 'failed': 0}) as mock_calc:
            run_scheduled_trending(app)

        mock_calc.assert_called_once_with(recent_only=True)

    def test_scheduled_run_swallows_errors(self, app, db):
        from newsroom.scheduler import run_scheduled_trending

        with patch('newsroom.trending.scorer.calculate_trending_scores',
                   side_effect=RuntimeError('boom')):
            run_scheduled_trending(app)
