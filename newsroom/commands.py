from flask.cli import with_appcontext
import click
from newsroom import db
from newsroom.trending.scorer import calculate_trending_scores
from newsroom.seo.service import update_all_scores


@click.command('calculate-trending')
@click.option('--recent', is_flag=True, default=False,
              help='Only rescore articles published in the last 7 days (the hourly job).')
@with_appcontext
def calculate_trending(recent):
    """Recalculate trending scores for published articles"""
    try:
        summary = calculate_trending_scores(recent_only=recent)
    except Exception as e:
        db.session.rollback()
        click.echo(f"Error calculating trending scores: {str(e)}")
        raise SystemExit(1)

    click.echo(
        f"Processed {summary['processed']} articles: "
        f"{summary['updated']} updated, {summary['failed']} failed"
    )


@click.command('update-seo-scores')
@with_appcontext
def update_seo_scores():
    """Re-analyze and store SEO, readability and AI-readiness scores"""
    try:
        summary = update_all_scores()
    except Exception as e:
        db.session.rollback()
        click.echo(f"Error updating SEO scores: {str(e)}")
        raise SystemExit(1)

    click.echo(
        f"Processed {summary['processed']} articles: "
        f"{summary['updated']} updated, {summary['failed']} failed"
    )


def init_commands(app):
    app.cli.add_command(calculate_trending)
    app.cli.add_command(update_seo_scores)
