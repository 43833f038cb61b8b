# newsroom/scheduler.py
"""
Background Task Scheduler

Uses APScheduler to run periodic tasks:
- Hourly trending score recalculation for recently published articles

Single-instance friendly; jobs never overlap and missed runs are coalesced.
"""
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
import logging

logger = logging.getLogger(__name__)
scheduler = None

TRENDING_JOB_ID = 'calculate_trending_scores'


def run_scheduled_trending(app):
    """
    Rescore articles published in the last week.

    Fire-and-forget: failures are logged and the next hourly run tries again.
    """
    with app.app_context():
        from newsroom import db
        from newsroom.trending.scorer import calculate_trending_scores

        try:
            summary = calculate_trending_scores(recent_only=True)
            logger.info(f"Scheduled trending run finished: {summary}")
        except Exception as e:
            logger.error(f"Scheduled trending run failed: {e}", exc_info=True)
            db.session.rollback()
        finally:
            db.session.remove()


def init_scheduler(app):
    """
    Initialize the APScheduler with Flask app context
    """
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already initialized")
        return scheduler

    scheduler = BackgroundScheduler(timezone='UTC')

    # Top of every hour
    scheduler.add_job(
        run_scheduled_trending,
        trigger=CronTrigger(minute=0),
        args=[app],
        id=TRENDING_JOB_ID,
        name='Recalculate trending scores',
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    logger.info("Scheduler initialized with trending job")
    return scheduler


def start_scheduler():
    """
    Start the scheduler
    Should be called after app initialization
    """
    global scheduler

    if scheduler is None:
        logger.error("Scheduler not initialized. Call init_scheduler() first.")
        return

    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started")
    else:
        logger.warning("Scheduler already running")


def shutdown_scheduler():
    """
    Shutdown the scheduler gracefully
    """
    global scheduler

    if scheduler and scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler shut down")
    scheduler = None
