import logging
import time

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from scheduler.executor import TaskExecutor

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Run the periodic board jobs (scheduled publishing, orphan image cleanup)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--once",
            action="store_true",
            help="Run a single tick and exit",
        )
        parser.add_argument(
            "--job",
            action="append",
            dest="jobs",
            metavar="NAME",
            help="Only consider this job; with --once it runs regardless of its period",
        )

    def handle(self, *args, **options):
        executor = TaskExecutor()
        only = options["jobs"]

        unknown = set(only or []) - set(executor.jobs)
        if unknown:
            raise CommandError(f"Unknown job(s): {', '.join(sorted(unknown))}")

        if options["once"]:
            result = executor.execute(only=only, force=bool(only))
            self._report(result)
            return

        startup_jobs = [name for name in settings.SCHEDULER_STARTUP_JOBS if only is None or name in only]
        if startup_jobs:
            self._report(executor.execute(only=startup_jobs, force=True))

        poll_seconds = settings.SCHEDULER_POLL_SECONDS
        logger.info("Scheduler started with jobs: %s", ", ".join(only or executor.jobs))
        try:
            while True:
                # Wake up at the start of the next interval
                time.sleep(poll_seconds - (time.time() % poll_seconds))
                self._report(executor.execute(only=only))
        except KeyboardInterrupt:
            logger.info("Scheduler stopped")

    def _report(self, result):
        if result["executed_jobs"]:
            self.stdout.write(f"Executed: {', '.join(result['executed_jobs'])}")
        if result["failed_jobs"]:
            self.stderr.write(f"Failed: {', '.join(result['failed_jobs'])}")
