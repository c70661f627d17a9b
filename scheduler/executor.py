import logging

from croniter import croniter
from django.conf import settings
from django.utils import timezone
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class TaskExecutor:
    """
    Dispatch the periodic jobs declared in SCHEDULER_JOBS.

    Each job is `{"task": "<dotted path>", "period": "<cron expression>"}`;
    the task is called with the tick time as `now`. A failing job is logged
    and does not stop the other jobs of the same tick.
    """

    def __init__(self, jobs=None):
        self.jobs = settings.SCHEDULER_JOBS if jobs is None else jobs

    def execute(self, now=None, only=None, force=False):
        now = now or timezone.localtime()

        executed_jobs = []
        failed_jobs = []
        results = {}

        for name, job in self.jobs.items():
            if only is not None and name not in only:
                continue
            if not force and not self.should_run(name, job, now):
                continue

            logger.info("Running job: %s", name)
            try:
                results[name] = self.run_job(job, now)
            except Exception:
                logger.exception("Job %s failed", name)
                failed_jobs.append(name)
                continue
            executed_jobs.append(name)

        return {
            "status": "success" if not failed_jobs else "partial_failure",
            "executed_jobs": executed_jobs,
            "failed_jobs": failed_jobs,
            "results": results,
        }

    def should_run(self, name, job, now):
        period = job.get("period", "")
        if not croniter.is_valid(period):
            logger.error("Invalid cron period %r for job %s", period, name)
            return False
        # match() accepts any moment inside the scheduled minute
        return croniter.match(period, now)

    def run_job(self, job, now):
        task = import_string(job["task"])
        return task(now=now)
