"""
Refresh scheduler for the quote service.
Uses APScheduler to run the periodic reload and cache rotation jobs.
"""

from typing import Dict, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MISSED

from utils import scheduler_logger
from utils.config_manager import ServiceConfig, SchedulerConfig

from .tasks import RefreshTasks
from .job_config import JobConfig, build_job_configs, RELOAD_JOB_ID, ROTATE_JOB_ID


class RefreshScheduler:
    """刷新调度器：仅为已配置（间隔 > 0）的任务创建定时作业"""

    def __init__(self, tasks: RefreshTasks, service_config: ServiceConfig,
                 scheduler_config: Optional[SchedulerConfig] = None,
                 scheduler: Optional[AsyncIOScheduler] = None):
        self.tasks = tasks
        self.service_config = service_config
        self.scheduler_config = scheduler_config or SchedulerConfig()
        self.scheduler = scheduler or AsyncIOScheduler()
        self.jobs: Dict[str, JobConfig] = {}

    def _job_func(self, job_id: str):
        # 协程任务在事件循环中执行，同步任务由 APScheduler 放入线程池执行
        if job_id == RELOAD_JOB_ID:
            return self.tasks.reload_quotes
        if job_id == ROTATE_JOB_ID:
            return self.tasks.rotate_cache
        raise KeyError(job_id)

    async def initialize(self):
        """配置并启动调度器（需在运行中的事件循环内调用）"""
        job_configs = build_job_configs(self.service_config, self.scheduler_config)
        if not job_configs:
            scheduler_logger.info("[Scheduler] No periodic jobs configured, scheduler not started")
            return

        self.scheduler.add_listener(self._job_error_listener, EVENT_JOB_ERROR)
        self.scheduler.add_listener(self._job_missed_listener, EVENT_JOB_MISSED)

        for job_config in job_configs.values():
            self.scheduler.add_job(
                self._job_func(job_config.job_id),
                trigger=job_config.trigger,
                id=job_config.job_id,
                replace_existing=True,
                max_instances=job_config.max_instances,
                misfire_grace_time=job_config.misfire_grace_time,
                coalesce=job_config.coalesce
            )
            self.jobs[job_config.job_id] = job_config
            scheduler_logger.info(f"[Scheduler] Added job: {job_config.job_id} - {job_config.description}")

        self.scheduler.start()
        scheduler_logger.info(f"[Scheduler] Refresh scheduler started with {len(self.jobs)} job(s)")

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def _job_error_listener(self, event):
        """任务错误监听器"""
        job_id = getattr(event, 'job_id', 'unknown')
        exception = getattr(event, 'exception', 'Unknown error')
        scheduled_time = getattr(event, 'scheduled_run_time', None)

        scheduler_logger.error(f"[Scheduler] Job {job_id} failed at {scheduled_time}: {exception}")

    def _job_missed_listener(self, event):
        """任务错过监听器"""
        job_id = getattr(event, 'job_id', 'unknown')
        scheduled_time = getattr(event, 'scheduled_run_time', None)

        scheduler_logger.warning(f"[Scheduler] Job {job_id} missed at {scheduled_time}")

    def shutdown(self):
        """关闭调度器，不等待正在运行的任务"""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            scheduler_logger.info("[Scheduler] Refresh scheduler shut down")
