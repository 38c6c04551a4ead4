"""
Scheduler module for the quote service.
Periodic quote reload and cached-quote rotation.
"""

from .tasks import RefreshTasks
from .scheduler import RefreshScheduler
from .job_config import JobConfig, build_job_configs, RELOAD_JOB_ID, ROTATE_JOB_ID

__all__ = [
    'RefreshTasks',
    'RefreshScheduler',
    'JobConfig',
    'build_job_configs',
    'RELOAD_JOB_ID',
    'ROTATE_JOB_ID',
]
