"""
Scheduler job configuration for the quote service.
Builds interval job definitions from the service configuration.
"""

from __future__ import annotations

from typing import Dict
from dataclasses import dataclass

from apscheduler.triggers.interval import IntervalTrigger

from utils import scheduler_logger, format_duration
from utils.config_manager import ServiceConfig, SchedulerConfig

RELOAD_JOB_ID = "reload_quotes"
ROTATE_JOB_ID = "rotate_cache"


@dataclass
class JobConfig:
    """任务配置数据类"""
    job_id: str
    description: str
    trigger: IntervalTrigger
    max_instances: int
    misfire_grace_time: int
    coalesce: bool


def build_job_configs(service_config: ServiceConfig,
                      scheduler_config: SchedulerConfig) -> Dict[str, JobConfig]:
    """根据配置生成定时任务；间隔为 0 的任务不创建"""
    job_configs: Dict[str, JobConfig] = {}

    if service_config.reload_interval > 0:
        job_configs[RELOAD_JOB_ID] = JobConfig(
            job_id=RELOAD_JOB_ID,
            description=f"Reload quotes every {format_duration(service_config.reload_interval)}",
            trigger=IntervalTrigger(seconds=service_config.reload_interval),
            max_instances=1,
            misfire_grace_time=scheduler_config.misfire_grace_time,
            coalesce=scheduler_config.coalesce
        )
    else:
        scheduler_logger.debug("[JobConfig] Periodic reload disabled")

    if service_config.cache_duration > 0:
        job_configs[ROTATE_JOB_ID] = JobConfig(
            job_id=ROTATE_JOB_ID,
            description=f"Rotate cached quote every {format_duration(service_config.cache_duration)}",
            trigger=IntervalTrigger(seconds=service_config.cache_duration),
            max_instances=1,
            misfire_grace_time=scheduler_config.misfire_grace_time,
            coalesce=scheduler_config.coalesce
        )
    else:
        scheduler_logger.debug("[JobConfig] Quote caching disabled")

    return job_configs
