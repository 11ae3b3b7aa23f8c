"""Checker for local system resources."""

from __future__ import annotations

import asyncio
import os
import platform
import socket
from typing import Any, Callable, Dict, List

import psutil

from healthwatch.domain.entities.errors import UnsupportedCheckTypeError
from healthwatch.domain.entities.health import (
    CheckConfig,
    CheckOutcome,
    CheckType,
    HealthStatus,
    SystemCheckConfig,
    SystemResource,
    SystemResourceCheck,
)
from healthwatch.domain.services.status_rules import classify_threshold, worst_status


class SystemChecker:
    """Probe memory, CPU load and disk usage against percentage thresholds.

    Every probe is reported in the outcome metadata, and the overall
    status is the worst probe status.
    """

    check_type = CheckType.SYSTEM

    def __init__(self) -> None:
        self._probes: Dict[SystemResource, Callable[[SystemResourceCheck], Dict[str, Any]]] = {
            SystemResource.MEMORY: self._probe_memory,
            SystemResource.CPU: self._probe_cpu,
            SystemResource.DISK: self._probe_disk,
        }

    async def evaluate(self, config: CheckConfig, timeout_ms: float) -> CheckOutcome:
        if not isinstance(config, SystemCheckConfig):
            raise UnsupportedCheckTypeError(
                f"System checker cannot evaluate check '{config.id}'"
            )
        return await asyncio.to_thread(self._evaluate_sync, config)

    def _evaluate_sync(self, config: SystemCheckConfig) -> CheckOutcome:
        results: List[Dict[str, Any]] = []
        for check in config.checks:
            probe = self._probes.get(check.type)
            if probe is None:
                raise UnsupportedCheckTypeError(
                    f"Unsupported system check type: {check.type}"
                )
            results.append(probe(check))

        return CheckOutcome(
            status=worst_status(result["status"] for result in results),
            message="; ".join(result["message"] for result in results),
            metadata={"checks": results, "system_info": _system_info()},
        )

    def _probe_memory(self, check: SystemResourceCheck) -> Dict[str, Any]:
        memory = psutil.virtual_memory()
        usage = (memory.total - memory.available) / memory.total * 100
        return _probe_result(
            SystemResource.MEMORY, usage, check.threshold, f"Memory usage: {usage:.2f}%"
        )

    def _probe_cpu(self, check: SystemResourceCheck) -> Dict[str, Any]:
        one_minute, _, _ = psutil.getloadavg()
        cpu_count = psutil.cpu_count() or 1
        load = one_minute / cpu_count * 100
        return _probe_result(
            SystemResource.CPU, load, check.threshold, f"CPU load: {load:.2f}%"
        )

    def _probe_disk(self, check: SystemResourceCheck) -> Dict[str, Any]:
        path = check.path or os.getcwd()
        try:
            usage = psutil.disk_usage(path)
        except OSError as exc:
            return {
                "type": SystemResource.DISK.value,
                "status": HealthStatus.UNHEALTHY,
                "message": f"Failed to check disk usage for {path}: {exc}",
                "value": 0.0,
                "threshold": check.threshold,
                "unit": "%",
                "path": path,
            }

        percent = usage.used / usage.total * 100 if usage.total else 0.0
        result = _probe_result(
            SystemResource.DISK,
            percent,
            check.threshold,
            f"Disk usage for {path}: {percent:.2f}%",
        )
        result["path"] = path
        return result


def _probe_result(
    resource: SystemResource, value: float, threshold: float, message: str
) -> Dict[str, Any]:
    return {
        "type": resource.value,
        "status": classify_threshold(value, threshold),
        "message": message,
        "value": round(value, 2),
        "threshold": threshold,
        "unit": "%",
    }


def _system_info() -> Dict[str, Any]:
    memory = psutil.virtual_memory()
    return {
        "platform": platform.system().lower(),
        "arch": platform.machine(),
        "python_version": platform.python_version(),
        "hostname": socket.gethostname(),
        "boot_time": psutil.boot_time(),
        "total_memory": memory.total,
        "available_memory": memory.available,
        "cpu_count": psutil.cpu_count(),
        "load_average": list(psutil.getloadavg()),
    }
