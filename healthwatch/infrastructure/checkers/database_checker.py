"""Checker for data-store connections."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Awaitable, Callable, Dict, Optional
from urllib.parse import unquote, urlsplit

import aiomysql
import asyncpg
import pika
import redis.asyncio as aioredis
from pymongo import MongoClient

from healthwatch.domain.entities.errors import (
    CheckerError,
    UnsupportedCheckTypeError,
)
from healthwatch.domain.entities.health import (
    CheckConfig,
    CheckOutcome,
    CheckType,
    DatabaseCheckConfig,
    DatabaseType,
    HealthStatus,
)
from healthwatch.domain.services.status_rules import classify_latency

DEFAULT_SQL_QUERY = "SELECT 1"


@dataclass
class _ProbeResult:
    """Raw answer of one dialect probe, before classification."""

    first_row: Any = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class DatabaseChecker:
    """Open a connection, run a liveness query and always close it again."""

    check_type = CheckType.DATABASE

    def __init__(self) -> None:
        self._probes: Dict[
            DatabaseType, Callable[[DatabaseCheckConfig, float], Awaitable[_ProbeResult]]
        ] = {
            DatabaseType.POSTGRESQL: self._probe_postgresql,
            DatabaseType.MYSQL: self._probe_mysql,
            DatabaseType.MONGODB: self._probe_mongodb,
            DatabaseType.REDIS: self._probe_redis,
            DatabaseType.RABBITMQ: self._probe_rabbitmq,
        }

    async def evaluate(self, config: CheckConfig, timeout_ms: float) -> CheckOutcome:
        if not isinstance(config, DatabaseCheckConfig):
            raise UnsupportedCheckTypeError(
                f"Database checker cannot evaluate check '{config.id}'"
            )

        probe = self._probes.get(config.database_type)
        if probe is None:
            raise UnsupportedCheckTypeError(
                f"Unsupported database type: {config.database_type}"
            )

        dialect = config.database_type.value
        start = perf_counter()
        try:
            result = await probe(config, timeout_ms / 1000)
        except CheckerError:
            raise
        except Exception as exc:
            raise CheckerError(
                f"{dialect} check failed: {exc}", details={"database_type": dialect}
            ) from exc
        latency_ms = round((perf_counter() - start) * 1000, 2)

        metadata = {
            "database_type": dialect,
            "response_time": latency_ms,
            **result.metadata,
        }

        if config.expected_result is not None and not _same_value(
            result.first_row, config.expected_result
        ):
            return CheckOutcome(
                status=HealthStatus.UNHEALTHY,
                message=f"{dialect} returned an unexpected result",
                metadata={**metadata, "actual_result": result.first_row},
            )

        return CheckOutcome(
            status=classify_latency(latency_ms, timeout_ms),
            message=f"{dialect} connection successful",
            metadata=metadata,
        )

    async def _probe_postgresql(
        self, config: DatabaseCheckConfig, timeout_s: float
    ) -> _ProbeResult:
        connection = await asyncpg.connect(config.connection_string, timeout=timeout_s)
        try:
            rows = await connection.fetch(config.query or DEFAULT_SQL_QUERY)
        finally:
            await connection.close()

        return _ProbeResult(
            first_row=dict(rows[0]) if rows else None,
            metadata={"row_count": len(rows)},
        )

    async def _probe_mysql(
        self, config: DatabaseCheckConfig, timeout_s: float
    ) -> _ProbeResult:
        connection = await aiomysql.connect(
            connect_timeout=timeout_s, **_mysql_params(config.connection_string)
        )
        try:
            async with connection.cursor(aiomysql.DictCursor) as cursor:
                await cursor.execute(config.query or DEFAULT_SQL_QUERY)
                rows = await cursor.fetchall()
        finally:
            connection.close()

        return _ProbeResult(
            first_row=dict(rows[0]) if rows else None,
            metadata={"row_count": len(rows)},
        )

    async def _probe_mongodb(
        self, config: DatabaseCheckConfig, timeout_s: float
    ) -> _ProbeResult:
        timeout_ms = int(timeout_s * 1000)

        def _ping() -> Dict[str, Any]:
            client: MongoClient = MongoClient(
                config.connection_string,
                serverSelectionTimeoutMS=timeout_ms,
                connectTimeoutMS=timeout_ms,
            )
            try:
                return dict(client.admin.command("ping"))
            finally:
                client.close()

        reply = await asyncio.to_thread(_ping)
        return _ProbeResult(first_row=reply)

    async def _probe_redis(
        self, config: DatabaseCheckConfig, timeout_s: float
    ) -> _ProbeResult:
        client = aioredis.from_url(
            config.connection_string,
            socket_connect_timeout=timeout_s,
            socket_timeout=timeout_s,
        )
        try:
            pong = await client.ping()
        finally:
            await client.aclose()

        return _ProbeResult(first_row=pong, metadata={"pong": pong})

    async def _probe_rabbitmq(
        self, config: DatabaseCheckConfig, timeout_s: float
    ) -> _ProbeResult:
        def _open_channel() -> bool:
            parameters = pika.URLParameters(config.connection_string)
            parameters.socket_timeout = timeout_s
            parameters.blocked_connection_timeout = timeout_s
            connection = pika.BlockingConnection(parameters)
            try:
                channel = connection.channel()
                is_open = channel.is_open
                channel.close()
                return is_open
            finally:
                connection.close()

        channel_open = await asyncio.to_thread(_open_channel)
        return _ProbeResult(
            first_row=channel_open, metadata={"channel_open": channel_open}
        )


def _mysql_params(connection_string: str) -> Dict[str, Any]:
    parsed = urlsplit(connection_string)
    params: Dict[str, Any] = {
        "host": parsed.hostname or "localhost",
        "port": parsed.port or 3306,
    }
    if parsed.username:
        params["user"] = unquote(parsed.username)
    if parsed.password:
        params["password"] = unquote(parsed.password)
    database: Optional[str] = parsed.path.lstrip("/") or None
    if database:
        params["db"] = database
    return params


def _same_value(actual: Any, expected: Any) -> bool:
    return json.dumps(actual, sort_keys=True, default=str) == json.dumps(
        expected, sort_keys=True, default=str
    )
