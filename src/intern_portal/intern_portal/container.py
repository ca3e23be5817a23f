from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .core.constants import DEFAULT_DIRECTORY_TTL_SECONDS, DEFAULT_DURATION_SECONDS
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .presentations.audio import AudioCueDevice, BufferedAudioDevice
from .presentations.history import PresentedHistory
from .presentations.service import PresentationQueueEngine
from .presentations.ticker import ThreadingTicker, Ticker
from .profiles.directory import ProfileDirectory
from .profiles.json_profile_repository import JsonProfileRepository
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .storage.json_file_store import JsonFileKeyValueStore
from .storage.memory_store import InMemoryKeyValueStore
from .storage.mysql_kv_store import MySQLKeyValueStore
from .storage.repository import KeyValueStore


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    profiles_repo: ProfileRepository
    store: KeyValueStore
    audio_device: AudioCueDevice

    directory: ProfileDirectory
    presentation_engine: PresentationQueueEngine


def _connection(settings: Mapping) -> DatabaseConnection:
    return DatabaseConnection.get_instance(DBConfig.from_mapping(settings.get("DB_CONFIG") or {}))


def build_store(settings: Mapping, conn: Optional[DatabaseConnection]) -> KeyValueStore:
    backend = str(settings.get("STORE_BACKEND", "file")).lower()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "file":
        return JsonFileKeyValueStore(Path(settings.get("STORE_DIR", "instance/store")))
    if backend == "mysql":
        return MySQLKeyValueStore(conn or _connection(settings))
    raise ValidationError(f"Unknown STORE_BACKEND: {backend!r}")


def build_profiles(settings: Mapping, conn: Optional[DatabaseConnection]) -> ProfileRepository:
    backend = str(settings.get("DIRECTORY_BACKEND", "json")).lower()
    if backend == "json":
        return JsonProfileRepository(Path(settings.get("ROSTER_PATH", "instance/roster.json")))
    if backend == "mysql":
        return MySQLProfileRepository(conn or _connection(settings))
    raise ValidationError(f"Unknown DIRECTORY_BACKEND: {backend!r}")


def build_container(*, settings: Mapping, ticker: Ticker | None = None) -> Container:
    uses_mysql = "mysql" in {
        str(settings.get("STORE_BACKEND", "file")).lower(),
        str(settings.get("DIRECTORY_BACKEND", "json")).lower(),
    }
    conn = _connection(settings) if uses_mysql else None

    profiles_repo = build_profiles(settings, conn)
    store = build_store(settings, conn)
    audio_device = BufferedAudioDevice()

    directory = ProfileDirectory(
        profiles_repo,
        ttl_seconds=float(settings.get("DIRECTORY_TTL_SECONDS", DEFAULT_DIRECTORY_TTL_SECONDS)),
    )
    presentation_engine = PresentationQueueEngine(
        directory,
        PresentedHistory(store),
        audio=audio_device,
        ticker=ticker or ThreadingTicker(),
        default_duration=int(settings.get("DEFAULT_DURATION_SECONDS", DEFAULT_DURATION_SECONDS)),
    )

    return Container(
        conn=conn,
        profiles_repo=profiles_repo,
        store=store,
        audio_device=audio_device,
        directory=directory,
        presentation_engine=presentation_engine,
    )
