"""
Dependency providers for route injection.

Each collaborator (store, file storage, task queue, completion client) is a
process-wide singleton created on first use. Tests replace them through
app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends

from portal.core.config import get_settings
from portal.db.postgres import get_engine
from portal.db.store import Store
from portal.services.chat_service import ChatService
from portal.services.completion_client import CompletionClient, get_completion_client
from portal.services.file_storage import FileStorage, MongoFileStorage
from portal.services.task_queue import TaskQueue, ThreadPoolTaskQueue


@lru_cache()
def _store() -> Store:
    return Store(get_engine())


@lru_cache()
def _file_storage() -> FileStorage:
    return MongoFileStorage()


@lru_cache()
def _task_queue() -> TaskQueue:
    return ThreadPoolTaskQueue(max_workers=get_settings().task_workers)


def get_store() -> Store:
    return _store()


def get_file_storage() -> FileStorage:
    return _file_storage()


def get_task_queue() -> TaskQueue:
    return _task_queue()


def get_completion() -> CompletionClient:
    return get_completion_client()


def get_chat_service(
    store: Store = Depends(get_store),
    task_queue: TaskQueue = Depends(get_task_queue),
    completion_client: CompletionClient = Depends(get_completion)
) -> ChatService:
    return ChatService(store, task_queue, completion_client)


def shutdown_task_queue() -> None:
    if _task_queue.cache_info().currsize:
        _task_queue().shutdown(wait=True)
