"""事件通道模块。

所有预估与批处理结果都通过事件送达调用方，触发调用本身不返回结果。
"""

import threading
from collections import defaultdict
from collections.abc import Callable
from enum import Enum
from typing import Any

from ..utils.logging_helpers import get_logger


logger = get_logger()


class EventType(str, Enum):
    """对外事件类型"""

    PREVIEW_DONE = "preview-done"
    IMG_START = "img-start"
    IMG_PROCESSED = "img-processed"
    BATCH_FINISHED = "batch-finished"


Listener = Callable[[EventType, Any], None]


class EventEmitter:
    """线程安全的回调注册表

    监听器在发出事件的线程中调用；监听器抛出的异常会被记录，不会影响批处理。
    """

    def __init__(self) -> None:
        self._listeners: dict[EventType | None, list[Listener]] = defaultdict(list)
        self._lock = threading.Lock()

    def on(self, event: EventType, callback: Callable[[Any], None]) -> Callable[[], None]:
        """订阅指定事件，回调只接收 payload

        Returns:
            取消订阅的函数
        """

        def listener(_event: EventType, payload: Any) -> None:
            callback(payload)

        return self._add(event, listener)

    def on_any(self, callback: Listener) -> Callable[[], None]:
        """订阅所有事件，回调接收 (event, payload)"""
        return self._add(None, callback)

    def _add(self, key: EventType | None, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners[key].append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners[key]:
                    self._listeners[key].remove(listener)

        return unsubscribe

    def emit(self, event: EventType, payload: Any = None) -> None:
        """发出事件"""
        with self._lock:
            listeners = [*self._listeners[event], *self._listeners[None]]

        for listener in listeners:
            try:
                listener(event, payload)
            except Exception:
                logger.exception(f"事件监听器处理 {event.value} 失败")


class EventRecorder:
    """记录收到的所有事件，供测试和同步调用方使用"""

    def __init__(self, emitter: EventEmitter | None = None) -> None:
        self.events: list[tuple[EventType, Any]] = []
        self._lock = threading.Lock()
        self._seen: dict[EventType, threading.Event] = defaultdict(threading.Event)
        self._unsubscribe: Callable[[], None] | None = None
        if emitter is not None:
            self.attach(emitter)

    def attach(self, emitter: EventEmitter) -> None:
        self._unsubscribe = emitter.on_any(self)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __call__(self, event: EventType, payload: Any) -> None:
        with self._lock:
            self.events.append((event, payload))
            seen = self._seen[event]
        seen.set()

    def of_type(self, event: EventType) -> list[Any]:
        """指定类型事件的 payload 列表，按到达顺序"""
        with self._lock:
            return [payload for e, payload in self.events if e == event]

    def wait_for(self, event: EventType, timeout: float | None = None) -> bool:
        """等待某类事件至少出现一次"""
        with self._lock:
            seen = self._seen[event]
        return seen.wait(timeout)
