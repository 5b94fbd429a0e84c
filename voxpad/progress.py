"""Structured model-loading progress.

Backends report loading through ProgressEvent records passed to an emit
callable. stream_model_load() turns that into an iterator the caller
consumes on its own thread, so UI code never has to hand a callback into
the download machinery.
"""
import queue
import threading
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from tqdm.auto import tqdm

STATUS_INITIATE = "initiate"
STATUS_DOWNLOADING = "downloading"
STATUS_LOADING = "loading"
STATUS_READY = "ready"


@dataclass(frozen=True)
class ProgressEvent:
    """One model-loading progress update."""

    status: str
    file: str = ""
    loaded: int = 0
    total: Optional[int] = None

    @property
    def percent(self) -> Optional[int]:
        if not self.total:
            return None
        return round(min(self.loaded, self.total) / self.total * 100)


Emit = Callable[[ProgressEvent], None]


def progress_tqdm(emit: Emit, file: str) -> type:
    """Build a tqdm class that mirrors its progress into ProgressEvents.

    huggingface_hub drives the outer "Fetching N files" bar both by
    iteration (thread_map) and by update(); both paths are covered.
    """

    class _ProgressTqdm(tqdm):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._loaded = 0
            emit(ProgressEvent(STATUS_DOWNLOADING, file=file, loaded=0, total=self.total))

        def _report(self, n) -> None:
            self._loaded += n
            emit(ProgressEvent(
                STATUS_DOWNLOADING, file=file, loaded=int(self._loaded), total=self.total
            ))

        def update(self, n=1):
            result = super().update(n)
            self._report(n)
            return result

        def __iter__(self):
            for item in super().__iter__():
                self._report(1)
                yield item

    return _ProgressTqdm


_DONE = object()


def stream_model_load(backend) -> Iterator[ProgressEvent]:
    """Run backend.load() on a worker thread and yield its events.

    The load error, if any, is raised once all events have been yielded.
    """
    events: queue.Queue = queue.Queue()
    errors = []

    def _run() -> None:
        try:
            backend.load(events.put)
        except Exception as exc:
            errors.append(exc)
        finally:
            events.put(_DONE)

    thread = threading.Thread(target=_run, daemon=True, name="voxpad-model-load")
    thread.start()

    while True:
        event = events.get()
        if event is _DONE:
            break
        yield event

    thread.join()
    if errors:
        raise errors[0]
