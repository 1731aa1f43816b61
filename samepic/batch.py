"""
Streaming near-duplicate matching.

A single worker thread drains the incoming images, fingerprints each one
once, and compares it against every fingerprint retained so far. Matches
are handed to the caller through a bounded queue as soon as they are found,
so results stream out while later images are still being processed.

Each new image is compared only against strictly earlier images, which is
what guarantees every unordered pair is reported at most once. Comparisons
must therefore stay on the one worker: parallelizing them would require
locking around the retained list.

Memory grows linearly with the number of images (one fingerprint each) and
comparison cost is O(n^2) fingerprint pairs.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Callable, Iterable, Iterator

from .config import BATCH_QUEUE_SIZE
from .models import IDImage, Pair

logger = logging.getLogger(__name__)

# Marks the end of the output stream
_DONE = object()

# How often a blocked worker re-checks whether the consumer went away
_PUT_POLL_INTERVAL = 0.1


class _Failure:
    """Carries an exception from the worker to the consuming thread."""

    def __init__(self, error: BaseException):
        self.error = error


def stream_pairs(
    fingerprint: Callable[[Any], Any],
    match: Callable[[Any, Any], bool],
    images: Iterable[IDImage],
    queue_size: int = BATCH_QUEUE_SIZE,
) -> Iterator[Pair]:
    """
    Find near-duplicate pairs in a stream of images.

    The worker thread starts on the first next(); pairs are yielded by the
    returned iterator in the order they are discovered. ``Pair.first`` is
    always the earlier image.

    Args:
        fingerprint: Computes the fingerprint of one image
        match: Decides whether two fingerprints (earlier, newer) match
        images: Iterable of IDImage; may be unbounded or produced lazily
        queue_size: Capacity of the output channel (at least 1)

    Returns:
        Iterator over Pair objects. The iterator finishes only after the
        input is exhausted and the last image has been compared.

    Raises:
        BaseException: Anything raised while reading the input or computing a
            fingerprint is re-raised from the iterator.

    Notes:
        If the caller stops reading, the worker blocks instead of dropping
        results. Closing the iterator (or letting it be garbage collected)
        tells the worker to stop.
    """
    results: queue.Queue = queue.Queue(maxsize=max(1, queue_size))
    stop = threading.Event()

    def offer(item) -> bool:
        # Block while the queue is full, unless the consumer has gone away
        while not stop.is_set():
            try:
                results.put(item, timeout=_PUT_POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False

    def worker() -> None:
        ids: list[Any] = []
        fingerprints: list[Any] = []
        found = 0
        try:
            for entry in images:
                if stop.is_set():
                    return
                current = fingerprint(entry.image)
                for previous_id, previous in zip(ids, fingerprints):
                    if match(previous, current):
                        found += 1
                        if not offer(Pair(previous_id, entry.id)):
                            return
                ids.append(entry.id)
                fingerprints.append(current)
                logger.debug(f"Compared {entry.id!r} against {len(ids) - 1} earlier images")
        except BaseException as e:
            # Includes SystemExit; the consumer blocks until it sees a marker
            offer(_Failure(e))
            return
        logger.debug(f"Batch finished: {len(ids)} images, {found} pairs")
        offer(_DONE)

    return _consume(worker, results, stop)


def _consume(worker: Callable[[], None], results: queue.Queue, stop: threading.Event) -> Iterator[Pair]:
    # Started lazily, so an iterator that is never read owns no thread
    thread = threading.Thread(target=worker, name="samepic-batch", daemon=True)
    thread.start()
    try:
        while True:
            item = results.get()
            if item is _DONE:
                break
            if isinstance(item, _Failure):
                raise item.error
            yield item
    finally:
        stop.set()
    thread.join()


def find_pairs(samer, images: Iterable[IDImage]) -> list[Pair]:
    """
    Collect every near-duplicate pair in a finite collection of images.

    Args:
        samer: A BatchSamer
        images: Iterable of IDImage

    Returns:
        List of Pair objects in discovery order
    """
    return list(samer.same_batch(images))


__all__ = ['stream_pairs', 'find_pairs']
