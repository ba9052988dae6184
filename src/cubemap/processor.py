# cubemap/processor.py
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional
import logging
import threading
from .cubemap import Cubemap, Face

logger = logging.getLogger(__name__)


class EmptyState:
    """Per-worker state for transforms that need none."""


class ParallelFaceProcessor:
    """
    Runs a row callback over every (face, row) of a cubemap on a thread pool.

    The callback is called as proc(state, y, face, row, dim) where row is a
    writable (dim, 3) view of row y of the face. Rows are disjoint, so the
    callbacks need no locking. Each worker thread gets its own state object
    from state_factory; it is never shared with another worker. The callbacks
    are expected to do their heavy lifting in numba kernels compiled with
    nogil=True, otherwise the pool only interleaves them.
    """
    def __init__(self, max_workers: Optional[int] = None):
        self.max_workers = max_workers

    def process(self, cubemap: Cubemap, proc: Callable, state_factory: Callable = EmptyState,
                reduce: Optional[Callable] = None):
        """
        Process all rows of all faces and wait for completion.

        Args:
            cubemap: Destination cubemap; every face must have an image.
            proc: Row callback, proc(state, y, face, row, dim).
            state_factory: Called once per worker thread to create its state.
            reduce: If given, called once with every worker state after all
                rows are done.
        """
        dim = cubemap.get_dimensions()
        rows = [cubemap.get_image_for_face(face).texels for face in Face]
        local = threading.local()
        states = []
        states_lock = threading.Lock()

        def run(face, y):
            state = getattr(local, "state", None)
            if state is None:
                state = state_factory()
                local.state = state
                with states_lock:
                    states.append(state)
            proc(state, y, face, rows[face][y], dim)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(run, face, y) for face in Face for y in range(dim)]
            # re-raise the first failure once every unit has finished
            for future in futures:
                future.result()

        logger.debug("Processed %d rows of a %dx%d cubemap with %d worker states",
                     len(futures), dim, dim, len(states))
        if reduce is not None:
            for state in states:
                reduce(state)


def process(cubemap: Cubemap, proc: Callable, state_factory: Callable = EmptyState,
            reduce: Optional[Callable] = None, max_workers: Optional[int] = None):
    ParallelFaceProcessor(max_workers).process(cubemap, proc, state_factory, reduce)
