"""Concurrent fan-out of the ImageProcessor over a batch of images."""

from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .config import PlatformOverride
from .planner import ImageTask, plan_tasks
from .processor import ImageProcessor, RevisionResult
from .reference import ImageReference
from .strategy import PaddingStrategy, parse_strategy


@dataclass(frozen=True)
class BatchResult:
    """Results index-aligned with the input image list."""

    results: List[RevisionResult]

    @property
    def digests(self) -> List[str]:
        return [result.new_digest for result in self.results]

    @property
    def revisions(self) -> List[Optional[str]]:
        """Revision tags by position; None marks 'no revision produced'."""
        return [result.revision_tag for result in self.results]

    def __len__(self) -> int:
        return len(self.results)


class BatchOrchestrator:
    """
    Runs one ImageProcessor call per image in a thread pool.

    Each task carries its input index, and completions are written into a
    pre-sized result list by that index, so repeated repository names and
    out-of-order completion cannot misplace a result. The first failure
    aborts the batch; tags already published for other images are kept.
    """

    def __init__(self, processor: ImageProcessor, max_workers: Optional[int] = None):
        self.processor = processor
        self.max_workers = max_workers

    def process_batch(
        self,
        images: Sequence[Union[str, ImageReference]],
        prior_digests: Optional[Sequence[Optional[str]]] = None,
        strategy: Union[str, PaddingStrategy] = "",
        platform: Optional[PlatformOverride] = None,
    ) -> BatchResult:
        if not isinstance(strategy, PaddingStrategy):
            strategy = parse_strategy(strategy)
        tasks = plan_tasks(images, prior_digests)
        return self.run(tasks, strategy, platform or PlatformOverride())

    def run(
        self, tasks: Sequence[ImageTask], strategy: PaddingStrategy, platform: PlatformOverride
    ) -> BatchResult:
        """Executes planned tasks and returns their results ordered by task index."""
        results: List[Optional[RevisionResult]] = [None] * len(tasks)
        if not tasks:
            return BatchResult(results=[])

        workers = self.max_workers or len(tasks)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(
                    self.processor.process, task.reference, task.prior_digest, strategy, platform
                ): task.index
                for task in tasks
            }
            pending = set(futures)
            while pending:
                done, pending = wait(pending, return_when=FIRST_EXCEPTION)
                for future in done:
                    error = future.exception()
                    if error is not None:
                        for remaining in pending:
                            remaining.cancel()
                        raise error
                    results[futures[future]] = future.result()

        return BatchResult(results=results)
