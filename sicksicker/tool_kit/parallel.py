import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List

logger = logging.getLogger(__name__)


def run_parallel_tasks(func: Callable, arg_list: List[Any], max_workers: int = 1) -> List[Any]:
    """
    Calls func on each item of arg_list and returns the results in the same order.

    Tasks run on a thread pool when max_workers > 1. Exceptions raised by a task
    are re-raised here, so tasks are expected to handle their own recoverable errors.
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")

    if max_workers == 1 or len(arg_list) <= 1:
        return [func(arg) for arg in arg_list]

    logger.info("Running %s tasks on %s worker threads", len(arg_list), max_workers)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(func, arg_list))
