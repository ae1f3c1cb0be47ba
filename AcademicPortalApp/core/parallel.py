"""Run independent backend reads side by side."""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable


def gather(*calls: Callable[[], Any]) -> list[Any]:
    """Run each zero-argument callable concurrently and return results in call order.

    Waits for every call to settle. If any call raised, the first failure (in
    call order) is re-raised after all of them have finished.
    """
    if not calls:
        return []
    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        futures = [pool.submit(call) for call in calls]
    return [f.result() for f in futures]
