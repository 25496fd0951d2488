"""Process pool for building CFGs of many functions"""

from typing import Callable, List, Iterable, TypeVar
from multiprocessing import Pool, cpu_count

T = TypeVar('T')
R = TypeVar('R')


def pool_size(num_workers: int, num_items: int) -> int:
    """Workers worth starting: bounded by the request, the items and the CPUs"""
    return max(1, min(num_workers, num_items, cpu_count()))


def parallel_map(
    func: Callable[[T], R],
    items: Iterable[T],
    num_workers: int = 1,
) -> List[R]:
    """Apply `func` to every item and return the results in input order.

    Each item is one Bril function, and building its CFG is cheap, so a pool
    is only started when more than one worker would get work. Otherwise the
    items run in this process, where `func` need not be picklable and log
    records reach the caller's handlers. Items are dealt to the workers in
    contiguous slices, one slice per worker.
    """
    items_list = list(items)
    workers = pool_size(num_workers, len(items_list))

    if workers == 1:
        return [func(item) for item in items_list]

    chunksize = -(-len(items_list) // workers)
    with Pool(workers) as pool:
        return pool.map(func, items_list, chunksize=chunksize)
