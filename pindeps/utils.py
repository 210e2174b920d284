from concurrent.futures.thread import ThreadPoolExecutor


def parallel_map(function, iterable, max_workers=None):
    """Like map(), but across a thread pool. Results come back in the order of `iterable`."""
    items = list(iterable)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(function, item) for item in items]
        return [future.result() for future in futures]
