from shop.tasks import FlushCacheTask  # noqa: F401


class Helper:
    pass
