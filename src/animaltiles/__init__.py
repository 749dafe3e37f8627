"""Animal fact tiles: cached, retried, stale-while-revalidate loading."""

__version__ = "0.1.0"
