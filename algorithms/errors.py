# errors.py
# Exceptions raised by the search algorithms.


class InvalidArgument(ValueError):
    """Raised when a search is called with an absent text or pattern,
    or with a prefix table that was not built for the given pattern."""
