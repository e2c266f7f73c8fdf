"""Warning category for problems found while reading color settings."""


class TinctureWarning(UserWarning):
    """Issued when color detection finds a setting it can't make sense of, such as
    `FORCE_COLOR=yes`. Detection carries on with a best guess.

    To silence these:
    >>> import warnings
    >>> warnings.filterwarnings("ignore", category=TinctureWarning)
    """
