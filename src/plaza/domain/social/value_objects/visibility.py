from enum import Enum


class Visibility(str, Enum):
    """Who may read a post."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    FOLLOWERS = "FOLLOWERS"
