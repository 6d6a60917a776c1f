from enum import IntEnum


class ActivityPriority(IntEnum):
    """Syslog severity levels, lower is more severe."""
    EMERG = 0
    ALERT = 1
    CRIT = 2
    ERR = 3
    WARN = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7
