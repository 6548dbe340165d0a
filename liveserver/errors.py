class LiveServerError(Exception):
    pass


class BusClosed(LiveServerError):
    """The reload bus was torn down."""


class TriggerUnavailable(LiveServerError):
    """The reload signal handler could not be installed."""
