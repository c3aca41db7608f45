DEFAULT_TIMEOUT = 30.0  # seconds, per request
PAGE_SIZE = 10

# Enter executes the selected request from any panel, not only the list.
ENTER_EXECUTES_ANYWHERE = True

USER_AGENT = "poke/0.1.0"

DEFAULT_LOG_FILENAME = "poke.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
# Transport internals that log every connection step at DEBUG.
QUIET_LOGGERS = ("httpcore",)
