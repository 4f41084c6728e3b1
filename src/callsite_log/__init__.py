"""callsite-log - single-line leveled logging with caller locations.

Every line carries the level, a UTC timestamp and the ``path:line`` of the
caller, relative to the directory it shares with this package.

Key components:
- facility: the process-wide LogFacility and its get_log() helper
- resolver: call-site resolution from captured stack traces
- middleware: Starlette helper exposing the facility on each request
"""

from callsite_log.facility import LogFacility, get_log
from callsite_log.levels import Level

__version__ = "0.1.0"

__all__ = ["Level", "LogFacility", "get_log", "__version__"]
