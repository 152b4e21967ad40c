# Request-scoped value types
#
# Nothing here is persisted; every record lives for a single lookup request.

from . import enums
from . import lookup
