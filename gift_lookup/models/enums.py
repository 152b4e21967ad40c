import enum

class LookupStatus(str, enum.Enum):
    BAD_REQUEST = "bad_request"
    FOUND_WITH_MESSAGE = "found_with_message"
    FOUND_NO_MESSAGE = "found_no_message"
    NOT_FOUND = "not_found"
    UPSTREAM_ERROR = "api_error"
    INTERNAL_ERROR = "server_error"

class DisplayFormat(str, enum.Enum):
    STRUCTURED = "json"
    DISPLAY = "html"
