# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# Error codes
NOT_FOUND = "not_found"
MALFORMED_RESPONSE = "malformed_response"
AMBIGUOUS_RESULT = "ambiguous_result"
HTTP_ERROR = "http_error"

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_413 = "http_413"
HTTP_422 = "http_422"
HTTP_429 = "http_429"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"

ALL_HTTP_SUBCODES = {
    HTTP_400,
    HTTP_401,
    HTTP_403,
    HTTP_404,
    HTTP_413,
    HTTP_422,
    HTTP_429,
    HTTP_500,
    HTTP_502,
    HTTP_503,
}

# Record resolution subcodes
RECORD_NOT_FOUND = "record_not_found"
RECORD_MISSING_ID = "record_missing_id"
RECORD_MISSING_FIELDS = "record_missing_fields"
RESPONSE_NOT_JSON = "response_not_json"


def http_subcode(status_code: int) -> str:
    """Return the ``http_<status>`` subcode for a status code."""
    return f"http_{status_code}"
