# config/constants.py

"""Constants shared by the injection engine."""

# Responses eligible for contract tests: lower bound inclusive, upper bound exclusive.
# 300 and 301 fall inside the range alongside 2xx.
SUCCESS_STATUS_RANGE = (200, 302)

JSON_MEDIA_TYPE = "application/json"

DEFAULT_RESPONSE_TIME_MS = 300

HTTP_METHODS = ["get", "put", "post", "delete", "options", "head", "patch", "trace"]

# Formats the Postman JSON schema validator does not know about
UNKNOWN_SCHEMA_FORMATS = ["int32", "int64", "float", "double"]

# Separator between method and path in an operation reference, e.g. "GET::/pets"
PATH_REF_SEPARATOR = "::"

DEFAULT_COLLECTION_SCHEMA = (
    "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
)
