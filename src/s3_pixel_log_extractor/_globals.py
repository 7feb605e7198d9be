import collections

_S3_LOG_FIELDS = (
    "bucket_owner",
    "bucket",
    "timestamp",
    "ip_address",
    "requester",
    "request_id",
    "operation",
    "object_key",
    "request_line",
    "status_code",
    "error_code",
    "bytes_sent",
    "object_size",
    "total_time",
    "turn_around_time",
    "referrer",
    "user_agent",
    "version_id",
    "host_id",
    "signature_version",
    "cipher_suite",
    "authentication_type",
    "host_header",
    "tls_version",
    "access_point_arn",
)
_S3_LOG_SCHEMA_WIDTH = len(_S3_LOG_FIELDS)
_FullLogLine = collections.namedtuple("FullLogLine", _S3_LOG_FIELDS)

_MISSING_FIELD_PLACEHOLDER = "-"

# The first ':' separates the date from the time of day, e.g. '06/Feb/2019:00:00:38 +0000'
_S3_LOG_TIMESTAMP_FORMAT = "%d/%b/%Y %H:%M:%S %z"

# Field delimiters and the closing character expected for each
_FIELD_DELIMITERS = {'"': '"', "[": "]"}
