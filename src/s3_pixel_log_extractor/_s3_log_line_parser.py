"""
Primary functions for parsing a single line of a raw S3 log.

The strategy is to...

1) Tokenize the raw line into a list of strings, honoring bare, bracket-delimited, and quote-delimited fields.
2) Construct a FullLogLine object from the tokens. A collections.namedtuple object is used for performance.
   The number of tokens must match the schema exactly; lines are never padded or truncated.
3) Derive a ParsedLogRecord from the FullLogLine. Some of the mapping operations at this step include...
      - Handling the timestamp in memory as a timezone-aware datetime.datetime object.
      - Splitting the request line into the method and the resource.
      - Synthesizing an HTTPS URL from the host header and the resource.
"""

import datetime
from collections.abc import Iterator

import pydantic

from ._exceptions import FieldCountMismatch, InvalidResourceURL, MalformedLogLine
from ._globals import (
    _FIELD_DELIMITERS,
    _MISSING_FIELD_PLACEHOLDER,
    _S3_LOG_SCHEMA_WIDTH,
    _S3_LOG_TIMESTAMP_FORMAT,
    _FullLogLine,
)
from ._models import ParsedLogRecord

_HTTP_URL_ADAPTER = pydantic.TypeAdapter(pydantic.AnyHttpUrl)


def _iterate_s3_log_line_tokens(*, raw_s3_log_line: str) -> Iterator[str]:
    """
    Lazily split a raw S3 log line into its field tokens.

    Quoted and bracketed fields are yielded without their delimiters and may contain spaces.
    The '-' placeholder for missing fields is passed through unchanged.
    """
    remaining = raw_s3_log_line
    while remaining.strip():
        remaining = remaining.lstrip(" ")

        opening_delimiter = remaining[0]
        closing_delimiter = _FIELD_DELIMITERS.get(opening_delimiter)
        if closing_delimiter is None:
            token, _, remaining = remaining.partition(" ")
            yield token
            continue

        closing_index = remaining.find(closing_delimiter, 1)
        if closing_index == -1:
            message = (
                f"Unclosed field starting with `{opening_delimiter}` in raw S3 log line: "
                f"expected a closing `{closing_delimiter}` in '{raw_s3_log_line}'."
            )
            raise MalformedLogLine(message)

        yield remaining[1:closing_index]

        remaining = remaining[closing_index + 1 :]
        if remaining.startswith(" "):
            remaining = remaining[1:]


def _parse_s3_log_line(*, raw_s3_log_line: str) -> list[str]:
    """Tokenize an entire raw S3 log line."""
    return list(_iterate_s3_log_line_tokens(raw_s3_log_line=raw_s3_log_line))


def _get_full_log_line(*, parsed_s3_log_line: list[str]) -> _FullLogLine:
    number_of_parsed_items = len(parsed_s3_log_line)
    if number_of_parsed_items != _S3_LOG_SCHEMA_WIDTH:
        message = (
            f"Unexpected number of parsed items: {number_of_parsed_items} "
            f"(expected {_S3_LOG_SCHEMA_WIDTH}). Parsed line: {parsed_s3_log_line}"
        )
        raise FieldCountMismatch(message)

    return _FullLogLine(*parsed_s3_log_line)


def _parse_timestamp(*, raw_timestamp: str) -> datetime.datetime:
    # Only the first colon separates the date from the time; the rest are time separators
    try:
        return datetime.datetime.strptime(raw_timestamp.replace(":", " ", 1), _S3_LOG_TIMESTAMP_FORMAT)
    except ValueError as exception:
        raise MalformedLogLine(f"Unable to parse timestamp '{raw_timestamp}'.") from exception


def _split_request_line(*, request_line: str) -> tuple[str, str]:
    """Split a request line such as 'GET /c.gif?a=1 HTTP/1.1' into the method and resource."""
    method, _, remainder = request_line.partition(" ")
    resource = remainder.split(" ")[0]
    if not resource.startswith("/"):
        resource = "/" + resource

    return method, resource


def _get_resource_url(*, host: str, resource: str) -> pydantic.AnyHttpUrl:
    raw_url = f"https://{host}{resource}"
    try:
        return _HTTP_URL_ADAPTER.validate_python(raw_url)
    except pydantic.ValidationError as exception:
        raise InvalidResourceURL(f"Unable to form a URL from host '{host}' and resource '{resource}'.") from exception


def get_parsed_log_record(*, raw_s3_log_line: str) -> ParsedLogRecord:
    """
    Tokenize and parse a single raw S3 log line.

    Parameters
    ----------
    raw_s3_log_line : str
        One line of a raw S3 access log, without its line ending.

    Raises
    ------
    MalformedLogLine
        If a quoted or bracketed field is never closed or the timestamp cannot be read.
    FieldCountMismatch
        If the line does not have exactly one token per field of the access-log schema.
    InvalidResourceURL
        If the host header and the requested resource do not form a valid URL.
    """
    parsed_s3_log_line = _parse_s3_log_line(raw_s3_log_line=raw_s3_log_line)
    full_log_line = _get_full_log_line(parsed_s3_log_line=parsed_s3_log_line)

    method, resource = _split_request_line(request_line=full_log_line.request_line)
    referrer = full_log_line.referrer if full_log_line.referrer != _MISSING_FIELD_PLACEHOLDER else None

    parsed_log_record = ParsedLogRecord(
        timestamp=_parse_timestamp(raw_timestamp=full_log_line.timestamp),
        ip_address=full_log_line.ip_address,
        method=method,
        resource_url=_get_resource_url(host=full_log_line.host_header, resource=resource),
        referrer=referrer,
        user_agent=full_log_line.user_agent,
        status_code=full_log_line.status_code,
    )

    return parsed_log_record
