"""
S3 pixel log extractor
======================

Periodic extraction of tracking-pixel hits from raw S3 server access logs.

Each run lists the access-log objects delivered to a bucket, keeps only the requests for the tracking pixel that
did not come from the operator's own IP address, and appends them as JSON lines to a local event log. Processed log
objects are then deleted from the bucket, and a local geo cache is extended with the location of every IP address
not seen before.

Both local files are append-only:

- The event log may contain duplicate rows if a run is interrupted between writing events and deleting their source
  object; no event is ever lost.
- The geo cache may contain duplicate rows if two runs overlap; readers should deduplicate by IP.
"""

from ._config import (
    DEFAULT_EVENT_LOG_FILE_PATH,
    DEFAULT_GEO_CACHE_FILE_PATH,
    DEFAULT_PIXEL_PATH,
    S3_PIXEL_LOG_EXTRACTOR_BASE_FOLDER_PATH,
)
from ._exceptions import (
    CredentialsUnavailable,
    FieldCountMismatch,
    GeoLookupFailure,
    InvalidResourceURL,
    MalformedLogLine,
    ObjectFetchEmpty,
    RegionDiscoveryFailure,
    S3PixelLogExtractorError,
)
from ._models import GeoRecord, ParsedLogRecord, PixelEvent
from ._buffered_text_reader import BufferedTextReader
from ._s3_log_line_parser import get_parsed_log_record
from ._pixel_event_filter import get_pixel_event
from ._object_store import ObjectStoreProtocol, S3ObjectStore, resolve_region
from ._ip_utils import get_current_ip_address, get_geo_record
from ._batch_processor import extract_pixel_events
from ._geo_cache import load_known_ip_addresses, update_geo_cache

__all__ = [
    "DEFAULT_EVENT_LOG_FILE_PATH",
    "DEFAULT_GEO_CACHE_FILE_PATH",
    "DEFAULT_PIXEL_PATH",
    "S3_PIXEL_LOG_EXTRACTOR_BASE_FOLDER_PATH",
    "S3PixelLogExtractorError",
    "MalformedLogLine",
    "FieldCountMismatch",
    "InvalidResourceURL",
    "ObjectFetchEmpty",
    "GeoLookupFailure",
    "RegionDiscoveryFailure",
    "CredentialsUnavailable",
    "ParsedLogRecord",
    "PixelEvent",
    "GeoRecord",
    "BufferedTextReader",
    "get_parsed_log_record",
    "get_pixel_event",
    "ObjectStoreProtocol",
    "S3ObjectStore",
    "resolve_region",
    "get_current_ip_address",
    "get_geo_record",
    "extract_pixel_events",
    "load_known_ip_addresses",
    "update_geo_cache",
]
