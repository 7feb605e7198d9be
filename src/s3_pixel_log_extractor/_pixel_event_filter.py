import urllib.parse

from ._models import ParsedLogRecord, PixelEvent


def get_pixel_event(
    *,
    parsed_log_record: ParsedLogRecord,
    pixel_path: str,
    own_ip_address: str | None,
) -> PixelEvent | None:
    """
    Project a parsed log record onto a pixel event, or return None if it is not a genuine pixel hit.

    A genuine hit requests exactly the pixel path (after percent-decoding) from an IP address other than the
    operator's own, so that test and monitoring traffic is excluded.
    """
    resource_url = parsed_log_record.resource_url

    path = urllib.parse.unquote(resource_url.path or "/")
    if path != pixel_path:
        return None

    if parsed_log_record.ip_address == own_ip_address:
        return None

    params = urllib.parse.parse_qsl(resource_url.query or "", keep_blank_values=True)

    pixel_event = PixelEvent(
        date=parsed_log_record.timestamp,
        ip=parsed_log_record.ip_address,
        params=params,
        referrer=parsed_log_record.referrer,
        ua=parsed_log_record.user_agent,
    )

    return pixel_event
