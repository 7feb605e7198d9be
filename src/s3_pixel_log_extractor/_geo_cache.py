"""Maintain the append-only cache of geolocation records for the IP addresses in the event log."""

import json
import pathlib
from collections.abc import Callable, Iterator

import tqdm
from pydantic import validate_call

from ._buffered_text_reader import BufferedTextReader
from ._ip_utils import get_geo_record
from ._models import GeoRecord, _write_json_line


def _iterate_json_lines(*, file_path: pathlib.Path) -> Iterator[dict]:
    for buffer in BufferedTextReader(file_path=file_path):
        for line in buffer:
            if line.strip():
                yield json.loads(line)


def load_known_ip_addresses(*, geo_cache_file_path: str | pathlib.Path) -> set[str]:
    """Load the set of IP addresses that already have a record in the geo cache; empty if there is no cache yet."""
    geo_cache_file_path = pathlib.Path(geo_cache_file_path)
    if not geo_cache_file_path.exists():
        return set()

    return {geo_cache_entry["ip"] for geo_cache_entry in _iterate_json_lines(file_path=geo_cache_file_path)}


@validate_call
def update_geo_cache(
    *,
    event_log_file_path: pathlib.Path,
    geo_cache_file_path: pathlib.Path,
    geo_record_getter: Callable[[str], GeoRecord] = get_geo_record,
) -> int:
    """
    Append a geolocation record to the geo cache for every IP address in the event log that is not yet cached.

    Existing rows of either file are never rewritten. Each IP address is looked up at most once per pass, even if it
    appears many times in the event log.

    Parameters
    ----------
    event_log_file_path : file path
        The event log written by `extract_pixel_events`. Nothing is done if it does not exist.
    geo_cache_file_path : file path
        The geo cache to extend. Created if it does not exist.
    geo_record_getter : callable, optional
        Resolves an IP address to its GeoRecord. Defaults to a lookup against the remote geolocation service.

    Returns
    -------
    number_of_new_geo_records : int
        The number of records appended to the geo cache.

    Raises
    ------
    GeoLookupFailure
        If any lookup fails. Records appended before the failure are kept.
    """
    # The event log must be readable before the geo cache is touched
    try:
        with open(file=event_log_file_path, mode="rb"):
            pass
        event_log_lines = BufferedTextReader(file_path=event_log_file_path)
    except OSError:
        return 0

    known_ip_addresses = load_known_ip_addresses(geo_cache_file_path=geo_cache_file_path)

    number_of_new_geo_records = 0
    with open(file=geo_cache_file_path, mode="a", encoding="utf-8") as geo_cache:
        for buffer in tqdm.tqdm(iterable=event_log_lines, desc="Updating geo cache...", position=0, leave=False):
            for line in buffer:
                if not line.strip():
                    continue

                ip_address = json.loads(line)["ip"]
                if ip_address in known_ip_addresses:
                    continue
                known_ip_addresses.add(ip_address)

                geo_record = geo_record_getter(ip_address)
                _write_json_line(record=geo_record, io=geo_cache)
                number_of_new_geo_records += 1

    return number_of_new_geo_records
