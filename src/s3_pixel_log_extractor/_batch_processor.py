"""Primary functions for extracting pixel events from a listing of raw S3 log objects."""

import re
import uuid
from typing import IO

import tqdm

from ._error_collection import _collect_error
from ._exceptions import ObjectFetchEmpty
from ._models import _write_json_line
from ._object_store import ObjectStoreProtocol
from ._pixel_event_filter import get_pixel_event
from ._s3_log_line_parser import get_parsed_log_record

_LINE_ENDING_REGEX = re.compile(pattern=r"\r?\n")


def extract_pixel_events(
    *,
    object_store: ObjectStoreProtocol,
    object_keys: list[str],
    pixel_path: str,
    own_ip_address: str | None,
    event_log: IO[str],
    delete_after_processing: bool = True,
    task_id: str | None = None,
) -> dict[str, int]:
    """
    Append the pixel events found in each listed log object to the event log, deleting each object once processed.

    Objects are handled one at a time in listing order. Each qualifying event is flushed as soon as it is found, and
    an object is deleted only after all of its lines were processed, so an interrupted run can only lead to
    duplicated events on the next run, never to lost ones.

    Parameters
    ----------
    object_store : ObjectStoreProtocol
        The bucket holding the raw S3 logs.
    object_keys : list of strings
        The keys of the log objects to process, in the order to process them.
    pixel_path : str
        The path of the tracking pixel, such as '/c.gif'.
    own_ip_address : str or None
        The operator's current IP address; hits from it are excluded.
    event_log : text stream
        Where each event is written as a JSON line; usually the event log opened in append mode.
    delete_after_processing : bool, default: True
        Whether to delete each log object after all of its lines were processed.
        Set to False for a dry run that leaves the bucket untouched.
    task_id : str, optional
        An identifier for the run, used to tag collected errors. Defaults to a random one.

    Returns
    -------
    summary : dict
        The number of objects processed, skipped, and deleted, and the number of events written.

    Raises
    ------
    MalformedLogLine, FieldCountMismatch, InvalidResourceURL
        If any line of an object cannot be parsed. Earlier objects stay processed and deleted; the failing object is
        left in place.
    """
    task_id = task_id or str(uuid.uuid4())[:5]

    summary = {"objects_processed": 0, "objects_skipped": 0, "objects_deleted": 0, "events_written": 0}
    for object_key in tqdm.tqdm(
        iterable=object_keys,
        total=len(object_keys),
        desc="Extracting pixel events from log objects...",
        position=0,
        leave=True,
        disable=len(object_keys) == 0,
    ):
        try:
            raw_s3_log_lines = _fetch_s3_log_object_lines(object_store=object_store, object_key=object_key)
        except ObjectFetchEmpty as exception:
            message = f"Skipping log object '{object_key}' without deleting it."
            _collect_error(message=message, error_type="fetch", task_id=task_id, exception=exception)
            summary["objects_skipped"] += 1
            continue

        for raw_s3_log_line in raw_s3_log_lines:
            parsed_log_record = get_parsed_log_record(raw_s3_log_line=raw_s3_log_line)
            pixel_event = get_pixel_event(
                parsed_log_record=parsed_log_record, pixel_path=pixel_path, own_ip_address=own_ip_address
            )
            if pixel_event is None:
                continue

            _write_json_line(record=pixel_event, io=event_log)
            summary["events_written"] += 1
        summary["objects_processed"] += 1

        if not delete_after_processing:
            continue

        if object_store.delete_object(object_key):
            summary["objects_deleted"] += 1
        else:
            message = f"Deletion of log object '{object_key}' was not accepted; its events may repeat on the next run."
            _collect_error(message=message, error_type="delete", task_id=task_id)

    return summary


def _fetch_s3_log_object_lines(*, object_store: ObjectStoreProtocol, object_key: str) -> list[str]:
    body = object_store.get_object_body(object_key)
    if not body:
        raise ObjectFetchEmpty(f"No content could be retrieved for log object '{object_key}'.")

    return _split_s3_log_object_lines(content=body.decode("utf-8", errors="replace"))


def _split_s3_log_object_lines(*, content: str) -> list[str]:
    """Split the content of a log object into lines, accepting both '\\n' and '\\r\\n' line endings."""
    trimmed_content = content.strip()
    if not trimmed_content:
        return []

    return _LINE_ENDING_REGEX.split(trimmed_content)
