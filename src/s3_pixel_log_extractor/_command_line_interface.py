"""Call the S3 pixel log extractor from the command line."""

import contextlib
import pathlib
import sys
import uuid

import boto3
import click
import requests
from botocore.exceptions import BotoCoreError, ClientError

from ._batch_processor import extract_pixel_events
from ._config import DEFAULT_EVENT_LOG_FILE_PATH, DEFAULT_GEO_CACHE_FILE_PATH, DEFAULT_PIXEL_PATH
from ._error_collection import _collect_error
from ._exceptions import S3PixelLogExtractorError
from ._geo_cache import update_geo_cache
from ._ip_utils import get_current_ip_address
from ._object_store import S3ObjectStore, ensure_credentials_available, resolve_region


@click.command(name="extract_pixel_logs")
@click.option("--bucket", "-b", help="The bucket the raw S3 access logs are delivered to.", required=True, type=str)
@click.option(
    "--prefix",
    "-p",
    help="Only process log objects whose keys start with this prefix.",
    required=False,
    type=str,
    default="",
)
@click.option(
    "--region",
    "-r",
    help="The region of the bucket. Defaults to the configured region of the AWS session or command line interface.",
    required=False,
    type=str,
    default=None,
)
@click.option(
    "--log_file",
    "-f",
    help="The path of the event log to append pixel events to.",
    required=False,
    type=click.Path(dir_okay=False, writable=True, path_type=pathlib.Path),
    default=DEFAULT_EVENT_LOG_FILE_PATH,
)
@click.option(
    "--geo_cache",
    "-i",
    help="The path of the geolocation cache to extend.",
    required=False,
    type=click.Path(dir_okay=False, writable=True, path_type=pathlib.Path),
    default=DEFAULT_GEO_CACHE_FILE_PATH,
)
@click.option(
    "--pixel",
    "-x",
    help="The request path of the tracking pixel.",
    required=False,
    type=str,
    default=DEFAULT_PIXEL_PATH,
)
@click.option(
    "--list",
    "-l",
    "list_only",
    help="Print pixel events to standard output without deleting any log object or updating the geo cache.",
    is_flag=True,
    default=False,
)
def _extract_pixel_logs_cli(
    bucket: str,
    prefix: str,
    region: str | None,
    log_file: pathlib.Path,
    geo_cache: pathlib.Path,
    pixel: str,
    list_only: bool,
) -> None:
    task_id = str(uuid.uuid4())[:5]
    try:
        session = boto3.session.Session()
        resolved_region = resolve_region(region=region, session=session)
        ensure_credentials_available(session=session)
        object_store = S3ObjectStore(bucket=bucket, session=session, region=resolved_region)

        object_keys = object_store.list_object_keys(prefix=prefix)
        own_ip_address = get_current_ip_address()

        with contextlib.ExitStack() as stack:
            if list_only:
                event_log = sys.stdout
            else:
                event_log = stack.enter_context(open(file=log_file, mode="a", encoding="utf-8"))

            summary = extract_pixel_events(
                object_store=object_store,
                object_keys=object_keys,
                pixel_path=pixel,
                own_ip_address=own_ip_address,
                event_log=event_log,
                delete_after_processing=not list_only,
                task_id=task_id,
            )

        if list_only:
            return None

        number_of_new_geo_records = update_geo_cache(event_log_file_path=log_file, geo_cache_file_path=geo_cache)
    # ValueError and KeyError cover corrupt rows in the event log or geo cache
    except (
        S3PixelLogExtractorError,
        BotoCoreError,
        ClientError,
        requests.RequestException,
        OSError,
        ValueError,
        KeyError,
    ) as exception:
        error_collection_file_path = _collect_error(
            message=f"Extraction from bucket '{bucket}' with prefix '{prefix}' failed.",
            error_type="run",
            task_id=task_id,
            exception=exception,
        )
        raise click.ClickException(f"{exception} (details in {error_collection_file_path})") from exception

    click.echo(
        f"Processed {summary['objects_processed']} log objects ({summary['objects_skipped']} skipped, "
        f"{summary['objects_deleted']} deleted), wrote {summary['events_written']} pixel events, "
        f"and cached {number_of_new_geo_records} new IP locations.",
        err=True,
    )

    return None
