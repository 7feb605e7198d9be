import datetime
import importlib.metadata
import pathlib
import traceback

from ._config import S3_PIXEL_LOG_EXTRACTOR_BASE_FOLDER_PATH


def _collect_error(
    *,
    message: str,
    error_type: str,
    task_id: str | None = None,
    exception: BaseException | None = None,
) -> pathlib.Path:
    """
    Append an error report to a dated text file in the base folder for later review.

    Parameters
    ----------
    message : str
        A description of what the run was doing when the error occurred.
    error_type : str
        Tag used in the report file name, such as "fetch", "region", "batch", or "geoip".
    task_id : str, optional
        Identifier of the run that produced the error; reports from one run share a file when given.
    exception : BaseException, optional
        If passed, its type, message, and traceback are written below the message.

    Returns
    -------
    error_collection_file_path : pathlib.Path
        The file the report was appended to.
    """
    errors_folder_path = S3_PIXEL_LOG_EXTRACTOR_BASE_FOLDER_PATH / "errors"
    errors_folder_path.mkdir(exist_ok=True)

    version = importlib.metadata.version(distribution_name="s3_pixel_log_extractor")
    date = datetime.datetime.now().strftime("%y%m%d")
    task_tag = f"_{task_id}" if task_id is not None else ""
    error_collection_file_path = errors_folder_path / f"v{version}_{date}_{error_type}_errors{task_tag}.txt"

    report = message
    if exception is not None:
        formatted_traceback = "".join(traceback.format_exception(exception))
        report += f"\n\n{type(exception).__name__}: {exception}\n\n{formatted_traceback}"

    with open(file=error_collection_file_path, mode="a") as io:
        io.write(f"{report}\n\n")

    return error_collection_file_path
