import pathlib

DEFAULT_EVENT_LOG_FILE_PATH = pathlib.Path(".s3-log.json")
DEFAULT_GEO_CACHE_FILE_PATH = pathlib.Path(".s3-log.geoip.json")
DEFAULT_PIXEL_PATH = "/c.gif"

CURRENT_IP_URL = "https://ip.seeip.org/"
GEO_IP_URL_TEMPLATE = "https://ip.seeip.org/geoip/{ip_address}"
REQUEST_TIMEOUT_IN_SECONDS = 30

S3_PIXEL_LOG_EXTRACTOR_BASE_FOLDER_PATH = pathlib.Path.home() / ".s3_pixel_log_extractor"
S3_PIXEL_LOG_EXTRACTOR_BASE_FOLDER_PATH.mkdir(exist_ok=True)
