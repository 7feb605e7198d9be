"""Errors raised while extracting pixel events from raw S3 logs."""


class S3PixelLogExtractorError(Exception):
    """Base class for all errors raised by `s3_pixel_log_extractor`."""


class MalformedLogLine(S3PixelLogExtractorError, ValueError):
    """A raw S3 log line opened a quote or bracket that was never closed, or carried an unreadable timestamp."""


class FieldCountMismatch(S3PixelLogExtractorError, ValueError):
    """The number of tokens in a raw S3 log line does not match the width of the access-log schema."""


class InvalidResourceURL(S3PixelLogExtractorError, ValueError):
    """The host header and request path of a log line do not form a valid URL."""


class ObjectFetchEmpty(S3PixelLogExtractorError, RuntimeError):
    """The body of a log object could not be retrieved."""


class GeoLookupFailure(S3PixelLogExtractorError, RuntimeError):
    """The remote geolocation service could not resolve an IP address."""


class RegionDiscoveryFailure(S3PixelLogExtractorError, RuntimeError):
    """The AWS region could not be determined from the boto3 session."""


class CredentialsUnavailable(S3PixelLogExtractorError, RuntimeError):
    """No AWS credentials could be found for the current session."""
