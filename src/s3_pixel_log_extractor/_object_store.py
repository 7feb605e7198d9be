"""Access to the bucket holding the raw S3 logs."""

import subprocess
from abc import ABC, abstractmethod

import boto3
import botocore.exceptions

from ._error_collection import _collect_error
from ._exceptions import CredentialsUnavailable, RegionDiscoveryFailure


class ObjectStoreProtocol(ABC):
    """The operations on a bucket of raw logs that a batch run relies on."""

    @abstractmethod
    def list_object_keys(self, prefix: str = "") -> list[str]:
        """List the keys under a prefix, in listing order; only the first page is returned."""

    @abstractmethod
    def get_object_body(self, object_key: str) -> bytes | None:
        """Retrieve the full content of an object, or None if there is no body to retrieve."""

    @abstractmethod
    def delete_object(self, object_key: str) -> bool:
        """Delete an object, returning whether the deletion was accepted."""


class S3ObjectStore(ObjectStoreProtocol):
    def __init__(self, *, bucket: str, session: boto3.session.Session | None = None, region: str | None = None):
        """
        A single S3 bucket accessed through boto3.

        Parameters
        ----------
        bucket : str
            The name of the bucket the access logs are delivered to.
        session : boto3.session.Session, optional
            The session to create the client from. Defaults to a new session.
        region : str, optional
            The region of the bucket. Defaults to the region configured for the session.
        """
        self.bucket = bucket
        self.session = session or boto3.session.Session()
        self.s3 = self.session.client("s3", region_name=region)

    def list_object_keys(self, prefix: str = "") -> list[str]:
        response = self.s3.list_objects_v2(Bucket=self.bucket, Prefix=prefix)

        return [content["Key"] for content in response.get("Contents", []) if content.get("Key")]

    def get_object_body(self, object_key: str) -> bytes | None:
        try:
            response = self.s3.get_object(Bucket=self.bucket, Key=object_key)
        except self.s3.exceptions.NoSuchKey:
            return None

        body = response.get("Body")
        if body is None:
            return None

        try:
            content = body.read()
        finally:
            body.close()

        return content or None

    def delete_object(self, object_key: str) -> bool:
        response = self.s3.delete_object(Bucket=self.bucket, Key=object_key)
        status_code = response.get("ResponseMetadata", {}).get("HTTPStatusCode", 204)

        return 200 <= status_code < 300


def _get_session_region(*, session: boto3.session.Session) -> str:
    region = session.region_name
    if not region:
        raise RegionDiscoveryFailure("No region is configured for the current boto3 session.")

    return region


def _get_aws_cli_region() -> str:
    """Ask the AWS command line interface for its configured region."""
    try:
        completed_process = subprocess.run(
            ["aws", "configure", "get", "region"], capture_output=True, text=True, check=False
        )
    except FileNotFoundError as exception:
        raise RegionDiscoveryFailure("The `aws` command line interface is not available.") from exception

    region = completed_process.stdout.strip()
    if not region:
        raise RegionDiscoveryFailure("`aws configure get region` did not return a region.")

    return region


def resolve_region(*, region: str | None = None, session: boto3.session.Session | None = None) -> str:
    """
    Determine the region to use for the S3 client.

    An explicit region is returned as is. Otherwise the region configured for the boto3 session is used, falling back
    to `aws configure get region` when the session has none.
    """
    if region:
        return region

    session = session or boto3.session.Session()
    try:
        return _get_session_region(session=session)
    except RegionDiscoveryFailure as exception:
        message = "Falling back to `aws configure get region`."
        _collect_error(message=message, error_type="region", exception=exception)

        return _get_aws_cli_region()


def ensure_credentials_available(*, session: boto3.session.Session) -> None:
    try:
        credentials = session.get_credentials()
    except botocore.exceptions.BotoCoreError as exception:
        raise CredentialsUnavailable(f"Unable to load AWS credentials: {exception}") from exception

    if credentials is None:
        message = (
            "No AWS credentials were found! "
            "Configure them through the environment, the shared credentials file, or an instance profile."
        )
        raise CredentialsUnavailable(message)
