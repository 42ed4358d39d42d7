"""Async S3 client wrapper shared by services that write to object storage."""

from contextlib import AsyncExitStack
from typing import Any

from aiobotocore.config import AioConfig
from aiobotocore.session import get_session
from botocore.session import get_session as get_botocore_session

from shared.utils.logging import get_logger

logger = get_logger(__name__)


def validate_region(region: str, endpoint_url: str | None = None) -> None:
    """Check that region is a known S3 region.

    S3-compatible stores behind a custom endpoint accept arbitrary region
    names, so the check is skipped when endpoint_url is set.

    Raises:
        ValueError: If the region is unknown to botocore
    """
    if endpoint_url:
        return

    # Partition data is static; the plain botocore session reads it synchronously
    session = get_botocore_session()
    known: set[str] = set()
    for partition in session.get_available_partitions():
        known.update(session.get_available_regions("s3", partition_name=partition))

    if region not in known:
        raise ValueError(f"Invalid region specified: {region}")


class S3Client:
    """Async S3 client holding one pooled connection for the process lifetime.

    The underlying aiobotocore client is opened by ``start()`` and released by
    ``close()``; between the two it can be shared by any number of concurrent
    requests running on the same event loop.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        public_url: str | None = None,
        max_pool_connections: int = 10,
        retries: int = 3,
    ):
        """Initialize S3 client.

        Args:
            bucket: S3 bucket name
            region: AWS region
            endpoint_url: Custom endpoint (for LocalStack/MinIO)
            access_key: AWS access key (falls back to the default credential chain)
            secret_key: AWS secret key
            public_url: Base URL objects are served from (defaults to the bucket host)
            max_pool_connections: Size of the HTTP connection pool
            retries: Retry attempts after the first failed request
        """
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        # Use fake credentials for LocalStack if endpoint_url is set but no credentials
        self.access_key = access_key or ("test" if endpoint_url else None)
        self.secret_key = secret_key or ("test" if endpoint_url else None)
        self.public_url = (public_url or self._default_public_url()).rstrip("/")
        self.max_pool_connections = max_pool_connections
        self.retries = retries
        self._session = get_session()
        self._exit_stack: AsyncExitStack | None = None
        self._client: Any = None

    def _default_public_url(self) -> str:
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com"

    @property
    def is_started(self) -> bool:
        return self._client is not None

    async def start(self) -> None:
        """Open the pooled client. Calling it twice is a no-op."""
        if self._client is not None:
            return

        config = AioConfig(
            max_pool_connections=self.max_pool_connections,
            retries={"total_max_attempts": self.retries + 1, "mode": "standard"},
        )
        stack = AsyncExitStack()
        self._client = await stack.enter_async_context(
            self._session.create_client(
                "s3",
                region_name=self.region,
                endpoint_url=self.endpoint_url,
                aws_access_key_id=self.access_key,
                aws_secret_access_key=self.secret_key,
                config=config,
            )
        )
        self._exit_stack = stack
        logger.info(
            "s3_client_started",
            bucket=self.bucket,
            region=self.region,
            endpoint_url=self.endpoint_url,
        )

    async def close(self) -> None:
        """Release the pooled client."""
        if self._exit_stack is None:
            return
        stack, self._exit_stack, self._client = self._exit_stack, None, None
        await stack.aclose()
        logger.info("s3_client_closed", bucket=self.bucket)

    async def __aenter__(self) -> "S3Client":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def put_object_bytes(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        acl: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> None:
        """Upload bytes into the configured bucket.

        Args:
            key: S3 object key
            data: Bytes to upload
            content_type: MIME type of the content
            acl: Canned ACL, e.g. "public-read"
            metadata: Optional metadata to store with the object

        Raises:
            RuntimeError: If the client was not started
            botocore.exceptions.ClientError: If S3 rejects the request
            botocore.exceptions.BotoCoreError: On transport failures
        """
        if self._client is None:
            raise RuntimeError("S3 client is not started")

        put_params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": data,
            "ContentType": content_type,
        }
        if acl:
            put_params["ACL"] = acl
        if metadata:
            put_params["Metadata"] = metadata

        await self._client.put_object(**put_params)
        logger.info("s3_upload_complete", bucket=self.bucket, key=key, size_bytes=len(data))

    def object_url(self, key: str) -> str:
        """Public URL of an object in the configured bucket."""
        return f"{self.public_url}/{key}"
