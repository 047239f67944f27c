import logging

import boto3

logger = logging.getLogger(__name__)

# DynamoDB Local accepts any region and any credentials, but boto3 refuses to
# sign a request without them.
LOCAL_REGION = "us-east-1"
LOCAL_CREDENTIALS = {"aws_access_key_id": "local", "aws_secret_access_key": "local"}


def make_client(local_endpoint: str | None = None, region: str | None = None):
    """Return a low-level DynamoDB client, pointed at ``local_endpoint`` when given."""
    session = boto3.Session(region_name=region)

    if not local_endpoint:
        return session.client("dynamodb")

    kwargs: dict = {"endpoint_url": local_endpoint}
    if session.region_name is None:
        kwargs["region_name"] = LOCAL_REGION
    if session.get_credentials() is None:
        logger.debug("dynamodb-tools: no AWS credentials found, using local placeholders")
        kwargs.update(LOCAL_CREDENTIALS)

    logger.debug("dynamodb-tools: connecting to local endpoint %s", local_endpoint)
    return session.client("dynamodb", **kwargs)
