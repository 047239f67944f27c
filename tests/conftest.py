from pathlib import Path

import boto3
import pytest
from moto import mock_aws


REGION = "us-east-1"
FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def aws():
    """Run the test against moto's in-memory DynamoDB."""
    with mock_aws():
        yield


@pytest.fixture
def dynamodb_client(aws):
    """Provide a low-level DynamoDB client backed by moto."""
    return boto3.client("dynamodb", region_name=REGION)


@pytest.fixture
def make_table(dynamodb_client):
    """Create a bare hash-key table directly, bypassing dynamodb-tools."""
    def _make(name: str) -> str:
        dynamodb_client.create_table(
            TableName=name,
            KeySchema=[{"AttributeName": "pk", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "pk", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        return name

    return _make
