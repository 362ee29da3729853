# app/core/database.py

from typing import Generator

import boto3

from app.core.config import settings


def create_dynamodb_resource():
    """
    Builds the DynamoDB service resource from the configured credentials.
    `DYNAMODB_ENDPOINT_URL` points it at a local DynamoDB when set.
    """
    return boto3.resource(
        "dynamodb",
        region_name=settings.AWS_REGION,
        endpoint_url=settings.DYNAMODB_ENDPOINT_URL,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
    )


# Tables are looked up by name per operation.
dynamodb = create_dynamodb_resource()


def get_db() -> Generator:
    """
    Dependency to get the DynamoDB resource.
    Endpoints pass it to the catalog controllers the way a session is passed.
    """
    yield dynamodb
