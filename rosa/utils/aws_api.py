import logging
import os
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
)
from pydantic import (
    BaseModel,
    Field,
)

if TYPE_CHECKING:
    from mypy_boto3_sts import STSClient
else:
    STSClient = object

AWS_REGION = "AWS_REGION"


class AWSClientError(Exception):
    pass


class Creator(BaseModel):
    arn: str = Field(..., alias="Arn")
    account_id: str = Field(..., alias="Account")
    user_id: str = Field(..., alias="UserId")


def get_region(region: str | None = None, session: boto3.Session | None = None) -> str:
    """
    Resolves the AWS region from the flag value, then the AWS_REGION
    environment variable, then the default region of the boto3 session.
    """
    if region:
        return region
    if os.environ.get(AWS_REGION):
        return os.environ[AWS_REGION]
    session = session or boto3.Session()
    return session.region_name or ""


class AWSApi:
    def __init__(
        self,
        region: str | None = None,
        session: boto3.Session | None = None,
        sts_client: STSClient | None = None,
    ) -> None:
        try:
            self.session = session or boto3.Session()
            self.region = get_region(region, self.session)
            self.sts = sts_client or self.session.client(
                "sts", region_name=self.region or None
            )
        except (BotoCoreError, ClientError) as e:
            raise AWSClientError(f"Failed to create AWS client: {e}") from e

    def get_creator(self) -> Creator:
        """Return the identity of the caller."""
        try:
            identity = self.sts.get_caller_identity()
        except (BotoCoreError, ClientError) as e:
            raise AWSClientError(f"Failed to get AWS creator: {e}") from e
        creator = Creator(**identity)
        logging.debug(f"AWS creator: {creator.arn}")
        return creator
