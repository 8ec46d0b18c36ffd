from datetime import (
    UTC,
    datetime,
    timedelta,
)
from typing import Any

import jwt
from pydantic import (
    BaseModel,
    Field,
)

from rosa.utils.ocm.base import (
    CREATOR_ARN_PROPERTY,
    PRODUCT_ID_ROSA,
    OCMCluster,
    OCMClusterState,
    OCMClusterVersion,
    OCMModelLink,
)

CREATOR_ARN = "arn:aws:iam::123456789012:user/jdoe"


def build_token(typ: str = "Bearer", expires_in: timedelta = timedelta(days=1)) -> str:
    return jwt.encode(
        {
            "typ": typ,
            "exp": int((datetime.now(tz=UTC) + expires_in).timestamp()),
            "username": "jdoe",
            "email": "jdoe@example.com",
        },
        "secret",
        algorithm="HS256",
    )


class OcmUrl(BaseModel):
    name: str | None = None
    uri: str
    method: str = "POST"
    responses: list[Any] = Field(default_factory=list)

    def add_list_response(self, items: list[Any], kind: str | None = None) -> "OcmUrl":
        self.responses.append({
            "kind": f"{kind}List" if kind else "List",
            "items": items,
            "page": 1,
            "size": len(items),
            "total": len(items),
        })
        return self

    def add_response(self, response: Any) -> "OcmUrl":
        self.responses.append(response)
        return self


def build_ocm_cluster(
    name: str,
    state: OCMClusterState = OCMClusterState.READY,
    creator_arn: str = CREATOR_ARN,
    **kwargs: Any,
) -> OCMCluster:
    data: dict[str, Any] = {
        "id": f"{name}_id",
        "external_id": f"{name}_external_id",
        "name": name,
        "display_name": name,
        "state": state,
        "region": OCMModelLink(id="us-east-1"),
        "product": OCMModelLink(id=PRODUCT_ID_ROSA),
        "version": OCMClusterVersion(id="openshift-v4.12.1", raw_id="4.12.1"),
        "properties": {CREATOR_ARN_PROPERTY: creator_arn},
    }
    data.update(kwargs)
    return OCMCluster(**data)


def cluster_json(cluster: OCMCluster) -> dict[str, Any]:
    return cluster.model_dump(mode="json", exclude_none=True)
