from typing import NamedTuple

from botocore.utils import ArnParser, InvalidArnException

LOG_GROUP_ARN_FORMAT = "arn:aws:logs:{region}:{account_id}:log-group:{log_group}:*"


class ClusterArn(NamedTuple):
    partition: str
    service: str
    region: str
    account_id: str
    resource: str


NOT_AN_ARN = None

REQUIRED_ARN_PARTS = ("partition", "service", "region", "account", "resource")

_arn_parser = ArnParser()


def parse_arn(value):
    """
    Split an ARN string into its parts. Anything that does not have the
    arn:<partition>:<service>:<region>:<account_id>:<resource> shape gives NOT_AN_ARN.
    """
    if not isinstance(value, str) or not value.startswith("arn:"):
        return NOT_AN_ARN
    try:
        parts = _arn_parser.parse_arn(value)
    except InvalidArnException:
        return NOT_AN_ARN
    # Every part must be non-empty; region and account go into the log-group ARN.
    if not all(parts[key] for key in REQUIRED_ARN_PARTS):
        return NOT_AN_ARN
    return ClusterArn(
        partition=parts["partition"],
        service=parts["service"],
        region=parts["region"],
        account_id=parts["account"],
        resource=parts["resource"],
    )


def is_arn(value):
    return parse_arn(value) is not NOT_AN_ARN


def compose_log_group_arn(cluster_arn: ClusterArn, log_group: str) -> str:
    return LOG_GROUP_ARN_FORMAT.format(
        region=cluster_arn.region,
        account_id=cluster_arn.account_id,
        log_group=log_group,
    )
